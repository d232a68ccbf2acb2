"""Error codes and exception handling for the rit CLI.

This module defines the CLI-wide ErrorCode enum and the RitError exception
class. Codes are grouped by where the failure originates: the user's input,
the filesystem, or one of the collaborators (prompts, workspace registry,
tree generator).
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """CLI-wide error code enumeration.

    Categories:
        Input: VALIDATION_ERROR, INVALID_INPUT, PATH_ESCAPE
        Lookup: FORMULA_NOT_FOUND
        Filesystem: IO_ERROR
        Collaborators: PROMPT_ERROR, WORKSPACE_ERROR, TREE_ERROR, CONFIG_INVALID
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    PATH_ESCAPE = "PATH_ESCAPE"
    FORMULA_NOT_FOUND = "FORMULA_NOT_FOUND"
    IO_ERROR = "IO_ERROR"
    PROMPT_ERROR = "PROMPT_ERROR"
    WORKSPACE_ERROR = "WORKSPACE_ERROR"
    TREE_ERROR = "TREE_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RitError(Exception):
    """Base exception for rit CLI errors.

    Wraps an ErrorCode with a human-readable message and optional structured
    details for machine-parseable error responses.

    Attributes:
        code: The ErrorCode enum value for this error.
        message: Human-readable error description.
        details: Optional dictionary of additional structured context.

    Example:
        >>> error = RitError(
        ...     code=ErrorCode.FORMULA_NOT_FOUND,
        ...     message="Could not find formula",
        ...     details={"workspace": "/home/user/ritchie-formulas-local"}
        ... )
        >>> error.code
        <ErrorCode.FORMULA_NOT_FOUND: 'FORMULA_NOT_FOUND'>
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def __repr__(self) -> str:
        """Return a developer-friendly representation of the error."""
        return f"RitError(code={self.code.value!r}, message={self.message!r}, details={self.details!r})"


def io_error(exc: OSError, operation: str) -> RitError:
    """Wrap a filesystem failure, keeping the OS message verbatim."""
    details: Dict[str, Any] = {"operation": operation}
    if exc.filename is not None:
        details["path"] = str(exc.filename)
    if exc.errno is not None:
        details["errno"] = exc.errno
    return RitError(code=ErrorCode.IO_ERROR, message=str(exc), details=details)
