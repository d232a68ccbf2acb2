"""Exit code mapping for the rit CLI (sysexits.h conventions)."""

from __future__ import annotations

import os

from rit.core.services.error_codes import ErrorCode

EX_SUCCESS = 0
EX_USAGE = getattr(os, "EX_USAGE", 64)
EX_DATAERR = getattr(os, "EX_DATAERR", 65)
EX_NOINPUT = getattr(os, "EX_NOINPUT", 66)
EX_CANTCREAT = getattr(os, "EX_CANTCREAT", 73)
EX_IOERR = getattr(os, "EX_IOERR", 74)
EX_NOPERM = getattr(os, "EX_NOPERM", 77)
EX_CONFIG = getattr(os, "EX_CONFIG", 78)


def exit_code_for_error(error_code: ErrorCode) -> int:
    """Map ErrorCode to a process exit code."""
    mapping = {
        ErrorCode.VALIDATION_ERROR: EX_DATAERR,
        ErrorCode.INVALID_INPUT: EX_DATAERR,
        ErrorCode.PATH_ESCAPE: EX_NOPERM,
        ErrorCode.FORMULA_NOT_FOUND: EX_NOINPUT,
        ErrorCode.IO_ERROR: EX_IOERR,
        ErrorCode.PROMPT_ERROR: EX_USAGE,
        ErrorCode.WORKSPACE_ERROR: EX_NOINPUT,
        ErrorCode.TREE_ERROR: EX_CANTCREAT,
        ErrorCode.CONFIG_INVALID: EX_CONFIG,
        ErrorCode.UNKNOWN_ERROR: EX_DATAERR,
    }
    return mapping.get(error_code, EX_DATAERR)
