from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rit.core.services.error_codes import ErrorCode, RitError


class RitPathEscapeError(RitError):
    """A command path that would resolve outside of its workspace root."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(code=ErrorCode.PATH_ESCAPE, message=message, details=details or {})


def validate_segments(segments: Sequence[str]) -> list[str]:
    """
    Check that a command path is usable as a sequence of directory names.

    A command path must hold at least one segment, and every segment must be a
    non-empty single directory name (no separators, no '.' or '..').

    Raises:
        RitError: code VALIDATION_ERROR, before anything touches the disk.
    """
    if isinstance(segments, str) or not segments:
        raise RitError(
            code=ErrorCode.VALIDATION_ERROR,
            message="Formula path must contain at least one group",
            details={"groups": segments if isinstance(segments, str) else list(segments or [])},
        )

    cleaned: list[str] = []
    for index, segment in enumerate(segments):
        if not isinstance(segment, str) or not segment.strip():
            raise RitError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Formula path segment {index} is empty",
                details={"groups": list(segments), "index": index},
            )
        if segment in (".", "..") or "/" in segment or "\\" in segment:
            raise RitError(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Formula path segment '{segment}' is not a valid group name",
                details={"groups": list(segments), "index": index},
            )
        cleaned.append(segment)
    return cleaned


def ensure_within_root(*, root_dir: Path, segments: Sequence[str]) -> Path:
    """
    Return root_dir joined with segments, refusing paths that leave root_dir.

    Guards against a symlinked group pointing outside the workspace, which
    would otherwise let a deletion remove unrelated directories.

    Raises:
        RitPathEscapeError: code PATH_ESCAPE.
    """
    root_dir = Path(root_dir)
    target_path = root_dir.joinpath(*segments)

    try:
        target_path.resolve().relative_to(root_dir.resolve())
    except ValueError as exc:
        raise RitPathEscapeError(
            message=f"Path '{target_path}' escapes workspace root '{root_dir}'",
            details={"target_path": str(target_path), "root_dir": str(root_dir)},
        ) from exc

    current = root_dir
    for part in segments:
        current = current / part
        if current.is_symlink():
            raise RitPathEscapeError(
                message=f"Path '{target_path}' contains symlink component '{current}'",
                details={
                    "target_path": str(target_path),
                    "symlink_component": str(current),
                    "root_dir": str(root_dir),
                },
            )
    return target_path
