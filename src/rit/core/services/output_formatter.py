"""Single-line JSON envelopes printed by ``--format json``.

Keys always come in the same order: output_schema_version, success, command,
run_id, root, data and, on failure, error.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from rit.core.services.error_codes import ErrorCode

OUTPUT_SCHEMA_VERSION = "1.0"


def format_envelope(
    *,
    command: str,
    root: str | Path,
    run_id: str,
    data: Optional[Dict[str, Any]] = None,
    error: Optional[Dict[str, Any]] = None,
) -> str:
    envelope: Dict[str, Any] = {
        "output_schema_version": OUTPUT_SCHEMA_VERSION,
        "success": error is None,
        "command": command,
        "run_id": run_id,
        "root": Path(root).resolve().as_posix(),
        "data": data if data is not None else {},
    }
    if error is not None:
        envelope["error"] = error
    return json.dumps(envelope, separators=(",", ":"), default=str, ensure_ascii=False)


def format_error_envelope(
    *,
    command: str,
    root: str | Path,
    run_id: str,
    code: ErrorCode,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> str:
    error: Dict[str, Any] = {"code": code.value, "message": message}
    if details:
        error["details"] = details
    return format_envelope(command=command, root=root, run_id=run_id, error=error)
