"""Event logging for rit commands.

Each event is one line on stderr with a timestamp, the run id, the operation
name and whether it succeeded. stdout is left to command output.

Environment:
    RIT_RUN_ID       reuse a run id instead of generating one per process
    RIT_LOG_FORMAT   ``text`` (default) or ``json``
    RIT_DEBUG=1      also emit per-directory debug events
    RIT_LOG_SILENT=1 drop events, unless RIT_DEBUG=1
"""

import json
import os
import sys
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from rit.core.services.error_codes import ErrorCode, RitError

_current_run_id: Optional[str] = None


def get_run_id() -> str:
    return os.environ.get("RIT_RUN_ID") or str(uuid.uuid4())


def get_current_run_id() -> str:
    """The run id shared by every event and envelope of this process."""
    global _current_run_id
    if _current_run_id is None:
        _current_run_id = get_run_id()
    return _current_run_id


def get_log_format() -> str:
    return os.environ.get("RIT_LOG_FORMAT", "text")


def is_debug_enabled() -> bool:
    return os.environ.get("RIT_DEBUG") == "1"


def is_silenced() -> bool:
    return os.environ.get("RIT_LOG_SILENT") == "1" and not is_debug_enabled()


def log_event(
    operation: str,
    success: bool,
    duration_ms: Optional[float] = None,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    debug: bool = False,
) -> None:
    if is_silenced():
        return

    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "run_id": get_current_run_id(),
        "operation": operation,
        "success": success,
    }
    if debug:
        entry["debug"] = True
    if duration_ms is not None:
        entry["duration_ms"] = round(duration_ms, 2)
    if error_code:
        entry["error_code"] = error_code
    if details:
        entry["details"] = details

    print(_render(entry), file=sys.stderr, flush=True)


def _render(entry: Dict[str, Any]) -> str:
    if get_log_format() == "json":
        return json.dumps(entry, separators=(",", ":"), default=str)

    parts = [f"[{entry['run_id'][:8]}]", entry["timestamp"], entry["operation"]]
    if entry.get("debug"):
        parts.append("[debug]")
    parts.append("OK" if entry["success"] else "FAILED")
    if "duration_ms" in entry:
        parts.append(f"({entry['duration_ms']:.2f}ms)")
    if "error_code" in entry:
        parts.append(f"[{entry['error_code']}]")
    if "details" in entry:
        parts.append(json.dumps(entry["details"], default=str))
    return " ".join(parts)


def log_debug(operation: str, details: Optional[Dict[str, Any]] = None) -> None:
    if is_debug_enabled():
        log_event(operation, True, details=details, debug=True)


@contextmanager
def log_operation(
    operation: str, details: Optional[Dict[str, Any]] = None
) -> Iterator[Dict[str, Any]]:
    """Time the enclosed block and log a single event for it.

    The yielded dict becomes the event's details, so callers can record
    progress (e.g. which tree was already deleted) before a failure.
    """
    context: Dict[str, Any] = dict(details or {})
    start = time.monotonic()
    try:
        yield context
    except Exception as exc:
        code = exc.code if isinstance(exc, RitError) else ErrorCode.UNKNOWN_ERROR
        log_event(
            operation,
            False,
            duration_ms=(time.monotonic() - start) * 1000,
            error_code=code.value,
            details=context,
        )
        raise
    log_event(operation, True, duration_ms=(time.monotonic() - start) * 1000, details=context)
