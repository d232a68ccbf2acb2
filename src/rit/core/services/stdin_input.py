"""Batch (non-interactive) input for `rit delete formula --stdin`."""

from __future__ import annotations

import json
from typing import IO, Any, Dict

from jsonschema import Draft7Validator

from rit.core.domain.entities import DeleteFormulaRequest
from rit.core.services.error_codes import ErrorCode, RitError

DELETE_FORMULA_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["workspace", "groups"],
    "properties": {
        "workspace": {"type": "string", "pattern": "\\S"},
        "groups": {
            "type": "array",
            "minItems": 1,
            "items": {"type": "string", "pattern": "\\S"},
        },
    },
}

_VALIDATOR = Draft7Validator(DELETE_FORMULA_SCHEMA)


def read_json(stream: IO[str]) -> Any:
    text = stream.read()
    if not text.strip():
        raise RitError(code=ErrorCode.INVALID_INPUT, message="No JSON input received on stdin")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise RitError(
            code=ErrorCode.INVALID_INPUT,
            message="The STDIN inputs weren't informed correctly. Check the JSON used to execute the command.",
            details={"reason": str(exc)},
        ) from exc


def read_delete_request(stream: IO[str]) -> DeleteFormulaRequest:
    payload = read_json(stream)
    errors = sorted(_VALIDATOR.iter_errors(payload), key=str)
    if errors:
        raise RitError(
            code=ErrorCode.INVALID_INPUT,
            message="Invalid delete request: " + "; ".join(e.message for e in errors[:3]),
            details={"errors": [e.message for e in errors]},
        )
    return DeleteFormulaRequest(workspace=payload["workspace"], groups=list(payload["groups"]))
