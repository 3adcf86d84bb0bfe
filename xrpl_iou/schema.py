"""
JSON Schemas for the rippled responses this client consumes.

Only the fields the client reads are constrained; rippled adds many
more and those pass through untouched. Error responses
(``result.status == "error"``) are handled before schema validation.
"""

from __future__ import annotations

from typing import Any, Dict

import jsonschema  # type: ignore[import-untyped]

from xrpl_iou.canonical_json import canonical_json
from xrpl_iou.errors import DecodeError

_UINT = {"type": "integer", "minimum": 0}


def _envelope(result_schema: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "required": ["result"],
        "properties": {"result": result_schema},
    }


LEDGER_CURRENT = _envelope(
    {
        "type": "object",
        "required": ["ledger_current_index"],
        "properties": {
            "ledger_current_index": _UINT,
            "status": {"type": "string"},
        },
    }
)

ACCOUNT_INFO = _envelope(
    {
        "type": "object",
        "required": ["account_data"],
        "properties": {
            "account_data": {
                "type": "object",
                "required": ["Sequence"],
                "properties": {"Sequence": _UINT},
            },
        },
    }
)

SIGN = _envelope(
    {
        "type": "object",
        "required": ["status", "tx_blob", "tx_json"],
        "properties": {
            "status": {"type": "string"},
            "tx_blob": {"type": "string", "minLength": 1},
            "tx_json": {
                "type": "object",
                "required": ["hash"],
                "properties": {"hash": {"type": "string", "minLength": 1}},
            },
        },
    }
)

SUBMIT = {
    "type": "object",
    "required": ["result"],
    "properties": {
        "result": {
            "type": "object",
            "required": [
                "status",
                "engine_result",
                "engine_result_message",
                "applied",
                "tx_json",
            ],
            "properties": {
                "status": {"type": "string"},
                "engine_result": {"type": "string"},
                "engine_result_message": {"type": "string"},
                "applied": {"type": "boolean"},
                "accepted": {"type": "boolean"},
                "tx_json": {
                    "type": "object",
                    "required": ["hash"],
                    "properties": {"hash": {"type": "string", "minLength": 1}},
                },
            },
        },
        "validated_ledger_index": _UINT,
    },
}

TX = _envelope(
    {
        "type": "object",
        "required": ["validated"],
        "properties": {
            "validated": {"type": "boolean"},
            "ledger_index": _UINT,
            "hash": {"type": "string"},
            "meta": {
                "type": "object",
                "required": ["TransactionResult"],
                "properties": {"TransactionResult": {"type": "string"}},
            },
        },
        # Only a validated transaction is guaranteed a ledger and metadata.
        "if": {"properties": {"validated": {"const": True}}},
        "then": {"required": ["ledger_index", "meta"]},
    }
)


def validate(instance: Dict[str, Any], schema: Dict[str, Any], *, what: str) -> None:
    """Validate a decoded response against a schema.

    Raises:
        DecodeError: With the offending body (canonical JSON) attached.
    """
    try:
        jsonschema.validate(instance=instance, schema=schema)
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise DecodeError(
            f"Error while deserializing {what} response at {path}: {e.message}",
            raw_body=canonical_json(instance),
            details={"path": path},
        ) from e
