"""
Canonical JSON serialization.

Sorted keys, no whitespace, UTF-8. Used wherever a decoded body has to
be rendered back to text (error context, redaction) so the same response
always renders the same way.
"""

import json
from typing import Any


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Rules:
    - Keys sorted alphabetically (recursive)
    - No whitespace
    - UTF-8 encoding (no ASCII escapes for non-ASCII chars)
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def redact(obj: Any, secret: str, placeholder: str = "<redacted>") -> Any:
    """Return a copy of a JSON-like object with every occurrence of
    ``secret`` in string values replaced by ``placeholder``."""
    if not secret:
        return obj
    if isinstance(obj, dict):
        return {k: redact(v, secret, placeholder) for k, v in obj.items()}
    if isinstance(obj, list):
        return [redact(v, secret, placeholder) for v in obj]
    if isinstance(obj, str):
        return obj.replace(secret, placeholder)
    return obj
