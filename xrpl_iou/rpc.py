"""
JSON-RPC request envelope for rippled.

Every request is ``{"method": <name>, "params": [<one object>]}``.
Builders here are pure: no I/O, no secrets retained.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from xrpl_iou.models import UnsignedTransaction

# Ceiling on how far the signer may scale the stated fee before refusing.
DEFAULT_FEE_MULT_MAX = 10000

# rippled API version requested for tx lookups.
TX_API_VERSION = 2


class RpcMethod(StrEnum):
    LEDGER_CURRENT = "ledger_current"
    ACCOUNT_INFO = "account_info"
    SIGN = "sign"
    SUBMIT = "submit"
    TX = "tx"


def build_request(method: RpcMethod, params: dict[str, Any] | None = None) -> dict[str, Any]:
    """Wrap params in the single-element JSON-RPC envelope."""
    return {"method": str(method), "params": [params if params is not None else {}]}


def ledger_current_request() -> dict[str, Any]:
    return build_request(RpcMethod.LEDGER_CURRENT)


def account_info_request(account: str) -> dict[str, Any]:
    return build_request(
        RpcMethod.ACCOUNT_INFO,
        {"account": account, "ledger_index": "current", "queue": False},
    )


def sign_request(
    transaction: UnsignedTransaction,
    secret: str,
    *,
    fee_mult_max: int = DEFAULT_FEE_MULT_MAX,
) -> dict[str, Any]:
    """Build a ``sign`` request. The returned dict contains the secret:
    send it and drop it, never log it."""
    return build_request(
        RpcMethod.SIGN,
        {
            "offline": False,
            "secret": secret,
            "tx_json": transaction.to_tx_json(),
            "fee_mult_max": fee_mult_max,
        },
    )


def submit_request(tx_blob: str) -> dict[str, Any]:
    # rippled's JSON-RPC submit takes the blob as {"tx_blob": ...}, not a bare string.
    return build_request(RpcMethod.SUBMIT, {"tx_blob": tx_blob})


def tx_request(tx_hash: str) -> dict[str, Any]:
    return build_request(
        RpcMethod.TX,
        {"transaction": tx_hash, "binary": False, "api_version": TX_API_VERSION},
    )
