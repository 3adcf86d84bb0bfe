"""
Response parsing (pure functions, no I/O).

Each parser takes the decoded JSON-RPC response dict and returns a value
object or a plain value. Targets rippled JSON-RPC conventions:

    - Successful responses: {"result": {"status": "success", ...}}
    - Error responses: {"result": {"status": "error", "error": "...", ...}}

Error responses become ApplicationError. Responses missing required
fields become DecodeError carrying the body.
"""

from __future__ import annotations

from typing import Any

from xrpl_iou import schema
from xrpl_iou.canonical_json import canonical_json
from xrpl_iou.errors import (
    ApplicationError,
    DecodeError,
    EngineResultCategory,
    classify_engine_result,
)
from xrpl_iou.models import (
    SignedTransaction,
    SubmissionOutcome,
    VerificationOutcome,
    VerificationState,
)
from xrpl_iou.verification import classify

TXN_NOT_FOUND = "txnNotFound"


def _result(response: dict[str, Any], what: str) -> dict[str, Any]:
    result = response.get("result")
    if not isinstance(result, dict):
        raise DecodeError(
            f"Error while deserializing {what} response: missing result object",
            raw_body=canonical_json(response),
        )
    return result


def _raise_if_error(result: dict[str, Any], what: str) -> None:
    """Turn a rippled error response into ApplicationError."""
    if result.get("status") != "error":
        return
    error = result.get("error") or "unknown"
    message = result.get("error_message") or error
    raise ApplicationError(
        f"{what} failed: {message}",
        code=error,
        details={"error": error, "error_code": result.get("error_code")},
    )


def parse_ledger_current(response: dict[str, Any]) -> int:
    _raise_if_error(_result(response, "current ledger"), "ledger_current")
    schema.validate(response, schema.LEDGER_CURRENT, what="current ledger")
    return int(response["result"]["ledger_current_index"])


def parse_account_info(response: dict[str, Any]) -> int:
    """Return the account's current Sequence."""
    _raise_if_error(_result(response, "account info"), "account_info")
    schema.validate(response, schema.ACCOUNT_INFO, what="account info")
    return int(response["result"]["account_data"]["Sequence"])


def parse_sign(response: dict[str, Any]) -> SignedTransaction:
    """Parse a ``sign`` response.

    Callers must redact the secret from ``response`` before calling:
    rippled echoes the request (secret included) in error responses.
    """
    _raise_if_error(_result(response, "signed transaction"), "sign")
    schema.validate(response, schema.SIGN, what="signed transaction")
    result = response["result"]
    return SignedTransaction(
        tx_blob=result["tx_blob"],
        tx_json=dict(result["tx_json"]),
        status=result["status"],
    )


def parse_submit(response: dict[str, Any]) -> SubmissionOutcome:
    """Parse a ``submit`` response into a preliminary outcome.

    A rejecting engine result is still a parsed outcome, not an error:
    the caller decides what a preliminary rejection means.
    """
    _raise_if_error(_result(response, "submit"), "submit")
    schema.validate(response, schema.SUBMIT, what="submit")
    result = response["result"]
    engine_result = result["engine_result"]

    # Some server versions don't include "accepted" —
    # fall back to engine_result prefix
    accepted = result.get("accepted")
    if accepted is None:
        accepted = classify_engine_result(engine_result) in (
            EngineResultCategory.SUCCESS,
            EngineResultCategory.RETRY,
        )

    validated_ledger_index = response.get("validated_ledger_index")
    if validated_ledger_index is None:
        validated_ledger_index = result.get("validated_ledger_index")

    return SubmissionOutcome(
        engine_result=engine_result,
        engine_result_message=result["engine_result_message"],
        applied=result["applied"],
        tx_hash=result["tx_json"]["hash"],
        status=result["status"],
        accepted=bool(accepted),
        validated_ledger_index=validated_ledger_index,
    )


def parse_tx(response: dict[str, Any], tx_hash: str) -> VerificationOutcome:
    """Parse a ``tx`` response into a single-poll VerificationOutcome.

    ``txnNotFound`` is not an error: the node may simply not have seen
    the transaction yet, so the outcome is PENDING with found=False.
    """
    result = _result(response, "verification")
    if result.get("status") == "error" and result.get("error") == TXN_NOT_FOUND:
        return VerificationOutcome(
            tx_hash=tx_hash,
            state=VerificationState.PENDING,
            found=False,
        )
    _raise_if_error(result, "tx")
    schema.validate(response, schema.TX, what="verification")

    validated = result["validated"]
    result_code = result.get("meta", {}).get("TransactionResult")
    return VerificationOutcome(
        tx_hash=result.get("hash", tx_hash),
        state=classify(validated, result_code),
        validated=validated,
        ledger_index=result.get("ledger_index"),
        result_code=result_code,
    )
