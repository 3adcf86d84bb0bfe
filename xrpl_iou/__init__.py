"""
XRPL issued-currency payment client.

Public API:

    Pure layer (no I/O):
        - ``UnsignedTransaction``, ``IssuedAmount`` — the Payment to sign.
        - ``classify()`` — (validated, result_code) → VerificationState.
        - ``evaluate()`` — apply the LastLedgerSequence expiry rule.
        - ``classify_engine_result()`` — engine result → category.

    Impure layer (network I/O):
        - ``build_payment()`` — auto-fill Sequence, Fee, LastLedgerSequence.
        - ``verify_once()`` / ``wait_for_validation()`` — poll to terminal.
        - ``send_payment()`` — build → sign → submit → verify.

    Protocols (for dependency injection):
        - ``XRPLClient`` — network boundary.
        - ``JsonRpcTransport`` — HTTP boundary.

    Concrete client:
        - ``JsonRpcClient`` — JSON-RPC implementation of XRPLClient.
        - ``HttpxTransport`` — default httpx-based transport.
"""

from xrpl_iou.client import XRPLClient
from xrpl_iou.config import ClientSettings
from xrpl_iou.errors import (
    SUCCESS_CODE,
    ApplicationError,
    DecodeError,
    EngineResultCategory,
    SigningRejected,
    TransportError,
    VerificationTimeout,
    XRPLClientError,
    classify_engine_result,
)
from xrpl_iou.jsonrpc_client import JsonRpcClient
from xrpl_iou.lifecycle import PaymentReceipt, PaymentRequest, send_payment
from xrpl_iou.models import (
    IssuedAmount,
    SignedTransaction,
    SubmissionOutcome,
    UnsignedTransaction,
    VerificationOutcome,
    VerificationState,
)
from xrpl_iou.transport import HttpxTransport, JsonRpcTransport
from xrpl_iou.tx import DEFAULT_FEE_DROPS, LEDGER_WINDOW, build_payment
from xrpl_iou.verification import classify, evaluate, verify_once, wait_for_validation

__version__ = "0.1.0"

__all__ = [
    "ApplicationError",
    "ClientSettings",
    "DEFAULT_FEE_DROPS",
    "DecodeError",
    "EngineResultCategory",
    "HttpxTransport",
    "IssuedAmount",
    "JsonRpcClient",
    "JsonRpcTransport",
    "LEDGER_WINDOW",
    "PaymentReceipt",
    "PaymentRequest",
    "SUCCESS_CODE",
    "SignedTransaction",
    "SigningRejected",
    "SubmissionOutcome",
    "TransportError",
    "UnsignedTransaction",
    "VerificationOutcome",
    "VerificationState",
    "VerificationTimeout",
    "XRPLClient",
    "XRPLClientError",
    "build_payment",
    "classify",
    "classify_engine_result",
    "evaluate",
    "send_payment",
    "verify_once",
    "wait_for_validation",
]
