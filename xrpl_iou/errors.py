"""
Error taxonomy and XRPL engine result classification.

Three failure families surface from every component:

    - TransportError: the HTTP round trip did not complete (DNS, TLS,
      connect refused, timeout, non-2xx status).
    - DecodeError: the node answered, but the body was not JSON or did
      not match the expected response schema. Carries the raw body.
    - ApplicationError: a well-formed response that reports failure
      (status == "error", signer rejection, rejected engine result).

None of the components retry. The caller decides.

XRPL engine result prefixes:
    - tes: success (tesSUCCESS)
    - tec: claimed cost (tecPATH_DRY, tecNO_DST, etc.) — tx included but "failed"
    - tef: local failure (tefPAST_SEQ, etc.) — not forwarded
    - tel: local error (telINSUF_FEE_P, etc.) — not forwarded
    - tem: malformed (temBAD_FEE, etc.) — not forwarded
    - ter: retry (terQUEUED, etc.) — may still succeed

Reference:
    https://xrpl.org/docs/references/protocol/transactions/transaction-results
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

SUCCESS_CODE = "tesSUCCESS"


class XRPLClientError(Exception):
    """Base class for every error raised by this package.

    Attributes:
        message: Human-readable description.
        details: Structured context for diagnostics. Never holds secrets.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransportError(XRPLClientError):
    """The underlying HTTP call did not complete."""


class DecodeError(XRPLClientError):
    """The response body did not match the expected schema.

    Attributes:
        raw_body: The offending body as received (secrets redacted).
    """

    def __init__(
        self,
        message: str,
        *,
        raw_body: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(f"{message}. Body: {raw_body!r}", details=details)
        self.raw_body = raw_body


class ApplicationError(XRPLClientError):
    """The node returned a well-formed but unsuccessful response.

    Attributes:
        code: Node error token (e.g. "actNotFound") or engine result
            code (e.g. "tefPAST_SEQ").
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details=details)
        self.code = code


class SigningRejected(ApplicationError):
    """The remote signer refused to sign the transaction."""


class VerificationTimeout(XRPLClientError):
    """The verification loop ran past its wall-clock deadline."""


# ---------------------------------------------------------------------------
# Engine result → category
# ---------------------------------------------------------------------------


class EngineResultCategory(StrEnum):
    SUCCESS = "SUCCESS"
    CLAIMED_COST = "CLAIMED_COST"
    LOCAL_FAILURE = "LOCAL_FAILURE"
    MALFORMED = "MALFORMED"
    RETRY = "RETRY"
    UNKNOWN = "UNKNOWN"


# Coarse prefix-based mapping. Start small, add precision when needed.
_PREFIX_MAP: dict[str, EngineResultCategory] = {
    "tes": EngineResultCategory.SUCCESS,
    "tec": EngineResultCategory.CLAIMED_COST,
    "tef": EngineResultCategory.LOCAL_FAILURE,
    "tel": EngineResultCategory.LOCAL_FAILURE,
    "tem": EngineResultCategory.MALFORMED,
    "ter": EngineResultCategory.RETRY,
}

# Preliminary results that keep a transaction out of every ledger. A tec
# result is included (fee and Sequence consumed) and must be polled.
FINAL_REJECTIONS = frozenset(
    {
        EngineResultCategory.LOCAL_FAILURE,
        EngineResultCategory.MALFORMED,
    }
)


def classify_engine_result(engine_result: str | None) -> EngineResultCategory:
    """Map an XRPL engine result code to an EngineResultCategory.

    Args:
        engine_result: XRPL engine result string (e.g. "tesSUCCESS",
            "temBAD_FEE"). None means the engine never responded.

    Returns:
        EngineResultCategory. UNKNOWN for unrecognized codes or None.
    """
    if engine_result is None:
        return EngineResultCategory.UNKNOWN

    for prefix, category in _PREFIX_MAP.items():
        if engine_result.startswith(prefix):
            return category

    return EngineResultCategory.UNKNOWN
