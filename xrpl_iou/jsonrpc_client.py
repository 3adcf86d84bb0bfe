"""
XRPL JSON-RPC client — real network implementation of XRPLClient.

Covers the Ledger State Reader (ledger_current, account_info), the
Signing Client (sign), the Submission Client (submit) and the single
verification poll (tx).

Uses an injectable transport (JsonRpcTransport) so the HTTP layer can be
swapped for test fakes without changing parsing logic.

No retry loops. No secrets retained. The only state is the endpoint URL
and the transport.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from xrpl_iou import rpc
from xrpl_iou.canonical_json import redact
from xrpl_iou.errors import DecodeError, SigningRejected
from xrpl_iou.models import (
    SignedTransaction,
    SubmissionOutcome,
    UnsignedTransaction,
    VerificationOutcome,
)
from xrpl_iou.responses import (
    parse_account_info,
    parse_ledger_current,
    parse_sign,
    parse_submit,
    parse_tx,
)
from xrpl_iou.transport import HttpxTransport, JsonRpcTransport

if TYPE_CHECKING:
    from xrpl_iou.config import ClientSettings

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """XRPL JSON-RPC client implementing the XRPLClient protocol.

    Args:
        url: The rippled JSON-RPC endpoint URL (e.g. "http://localhost:5005").
        transport: Injectable transport for HTTP POST. Defaults to
            HttpxTransport. Pass a FakeTransport for testing.
        fee_mult_max: Ceiling passed to ``sign`` on how far the signer
            may scale the stated fee.
    """

    def __init__(
        self,
        url: str,
        transport: JsonRpcTransport | None = None,
        *,
        fee_mult_max: int = rpc.DEFAULT_FEE_MULT_MAX,
    ) -> None:
        self._url = url
        self._transport = transport or HttpxTransport()
        self._fee_mult_max = fee_mult_max

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: JsonRpcTransport | None = None,
    ) -> JsonRpcClient:
        """Build a client from ClientSettings."""
        return cls(
            settings.rpc_url,
            transport or HttpxTransport(timeout=settings.timeout_s),
            fee_mult_max=settings.fee_mult_max,
        )

    @property
    def url(self) -> str:
        """The JSON-RPC endpoint URL."""
        return self._url

    async def _call(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug("rpc %s -> %s", payload["method"], self._url)
        return await self._transport.post_json(self._url, payload)

    # -----------------------------------------------------------------
    # Ledger state
    # -----------------------------------------------------------------

    async def current_ledger_index(self) -> int:
        """Return the current (open) ledger index."""
        response = await self._call(rpc.ledger_current_request())
        return parse_ledger_current(response)

    async def account_sequence(self, address: str) -> int:
        """Return ``address``'s current Sequence.

        Address syntax is left to the node, which answers malformed
        input with an error response (ApplicationError).
        """
        response = await self._call(rpc.account_info_request(address))
        return parse_account_info(response)

    # -----------------------------------------------------------------
    # Signing
    # -----------------------------------------------------------------

    async def sign(self, transaction: UnsignedTransaction, secret: str) -> SignedTransaction:
        """Sign via the node's ``sign`` method.

        The secret only lives in the outgoing payload. It is scrubbed
        from anything echoed back before the response is parsed, so it
        cannot leak through error messages or DecodeError bodies.

        Raises:
            SigningRejected: The signer answered with a non-success status.
            DecodeError: The response did not match the sign schema.
            TransportError: The round trip did not complete.
        """
        payload = rpc.sign_request(transaction, secret, fee_mult_max=self._fee_mult_max)
        logger.debug(
            "rpc sign -> %s (account=%s sequence=%s)",
            self._url,
            transaction.account,
            transaction.sequence,
        )
        try:
            response = await self._transport.post_json(self._url, payload)
        except DecodeError as e:
            raise DecodeError(
                "Error while deserializing signed transaction response",
                raw_body=redact(e.raw_body, secret),
                details=e.details,
            ) from None

        response = redact(response, secret)
        result = response.get("result")
        if isinstance(result, dict) and result.get("status") not in (None, "success"):
            error = result.get("error") or result.get("status")
            message = result.get("error_message") or error
            logger.warning("signer rejected transaction: %s", error)
            raise SigningRejected(
                f"sign failed: {message}",
                code=error,
                details={"error": error, "error_code": result.get("error_code")},
            )

        signed = parse_sign(response)
        logger.debug("signed tx hash=%s", signed.tx_hash)
        return signed

    # -----------------------------------------------------------------
    # Submission
    # -----------------------------------------------------------------

    async def submit(self, tx_blob: str) -> SubmissionOutcome:
        """Submit a signed blob. The outcome is preliminary only:
        it says the node accepted the blob, not that it is final."""
        response = await self._call(rpc.submit_request(tx_blob))
        outcome = parse_submit(response)
        logger.info(
            "submitted tx %s: %s (%s) applied=%s",
            outcome.tx_hash,
            outcome.engine_result,
            outcome.engine_result_message,
            outcome.applied,
        )
        return outcome

    async def submit_transaction(self, tx_blob: str) -> str:
        """Submit a signed blob and return its transaction hash."""
        outcome = await self.submit(tx_blob)
        return outcome.tx_hash

    # -----------------------------------------------------------------
    # Verification
    # -----------------------------------------------------------------

    async def get_tx(self, tx_hash: str) -> VerificationOutcome:
        """Poll ``tx`` once and classify the result."""
        response = await self._call(rpc.tx_request(tx_hash))
        outcome = parse_tx(response, tx_hash)
        logger.debug("tx %s: %s", tx_hash, outcome.message)
        return outcome
