"""
Payment lifecycle: build → sign → submit → verify.

Composes the builder (tx.py), the network boundary (client.py) and the
verification state machine (verification.py) into one forward pipeline.
Each step consumes the previous step's value object; nothing is cached
between runs, so concurrent lifecycles share no state.

Submission is never retried here. Resubmitting a blob whose first
submission may already have been accepted risks a conflicting
transaction on the same Sequence; a caller that wants to retry must
rebuild (fresh Sequence) after confirming the first attempt is dead.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Awaitable, Callable

from xrpl_iou.client import XRPLClient
from xrpl_iou.config import ClientSettings
from xrpl_iou.errors import FINAL_REJECTIONS, ApplicationError, classify_engine_result
from xrpl_iou.models import (
    SignedTransaction,
    SubmissionOutcome,
    UnsignedTransaction,
    VerificationOutcome,
)
from xrpl_iou.tx import DEFAULT_FEE_DROPS, LEDGER_WINDOW, build_payment
from xrpl_iou.verification import DEFAULT_POLL_INTERVAL_S, wait_for_validation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentRequest:
    """What the caller wants to pay. No secrets."""

    sender: str
    destination: str
    issuer: str
    currency_code: str
    amount: int | str | Decimal


@dataclass(frozen=True)
class PaymentReceipt:
    """Every artifact of one lifecycle run.

    Attributes:
        transaction: The unsigned transaction that was signed.
        signed: Signer output (blob + decoded fields).
        submission: Preliminary submission outcome.
        verification: Terminal verification outcome.
    """

    transaction: UnsignedTransaction
    signed: SignedTransaction
    submission: SubmissionOutcome
    verification: VerificationOutcome

    @property
    def tx_hash(self) -> str:
        return self.submission.tx_hash

    @property
    def succeeded(self) -> bool:
        return self.verification.is_success


async def send_payment(
    client: XRPLClient,
    request: PaymentRequest,
    secret: str,
    *,
    settings: ClientSettings | None = None,
    fee_drops: int = DEFAULT_FEE_DROPS,
    ledger_window: int = LEDGER_WINDOW,
    poll_interval: float = DEFAULT_POLL_INTERVAL_S,
    timeout: float | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> PaymentReceipt:
    """Run one payment through the whole lifecycle.

    ``settings``, when given, supplies fee_drops, ledger_window and
    poll_interval in place of the keyword arguments.

    Returns:
        PaymentReceipt whose verification outcome is terminal
        (VALIDATED_SUCCESS, VALIDATED_FAILURE or EXPIRED).

    Raises:
        ApplicationError: The preliminary engine result is one from
            which the transaction never enters a ledger (tem/tef/tel).
        SigningRejected: The signer refused.
        TransportError, DecodeError: From any RPC.
        VerificationTimeout: ``timeout`` ran out before a terminal state.
    """
    if settings is not None:
        fee_drops = settings.fee_drops
        ledger_window = settings.ledger_window
        poll_interval = settings.poll_interval_s

    transaction = await build_payment(
        client,
        request.sender,
        request.destination,
        request.issuer,
        request.currency_code,
        request.amount,
        fee_drops=fee_drops,
        ledger_window=ledger_window,
    )

    signed = await client.sign(transaction, secret)

    submission = await client.submit(signed.tx_blob)
    category = classify_engine_result(submission.engine_result)
    if category in FINAL_REJECTIONS:
        logger.warning(
            "tx %s rejected at submission: %s",
            submission.tx_hash,
            submission.engine_result,
        )
        raise ApplicationError(
            f"submission rejected: {submission.engine_result} "
            f"({submission.engine_result_message})",
            code=submission.engine_result,
            details={"tx_hash": submission.tx_hash, "category": str(category)},
        )

    verification = await wait_for_validation(
        client,
        submission.tx_hash,
        last_ledger_sequence=transaction.last_ledger_sequence,
        poll_interval=poll_interval,
        timeout=timeout,
        sleep=sleep,
    )

    return PaymentReceipt(
        transaction=transaction,
        signed=signed,
        submission=submission,
        verification=verification,
    )
