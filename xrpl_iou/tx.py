"""
Payment transaction builder.

Combines caller intent (sender, destination, issued amount) with live
ledger state to produce a fully populated UnsignedTransaction:

    - Sequence = account's current Sequence + 1
    - Fee = fixed policy value (13 drops)
    - LastLedgerSequence = current ledger index + 3

The two reads are issued concurrently. The first failure cancels the
other read and propagates unchanged; the builder never retries.

The fee is a fixed policy, not an estimate. Callers that need dynamic
fees pass ``fee_drops`` explicitly.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal, InvalidOperation

from xrpl_iou.client import XRPLClient
from xrpl_iou.models import IssuedAmount, UnsignedTransaction

logger = logging.getLogger(__name__)

# Fixed fee policy, in drops.
DEFAULT_FEE_DROPS = 13

# Ledgers of validity after the current one (~3 ledger closes).
LEDGER_WINDOW = 3


def fixed_fee(fee_drops: int = DEFAULT_FEE_DROPS) -> str:
    """Render a fixed fee policy value as a drops string.

    Raises:
        ValueError: If fee_drops is not a positive integer.
    """
    if isinstance(fee_drops, bool) or not isinstance(fee_drops, int) or fee_drops <= 0:
        raise ValueError(f"fee_drops must be a positive integer, got: {fee_drops!r}")
    return str(fee_drops)


def format_amount(amount: int | str | Decimal) -> str:
    """Render an issued-currency amount as a plain decimal string.

    Raises:
        ValueError: If the amount is not a finite positive number.
    """
    if isinstance(amount, bool):
        raise ValueError(f"amount must be a number, got: {amount!r}")
    try:
        value = Decimal(amount) if not isinstance(amount, Decimal) else amount
    except InvalidOperation as e:
        raise ValueError(f"amount must be a decimal number, got: {amount!r}") from e
    if not value.is_finite() or value <= 0:
        raise ValueError(f"amount must be positive, got: {amount!r}")
    # Plain notation, no exponent; trailing zeros after the point dropped.
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


async def build_payment(
    client: XRPLClient,
    sender: str,
    destination: str,
    issuer: str,
    currency_code: str,
    amount: int | str | Decimal,
    *,
    fee_drops: int = DEFAULT_FEE_DROPS,
    ledger_window: int = LEDGER_WINDOW,
) -> UnsignedTransaction:
    """Build an unsigned issued-currency Payment from live ledger state.

    Args:
        client: Client used for the ledger index and sequence reads.
        sender: Sender r-address.
        destination: Recipient r-address.
        issuer: Issuer r-address of the currency.
        currency_code: Currency code.
        amount: Amount to deliver.
        fee_drops: Fee policy value in drops.
        ledger_window: Ledgers of validity after the current one.

    Returns:
        UnsignedTransaction, single-use: rebuild after a failed submit
        rather than reusing its Sequence.

    Raises:
        ValueError: On invalid caller input.
        TransportError, DecodeError, ApplicationError: From the reads.
    """
    if not sender:
        raise ValueError("sender must be non-empty")
    if ledger_window < 0:
        raise ValueError(f"ledger_window must be >= 0, got: {ledger_window}")
    fee = fixed_fee(fee_drops)
    deliver_max = IssuedAmount(
        currency=currency_code,
        value=format_amount(amount),
        issuer=issuer,
    )

    try:
        async with asyncio.TaskGroup() as tg:
            ledger_task = tg.create_task(client.current_ledger_index())
            sequence_task = tg.create_task(client.account_sequence(sender))
    except ExceptionGroup as eg:
        # The first failure cancels the other read.
        raise eg.exceptions[0]
    current_ledger = ledger_task.result()
    current_sequence = sequence_task.result()

    tx = UnsignedTransaction(
        account=sender,
        destination=destination,
        deliver_max=deliver_max,
        fee=fee,
        sequence=current_sequence + 1,
        last_ledger_sequence=current_ledger + ledger_window,
    )
    logger.debug(
        "built payment %s -> %s sequence=%d last_ledger=%d",
        sender,
        destination,
        tx.sequence,
        current_ledger + ledger_window,
    )
    return tx
