"""
Verification state machine.

States:
    PENDING → VALIDATED_SUCCESS (terminal)
            → VALIDATED_FAILURE (terminal)
            → EXPIRED (terminal)

One poll is classified from ``(validated, result_code)`` alone:

    (True,  "tesSUCCESS") → VALIDATED_SUCCESS
    (True,  other)        → VALIDATED_FAILURE
    (False, any)          → PENDING

Expiry needs one more input, the current ledger index: a transaction
still PENDING once the network has moved past its LastLedgerSequence
can never be included, so it is EXPIRED. A poll that already reports a
closed ledger at or below LastLedgerSequence stays PENDING until that
ledger is validated.

``wait_for_validation()`` owns the loop. It sleeps between polls via an
injectable coroutine so that many lifecycles can wait on one event loop
without blocking each other.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from typing import TYPE_CHECKING, Awaitable, Callable

from xrpl_iou.errors import SUCCESS_CODE, VerificationTimeout
from xrpl_iou.models import VerificationOutcome, VerificationState

if TYPE_CHECKING:
    from xrpl_iou.client import XRPLClient

logger = logging.getLogger(__name__)

# Roughly one ledger close.
DEFAULT_POLL_INTERVAL_S = 3.0


def classify(validated: bool, result_code: str | None) -> VerificationState:
    """Classify one poll. Pure function of its inputs."""
    if not validated:
        return VerificationState.PENDING
    if result_code == SUCCESS_CODE:
        return VerificationState.VALIDATED_SUCCESS
    return VerificationState.VALIDATED_FAILURE


def is_expired(current_ledger_index: int, last_ledger_sequence: int) -> bool:
    """True once the network has moved past the transaction's last valid ledger."""
    return current_ledger_index > last_ledger_sequence


def evaluate(
    outcome: VerificationOutcome,
    current_ledger_index: int,
    last_ledger_sequence: int,
) -> VerificationOutcome:
    """Apply the expiry rule to a poll result.

    Validated outcomes are final and returned as-is. A PENDING outcome
    past its LastLedgerSequence becomes EXPIRED, unless the poll already
    places it in a closed ledger within the window: that ledger may still
    validate.
    """
    if outcome.is_terminal:
        return outcome
    state = outcome.state
    in_window = (
        outcome.ledger_index is not None
        and outcome.ledger_index <= last_ledger_sequence
    )
    if not in_window and is_expired(current_ledger_index, last_ledger_sequence):
        state = VerificationState.EXPIRED
    return dataclasses.replace(
        outcome,
        state=state,
        current_ledger_index=current_ledger_index,
        last_ledger_sequence=last_ledger_sequence,
    )


async def verify_once(
    client: XRPLClient,
    tx_hash: str,
    *,
    last_ledger_sequence: int | None = None,
) -> VerificationOutcome:
    """Poll a transaction once.

    With ``last_ledger_sequence``, a non-terminal poll is followed by a
    ``ledger_current`` read and the expiry rule is applied. The tx poll
    comes first: a transaction validated in the last valid ledger must
    not be reported EXPIRED because the ledger moved on in between.
    """
    outcome = await client.get_tx(tx_hash)
    if last_ledger_sequence is None or outcome.is_terminal:
        return outcome
    current = await client.current_ledger_index()
    return evaluate(outcome, current, last_ledger_sequence)


async def wait_for_validation(
    client: XRPLClient,
    tx_hash: str,
    *,
    last_ledger_sequence: int | None,
    poll_interval: float = DEFAULT_POLL_INTERVAL_S,
    timeout: float | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> VerificationOutcome:
    """Poll until the transaction reaches a terminal state.

    Args:
        client: XRPL client for status queries.
        tx_hash: Hash of the submitted transaction.
        last_ledger_sequence: The transaction's LastLedgerSequence. Once
            the network passes it the loop ends with EXPIRED.
        poll_interval: Seconds between polls.
        timeout: Optional wall-clock deadline in seconds. Required when
            ``last_ledger_sequence`` is None, since nothing else bounds
            the loop.
        sleep: Coroutine used between polls. Inject for tests.
        clock: Monotonic clock. Inject for tests.

    Returns:
        A terminal VerificationOutcome.

    Raises:
        VerificationTimeout: The wall-clock deadline passed first.
        ValueError: Neither a ledger window nor a timeout was given.
    """
    if last_ledger_sequence is None and timeout is None:
        raise ValueError("either last_ledger_sequence or timeout must be set")

    deadline = clock() + timeout if timeout is not None else None
    polls = 0
    while True:
        outcome = await verify_once(
            client, tx_hash, last_ledger_sequence=last_ledger_sequence
        )
        polls += 1
        if outcome.is_terminal:
            log = logger.info if outcome.is_success else logger.warning
            log("tx %s after %d poll(s): %s", tx_hash, polls, outcome.message)
            return outcome

        if deadline is not None and clock() + poll_interval > deadline:
            raise VerificationTimeout(
                f"tx {tx_hash} not validated within {timeout}s",
                details={"tx_hash": tx_hash, "polls": polls, "last_state": str(outcome.state)},
            )

        logger.debug(
            "tx %s pending (%s), polling again in %ss",
            tx_hash,
            outcome.message,
            poll_interval,
        )
        await sleep(poll_interval)
