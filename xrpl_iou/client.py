"""
XRPL client protocol — the network boundary.

Defines the interface that the builder, verifier and lifecycle depend
on, not a concrete implementation. This keeps them testable and keeps
HTTP out of the decision logic.

Concrete implementations:
    - JsonRpcClient (real)
    - FakeClient (tests)

Every method is one RPC round trip. None of them retry.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from xrpl_iou.models import (
    SignedTransaction,
    SubmissionOutcome,
    UnsignedTransaction,
    VerificationOutcome,
)


@runtime_checkable
class XRPLClient(Protocol):
    """Interface for XRPL network operations.

    Methods are async because network I/O is inherently asynchronous.
    """

    async def current_ledger_index(self) -> int:
        """Index of the node's current (open) ledger."""
        ...

    async def account_sequence(self, address: str) -> int:
        """The account's current Sequence, as of the current ledger."""
        ...

    async def sign(self, transaction: UnsignedTransaction, secret: str) -> SignedTransaction:
        """Have the node sign ``transaction`` with ``secret``.

        Raises:
            SigningRejected: The signer refused.
        """
        ...

    async def submit(self, tx_blob: str) -> SubmissionOutcome:
        """Submit a signed blob. The outcome is preliminary only."""
        ...

    async def get_tx(self, tx_hash: str) -> VerificationOutcome:
        """Poll the status of a transaction once."""
        ...
