"""
Value objects for the payment lifecycle.

The lifecycle is a strict forward pipeline:

    UnsignedTransaction → SignedTransaction → SubmissionOutcome
        → VerificationOutcome

Every object is a frozen dataclass, built once by the component that
produces it and never mutated afterwards. An UnsignedTransaction is
single-use: its Sequence and Fee reflect network state at build time,
so a failed submission means rebuilding, not reusing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

PAYMENT = "Payment"


# =========================================================================
# Unsigned transaction
# =========================================================================


@dataclass(frozen=True)
class IssuedAmount:
    """An amount of a non-XRP token.

    Attributes:
        currency: Currency code (3-char ISO-like or 40-char hex).
        value: Decimal value as a string (e.g. "1000", "0.25").
        issuer: r-address of the issuing account.
    """

    currency: str
    value: str
    issuer: str

    def __post_init__(self) -> None:
        if not self.currency:
            raise ValueError("currency must be non-empty")
        if not self.value:
            raise ValueError("value must be non-empty")
        if not self.issuer:
            raise ValueError("issuer must be non-empty")

    def to_dict(self) -> dict[str, str]:
        return {"currency": self.currency, "value": self.value, "issuer": self.issuer}


@dataclass(frozen=True)
class UnsignedTransaction:
    """A fully populated Payment, ready to be signed.

    Attributes:
        account: Sender r-address.
        destination: Recipient r-address.
        deliver_max: Issued amount to deliver.
        fee: Fee in drops, as a decimal string.
        sequence: Account sequence this transaction consumes.
        last_ledger_sequence: Last ledger index in which the transaction
            may be included. None means no expiry.
        transaction_type: Always "Payment".
    """

    account: str
    destination: str
    deliver_max: IssuedAmount
    fee: str
    sequence: int
    last_ledger_sequence: int | None = None
    transaction_type: str = PAYMENT

    def __post_init__(self) -> None:
        if self.transaction_type != PAYMENT:
            raise ValueError(
                f"transaction_type must be {PAYMENT!r}, got: {self.transaction_type!r}"
            )
        if not self.account:
            raise ValueError("account must be non-empty")
        if not self.destination:
            raise ValueError("destination must be non-empty")
        if not self.fee.isdigit():
            raise ValueError(f"fee must be a drops integer string, got: {self.fee!r}")
        if self.sequence < 0:
            raise ValueError(f"sequence must be >= 0, got: {self.sequence}")
        if self.last_ledger_sequence is not None and self.last_ledger_sequence < 0:
            raise ValueError(
                f"last_ledger_sequence must be >= 0, got: {self.last_ledger_sequence}"
            )

    def to_tx_json(self) -> dict[str, Any]:
        """Serialize with the XRPL protocol field names."""
        tx: dict[str, Any] = {
            "TransactionType": self.transaction_type,
            "Account": self.account,
            "Destination": self.destination,
            "DeliverMax": self.deliver_max.to_dict(),
            "Fee": self.fee,
            "Sequence": self.sequence,
        }
        if self.last_ledger_sequence is not None:
            tx["LastLedgerSequence"] = self.last_ledger_sequence
        return tx


# =========================================================================
# Signed transaction
# =========================================================================


@dataclass(frozen=True)
class SignedTransaction:
    """Output of the remote signer.

    Attributes:
        tx_blob: Hex-encoded signed transaction blob, ready for submit.
        tx_json: Decoded view of the signed fields (Flags, SigningPubKey,
            TxnSignature, hash, ...). Never contains the secret.
        status: Status string reported by the signer.
    """

    tx_blob: str
    tx_json: dict[str, Any] = field(default_factory=dict)
    status: str = "success"

    @property
    def tx_hash(self) -> str:
        """Canonical transaction hash computed by the signer."""
        return str(self.tx_json["hash"])


# =========================================================================
# Submission
# =========================================================================


@dataclass(frozen=True)
class SubmissionOutcome:
    """The node's immediate, not-yet-final judgment on a submitted blob.

    ``applied=True`` or ``engine_result == "tesSUCCESS"`` means the node
    put the transaction in its candidate set. It does NOT mean the
    transaction is final — only a validated ledger says that.

    Attributes:
        engine_result: Preliminary engine result code.
        engine_result_message: Human-readable engine message.
        applied: Whether the node applied it to its open ledger.
        tx_hash: Transaction hash from ``result.tx_json.hash``.
        status: JSON-RPC status ("success").
        accepted: Server-reported ``accepted`` flag, or inferred from
            tes/ter engine results when the server omits it.
        validated_ledger_index: Latest validated ledger known to the
            node at submit time, if reported.
    """

    engine_result: str
    engine_result_message: str
    applied: bool
    tx_hash: str
    status: str = "success"
    accepted: bool = False
    validated_ledger_index: int | None = None


# =========================================================================
# Verification
# =========================================================================


class VerificationState(StrEnum):
    PENDING = "PENDING"
    VALIDATED_SUCCESS = "VALIDATED_SUCCESS"
    VALIDATED_FAILURE = "VALIDATED_FAILURE"
    EXPIRED = "EXPIRED"


TERMINAL_STATES = frozenset(
    {
        VerificationState.VALIDATED_SUCCESS,
        VerificationState.VALIDATED_FAILURE,
        VerificationState.EXPIRED,
    }
)


@dataclass(frozen=True)
class VerificationOutcome:
    """Result of one verification poll.

    Attributes:
        tx_hash: Transaction hash that was polled.
        state: Classified lifecycle state.
        validated: Whether the transaction is in a validated ledger.
        ledger_index: Ledger the transaction was observed in. None if
            not found.
        result_code: ``meta.TransactionResult``. None if not found.
        found: False when the node does not know the hash (txnNotFound).
        current_ledger_index: Ledger index used for the expiry check,
            if one was made.
        last_ledger_sequence: The transaction's LastLedgerSequence, if
            the expiry check was made.
    """

    tx_hash: str
    state: VerificationState
    validated: bool = False
    ledger_index: int | None = None
    result_code: str | None = None
    found: bool = True
    current_ledger_index: int | None = None
    last_ledger_sequence: int | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def is_success(self) -> bool:
        return self.state == VerificationState.VALIDATED_SUCCESS

    @property
    def message(self) -> str:
        if self.state == VerificationState.VALIDATED_SUCCESS:
            return (
                "Transaction SUCCESSFUL and VALIDATED in ledger index: "
                f"{self.ledger_index}"
            )
        if self.state == VerificationState.VALIDATED_FAILURE:
            return (
                f"Transaction VALIDATED in ledger index {self.ledger_index} "
                f"but FAILED with code: {self.result_code}"
            )
        if self.state == VerificationState.EXPIRED:
            return (
                f"Transaction EXPIRED: current ledger {self.current_ledger_index} "
                f"passed LastLedgerSequence {self.last_ledger_sequence}"
            )
        if not self.found:
            return "Transaction NOT YET VALIDATED. Not found on the node yet"
        return (
            "Transaction NOT YET VALIDATED. The preliminary result is: "
            f"{self.result_code}"
        )
