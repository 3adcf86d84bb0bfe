"""
Tests for send_payment() — build → sign → submit → verify.

All tests use a fake client — no network calls.

Test plan:
- Happy path: receipt carries every artifact, sign sees the built tx,
  submit sees the signed blob, verify polls the submitted hash
- Rejected preliminary result (tem/tef/tel) → ApplicationError, no polling
- ter* and tec* preliminary results still polled
- Expiry: never validated → EXPIRED receipt
- Signing rejection and transport errors propagate, nothing submitted
"""

import pytest

from xrpl_iou.errors import ApplicationError, SigningRejected, TransportError
from xrpl_iou.lifecycle import PaymentReceipt, PaymentRequest, send_payment
from xrpl_iou.models import (
    SignedTransaction,
    SubmissionOutcome,
    UnsignedTransaction,
    VerificationOutcome,
    VerificationState,
)

SENDER = "rwmLkyTwfPe8ZnBY8NDi1HRSze6Z6EPR9M"
DESTINATION = "rcjxkuh2ksXe2Rn2D4693fmAojLCUdVEW"
ISSUER = "rJZnfH9Hbbv2XmwrAeB1pEAbEZEr1sgNtX"
SECRET = "sEdThW676x5bzLAAc8ku5kU8ZRWZNbN"
TX_HASH = "ABC123"
SIGNED_BLOB = "deadbeef" * 8

REQUEST = PaymentRequest(
    sender=SENDER,
    destination=DESTINATION,
    issuer=ISSUER,
    currency_code="USD",
    amount=1000,
)


class FakeClient:
    """Minimal XRPLClient implementation for testing."""

    def __init__(
        self,
        *,
        ledgers: list[int] | None = None,
        sequence: int = 10,
        engine_result: str = "tesSUCCESS",
        tx_outcomes: list[VerificationOutcome] | None = None,
        sign_should_raise: Exception | None = None,
        submit_should_raise: Exception | None = None,
    ) -> None:
        self._ledgers = list(ledgers or [1000])
        self._sequence = sequence
        self._engine_result = engine_result
        self._tx_outcomes = list(tx_outcomes or [_validated()])
        self._sign_should_raise = sign_should_raise
        self._submit_should_raise = submit_should_raise
        self.sign_calls: list[tuple[UnsignedTransaction, str]] = []
        self.submit_calls: list[str] = []
        self.get_tx_calls: list[str] = []

    async def current_ledger_index(self) -> int:
        if len(self._ledgers) > 1:
            return self._ledgers.pop(0)
        return self._ledgers[0]

    async def account_sequence(self, address: str) -> int:
        return self._sequence

    async def sign(self, transaction: UnsignedTransaction, secret: str) -> SignedTransaction:
        self.sign_calls.append((transaction, secret))
        if self._sign_should_raise is not None:
            raise self._sign_should_raise
        return SignedTransaction(
            tx_blob=SIGNED_BLOB,
            tx_json={**transaction.to_tx_json(), "hash": TX_HASH},
        )

    async def submit(self, tx_blob: str) -> SubmissionOutcome:
        self.submit_calls.append(tx_blob)
        if self._submit_should_raise is not None:
            raise self._submit_should_raise
        return SubmissionOutcome(
            engine_result=self._engine_result,
            engine_result_message="preliminary",
            applied=self._engine_result == "tesSUCCESS",
            tx_hash=TX_HASH,
        )

    async def get_tx(self, tx_hash: str) -> VerificationOutcome:
        self.get_tx_calls.append(tx_hash)
        if len(self._tx_outcomes) > 1:
            return self._tx_outcomes.pop(0)
        return self._tx_outcomes[0]


async def _no_sleep(seconds: float) -> None:
    return None


def _pending() -> VerificationOutcome:
    return VerificationOutcome(
        tx_hash=TX_HASH,
        state=VerificationState.PENDING,
        result_code="tesSUCCESS",
    )


def _validated() -> VerificationOutcome:
    return VerificationOutcome(
        tx_hash=TX_HASH,
        state=VerificationState.VALIDATED_SUCCESS,
        validated=True,
        ledger_index=1002,
        result_code="tesSUCCESS",
    )


class TestSendPaymentSuccess:
    @pytest.mark.asyncio
    async def test_receipt_is_success(self) -> None:
        receipt = await send_payment(FakeClient(), REQUEST, SECRET, sleep=_no_sleep)
        assert isinstance(receipt, PaymentReceipt)
        assert receipt.succeeded is True
        assert receipt.tx_hash == TX_HASH
        assert receipt.verification.ledger_index == 1002

    @pytest.mark.asyncio
    async def test_pipeline_threads_values_forward(self) -> None:
        client = FakeClient()
        receipt = await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)

        signed_tx, secret = client.sign_calls[0]
        assert signed_tx is receipt.transaction
        assert secret == SECRET
        assert signed_tx.sequence == 11
        assert signed_tx.last_ledger_sequence == 1003
        assert client.submit_calls == [SIGNED_BLOB]
        assert client.get_tx_calls == [TX_HASH]

    @pytest.mark.asyncio
    async def test_secret_not_in_receipt(self) -> None:
        receipt = await send_payment(FakeClient(), REQUEST, SECRET, sleep=_no_sleep)
        assert SECRET not in repr(receipt)

    @pytest.mark.asyncio
    async def test_ter_result_is_polled(self) -> None:
        client = FakeClient(
            engine_result="terQUEUED",
            tx_outcomes=[_pending(), _pending(), _validated()],
            ledgers=[1000, 1001, 1002],
        )
        receipt = await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)
        assert receipt.succeeded is True
        assert len(client.get_tx_calls) == 3


class TestSendPaymentFailures:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "engine_result", ["temBAD_FEE", "tefPAST_SEQ", "telINSUF_FEE_P"]
    )
    async def test_final_rejection_raises(self, engine_result: str) -> None:
        client = FakeClient(engine_result=engine_result)
        with pytest.raises(ApplicationError) as exc:
            await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)
        assert exc.value.code == engine_result
        assert exc.value.details["tx_hash"] == TX_HASH
        assert client.get_tx_calls == []

    @pytest.mark.asyncio
    async def test_tec_result_is_polled_to_final_state(self) -> None:
        client = FakeClient(
            engine_result="tecPATH_PARTIAL",
            tx_outcomes=[_pending(), _validated()],
            ledgers=[1000, 1001],
        )
        receipt = await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)
        assert receipt.submission.engine_result == "tecPATH_PARTIAL"
        assert receipt.succeeded is True
        assert client.get_tx_calls == [TX_HASH, TX_HASH]

    @pytest.mark.asyncio
    async def test_validated_failure_in_receipt(self) -> None:
        failed = VerificationOutcome(
            tx_hash=TX_HASH,
            state=VerificationState.VALIDATED_FAILURE,
            validated=True,
            ledger_index=1002,
            result_code="tecPATH_DRY",
        )
        receipt = await send_payment(
            FakeClient(tx_outcomes=[failed]), REQUEST, SECRET, sleep=_no_sleep
        )
        assert receipt.succeeded is False
        assert receipt.verification.result_code == "tecPATH_DRY"

    @pytest.mark.asyncio
    async def test_expired_when_never_validated(self) -> None:
        # Build reads 1000 → LastLedgerSequence 1003; polls see 1001..1004.
        client = FakeClient(
            tx_outcomes=[_pending()],
            ledgers=[1000, 1001, 1002, 1003, 1004],
        )
        receipt = await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)
        assert receipt.verification.state == VerificationState.EXPIRED
        assert receipt.succeeded is False
        assert len(client.submit_calls) == 1

    @pytest.mark.asyncio
    async def test_signing_rejected_stops_pipeline(self) -> None:
        client = FakeClient(sign_should_raise=SigningRejected("bad", code="badSecret"))
        with pytest.raises(SigningRejected):
            await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)
        assert client.submit_calls == []

    @pytest.mark.asyncio
    async def test_submit_transport_error_not_retried(self) -> None:
        client = FakeClient(submit_should_raise=TransportError("timed out"))
        with pytest.raises(TransportError):
            await send_payment(client, REQUEST, SECRET, sleep=_no_sleep)
        assert len(client.submit_calls) == 1
        assert client.get_tx_calls == []
