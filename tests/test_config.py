"""Tests for ClientSettings, JsonRpcClient.from_settings and send_payment(settings=...)."""

import pytest
from pydantic import ValidationError

from xrpl_iou.config import ClientSettings
from xrpl_iou.jsonrpc_client import JsonRpcClient
from xrpl_iou.lifecycle import PaymentRequest, send_payment
from xrpl_iou.models import (
    SignedTransaction,
    SubmissionOutcome,
    UnsignedTransaction,
    VerificationOutcome,
    VerificationState,
)
from xrpl_iou.transport import HttpxTransport


class TestClientSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir("/")
        settings = ClientSettings()
        assert settings.timeout_s == 10.0
        assert settings.poll_interval_s == 3.0
        assert settings.fee_drops == 13
        assert settings.fee_mult_max == 10000
        assert settings.ledger_window == 3
        assert settings.rpc_url.startswith("https://")

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XRPL_IOU_RPC_URL", "http://localhost:5005")
        monkeypatch.setenv("XRPL_IOU_TIMEOUT_S", "2.5")
        settings = ClientSettings()
        assert settings.rpc_url == "http://localhost:5005"
        assert settings.timeout_s == 2.5

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            ClientSettings(timeout_s=0)


class TestFromSettings:
    def test_builds_client(self) -> None:
        settings = ClientSettings(rpc_url="http://localhost:5005", timeout_s=4.0)
        client = JsonRpcClient.from_settings(settings)
        assert client.url == "http://localhost:5005"
        assert isinstance(client._transport, HttpxTransport)
        assert client._transport.timeout == 4.0
        assert client._fee_mult_max == 10000


class SettingsClient:
    """XRPLClient that validates on the second poll."""

    def __init__(self) -> None:
        self.polls = 0

    async def current_ledger_index(self) -> int:
        return 1000

    async def account_sequence(self, address: str) -> int:
        return 10

    async def sign(self, transaction: UnsignedTransaction, secret: str) -> SignedTransaction:
        return SignedTransaction(
            tx_blob="ab" * 16,
            tx_json={**transaction.to_tx_json(), "hash": "H"},
        )

    async def submit(self, tx_blob: str) -> SubmissionOutcome:
        return SubmissionOutcome(
            engine_result="tesSUCCESS",
            engine_result_message="ok",
            applied=True,
            tx_hash="H",
        )

    async def get_tx(self, tx_hash: str) -> VerificationOutcome:
        self.polls += 1
        if self.polls < 2:
            return VerificationOutcome(tx_hash=tx_hash, state=VerificationState.PENDING)
        return VerificationOutcome(
            tx_hash=tx_hash,
            state=VerificationState.VALIDATED_SUCCESS,
            validated=True,
            ledger_index=1001,
            result_code="tesSUCCESS",
        )


class TestSendPaymentSettings:
    @pytest.mark.asyncio
    async def test_settings_feed_lifecycle(self) -> None:
        settings = ClientSettings(fee_drops=20, ledger_window=5, poll_interval_s=0.5)
        sleeps: list[float] = []

        async def record_sleep(seconds: float) -> None:
            sleeps.append(seconds)

        receipt = await send_payment(
            SettingsClient(),
            PaymentRequest(
                sender="rSender",
                destination="rDestination",
                issuer="rIssuer",
                currency_code="USD",
                amount=5,
            ),
            "sSecret",
            settings=settings,
            sleep=record_sleep,
        )
        assert receipt.transaction.fee == "20"
        assert receipt.transaction.last_ledger_sequence == 1005
        assert sleeps == [0.5]
        assert receipt.succeeded is True
