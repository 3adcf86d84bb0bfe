"""Client configuration.

Read from environment variables (prefix ``XRPL_IOU_``) or a local
``.env`` file. Defaults target the XRPL testnet.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings shared by the JSON-RPC client and the lifecycle."""

    model_config = SettingsConfigDict(
        env_prefix="XRPL_IOU_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    rpc_url: str = Field(
        default="https://s.altnet.rippletest.net:51234/",
        min_length=8,
        description="rippled JSON-RPC endpoint.",
    )
    timeout_s: float = Field(
        default=10.0,
        gt=0,
        description="Timeout per RPC call (seconds).",
    )
    poll_interval_s: float = Field(
        default=3.0,
        gt=0,
        description="Delay between verification polls (seconds).",
    )
    fee_drops: int = Field(
        default=13,
        ge=1,
        description="Fixed transaction fee (drops).",
    )
    fee_mult_max: int = Field(
        default=10000,
        ge=1,
        description="Ceiling on how far the signer may scale the fee.",
    )
    ledger_window: int = Field(
        default=3,
        ge=0,
        description="Ledgers of validity after the current one.",
    )
