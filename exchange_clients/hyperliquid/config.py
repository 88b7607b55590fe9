"""
Configuration management for the Hyperliquid exchange client
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from exchange_clients.hyperliquid.common import (
    DEFAULT_SIGNATURE_CHAIN_ID,
    MAINNET_API_URL,
    TESTNET_API_URL,
)


class Network(str, Enum):
    """Target network. Threaded explicitly through every client."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def chain_name(self) -> str:
        """Value signed into ``hyperliquidChain`` of transfer-class actions."""
        return "Mainnet" if self is Network.MAINNET else "Testnet"

    @property
    def is_mainnet(self) -> bool:
        return self is Network.MAINNET

    @property
    def default_api_url(self) -> str:
        return MAINNET_API_URL if self is Network.MAINNET else TESTNET_API_URL


class HyperliquidSettings(BaseSettings):
    """Client settings loaded from ``HYPERLIQUID_*`` environment variables"""

    network: Network = Network.MAINNET
    base_url: Optional[str] = None
    signature_chain_id: str = DEFAULT_SIGNATURE_CHAIN_ID

    # Credentials
    private_key: Optional[str] = None
    vault_address: Optional[str] = None

    # Transport
    rate_limit_weight_per_minute: int = Field(default=1200, gt=0)
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    max_attempts: int = Field(default=3, ge=1)
    proxy_url: Optional[str] = None

    log_level: str = "INFO"

    @field_validator("network", mode="before")
    @classmethod
    def _normalize_network(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("signature_chain_id")
    @classmethod
    def _validate_chain_id(cls, value: str) -> str:
        try:
            int(value, 16)
        except ValueError:
            raise ValueError(f"signature_chain_id must be a hex string, got {value!r}") from None
        if not value.lower().startswith("0x"):
            raise ValueError(f"signature_chain_id must start with 0x, got {value!r}")
        return value

    @field_validator("base_url", "vault_address", "private_key", "proxy_url", mode="before")
    @classmethod
    def _empty_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def api_url(self) -> str:
        """Explicit ``base_url`` or the network's default endpoint."""
        return (self.base_url or self.network.default_api_url).rstrip("/")

    class Config:
        env_prefix = "HYPERLIQUID_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Allow unrelated entries in a shared .env
