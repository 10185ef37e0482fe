"""Application configuration loading via Pydantic settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from fundme.constants import DEFAULT_CONTRACT_ADDRESS, DEFAULT_RPC_URL
from fundme.lib.formatting import normalize_address


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    rpc_url: str = Field(default=DEFAULT_RPC_URL, alias="RPC_URL")
    contract_address: str = Field(default=DEFAULT_CONTRACT_ADDRESS, alias="CONTRACT_ADDRESS")
    wallet_provider: Literal["rpc", "local", "none"] = Field(default="rpc", alias="WALLET_PROVIDER")
    wallet_private_key: str | None = Field(default=None, alias="WALLET_PRIVATE_KEY")
    notification_sink: Literal["feed", "log"] = Field(default="feed", alias="NOTIFICATION_SINK")
    rpc_timeout_seconds: float = Field(default=10.0, gt=0, alias="RPC_TIMEOUT_SECONDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("rpc_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("contract_address")
    @classmethod
    def checksum_contract_address(cls, value: str) -> str:
        return normalize_address(value)

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.upper()

    def model_post_init(self, __context: Any) -> None:  # pragma: no cover - simple field mutation
        """Treat a blank private key the same as an unset one."""

        if self.wallet_private_key is not None and not self.wallet_private_key.strip():
            self.wallet_private_key = None


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
