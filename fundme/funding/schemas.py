"""Pydantic schemas for funding attempts."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fundme.errors import InvalidAmountReason


class AmountInput(BaseModel):
    """Outcome of validating one user-entered amount."""

    raw: str
    ok: bool
    value: int | None = None
    reason: InvalidAmountReason | None = None

    @classmethod
    def rejected(cls, raw: str, reason: InvalidAmountReason) -> "AmountInput":
        return cls(raw=raw, ok=False, reason=reason)


class FundRequest(BaseModel):
    """Payload from the funding form."""

    amount: str = Field(default="", max_length=128)


class FundResult(BaseModel):
    ok: bool
    tx_hash: str | None = None
    tx_hash_short: str | None = None
