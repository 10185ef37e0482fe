"""Funding form submission route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from fundme.funding.schemas import FundRequest, FundResult
from fundme.lib.formatting import shorten_hex
from fundme.ui.binding import UiBinding
from fundme.ui.routes import get_binding

router = APIRouter()


@router.post("/submit")
async def submit_funding(payload: FundRequest, binding: UiBinding = Depends(get_binding)) -> dict[str, Any]:
    """Run one funding attempt; failures are reported through the notification feed."""

    tx_hash = await binding.submit_funding(payload.amount)
    result = FundResult(ok=tx_hash is not None, tx_hash=tx_hash, tx_hash_short=shorten_hex(tx_hash) or None)
    return {"ok": result.ok, "data": result.model_dump(mode="json")}
