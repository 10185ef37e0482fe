"""Wallet connect/disconnect toggle route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from fundme.ui.binding import UiBinding
from fundme.ui.routes import get_binding, success

router = APIRouter()


@router.post("/toggle")
async def toggle_wallet(binding: UiBinding = Depends(get_binding)) -> dict[str, Any]:
    """Connect when disconnected, disconnect when connected."""

    await binding.toggle_connection()
    return success(binding.snapshot().model_dump(mode="json"))
