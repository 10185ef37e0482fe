"""Contract balance route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from fundme.ui.binding import UiBinding
from fundme.ui.routes import get_binding

router = APIRouter()


@router.post("/show")
async def show_balance(binding: UiBinding = Depends(get_binding)) -> dict[str, Any]:
    report = await binding.show_balance()
    if report is None:
        return {"ok": False, "data": None}
    return {"ok": True, "data": report.model_dump(mode="json")}
