"""UI state routes and the shared binding dependency."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from fundme.ui.binding import UiBinding

router = APIRouter()


def get_binding(request: Request) -> UiBinding:
    binding: UiBinding = request.app.state.binding  # type: ignore[attr-defined]
    return binding


def success(data: Any) -> dict[str, Any]:
    """Return canonical success envelope."""

    return {"ok": True, "data": data}


@router.get("/state")
async def read_ui_state(binding: UiBinding = Depends(get_binding)) -> dict[str, Any]:
    """Connection label/style, balance-action flag and in-flight actions."""

    return success(binding.snapshot().model_dump(mode="json"))
