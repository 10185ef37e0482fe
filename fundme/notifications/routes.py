"""Notification feed routes polled by the page."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from fundme.notifications.sink import NotificationFeed
from fundme.ui.binding import UiBinding
from fundme.ui.routes import get_binding, success

router = APIRouter()


def get_feed(binding: UiBinding = Depends(get_binding)) -> NotificationFeed:
    sink = binding.sink
    if not isinstance(sink, NotificationFeed):
        raise HTTPException(status_code=404, detail="Notification feed disabled")
    return sink


@router.get("")
async def list_notifications(since: int = 0, feed: NotificationFeed = Depends(get_feed)) -> dict[str, Any]:
    items = [item.model_dump(mode="json") for item in feed.recent(since_id=since)]
    return success({"items": items})


@router.post("/{notification_id}/copy")
async def copy_notification(notification_id: int, feed: NotificationFeed = Depends(get_feed)) -> dict[str, Any]:
    """Return the literal transaction hash behind a notification's copy button."""

    try:
        text = feed.copy_text(notification_id)
    except LookupError:
        feed.notify("Could not copy transaction hash.", "warn")
        return {"ok": False, "data": None}
    return success({"text": text})
