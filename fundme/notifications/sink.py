"""Notification sinks: where user-facing info/warn messages end up."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from datetime import UTC, datetime
from typing import Literal, Protocol

from pydantic import BaseModel

from fundme.constants import NOTIFICATION_FEED_SIZE, TOAST_DURATION_MS
from fundme.lib.formatting import shorten_hex
from fundme.lib.logger import get_logger


logger = get_logger(__name__)

Severity = Literal["info", "warn"]


class Notification(BaseModel):
    id: int
    message: str
    severity: Severity
    created_at: datetime
    duration_ms: int = TOAST_DURATION_MS
    copy_text: str | None = None


class NotificationSink(Protocol):
    def notify(self, message: str, severity: Severity = "info") -> None: ...

    def notify_tx_submitted(self, tx_hash: str) -> None: ...


def tx_submitted_message(tx_hash: str) -> str:
    return f"Funding submitted: {shorten_hex(tx_hash)}"


class LoggingNotificationSink:
    """Console fallback used when no renderer is attached."""

    def notify(self, message: str, severity: Severity = "info") -> None:
        if severity == "warn":
            logger.warning(message, extra={"notification": True})
        else:
            logger.info(message, extra={"notification": True})

    def notify_tx_submitted(self, tx_hash: str) -> None:
        logger.info(f"Funding submitted: {tx_hash}", extra={"notification": True, "tx_hash": tx_hash})


class NotificationFeed:
    """Bounded in-memory feed polled by the UI; newest entries last."""

    def __init__(self, maxlen: int = NOTIFICATION_FEED_SIZE) -> None:
        self._lock = threading.Lock()
        self._items: deque[Notification] = deque(maxlen=maxlen)
        self._ids = itertools.count(1)
        self._log = LoggingNotificationSink()

    def notify(self, message: str, severity: Severity = "info") -> None:
        self._append(message, severity)
        self._log.notify(message, severity)

    def notify_tx_submitted(self, tx_hash: str) -> None:
        self._append(tx_submitted_message(tx_hash), "info", copy_text=tx_hash)
        self._log.notify_tx_submitted(tx_hash)

    def recent(self, since_id: int = 0) -> list[Notification]:
        with self._lock:
            return [item for item in self._items if item.id > since_id]

    def copy_text(self, notification_id: int) -> str:
        """Return the literal hash behind a notification's copy affordance."""

        with self._lock:
            match = next(
                (item for item in self._items if item.id == notification_id and item.copy_text),
                None,
            )
        if match is None:
            raise LookupError(f"no copyable notification {notification_id}")
        self.notify("Transaction hash copied.", "info")
        return match.copy_text or ""

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def _append(self, message: str, severity: Severity, *, copy_text: str | None = None) -> Notification:
        with self._lock:
            item = Notification(
                id=next(self._ids),
                message=message,
                severity=severity,
                created_at=datetime.now(tz=UTC),
                copy_text=copy_text,
            )
            self._items.append(item)
        return item


def build_sink(kind: str) -> NotificationSink:
    if kind == "log":
        return LoggingNotificationSink()
    return NotificationFeed()
