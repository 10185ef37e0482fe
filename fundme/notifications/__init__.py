"""User-facing notification sinks."""

from fundme.notifications.sink import (
    LoggingNotificationSink,
    Notification,
    NotificationFeed,
    NotificationSink,
    build_sink,
)

__all__ = ["LoggingNotificationSink", "Notification", "NotificationFeed", "NotificationSink", "build_sink"]
