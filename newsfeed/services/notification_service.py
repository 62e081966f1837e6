"""Notification service keeping the user-facing toast history."""

from collections import deque
from datetime import datetime

from loguru import logger
from pydantic import BaseModel

from newsfeed.events.events import NotificationLevel


class Notification(BaseModel):
    """One user-facing notification."""

    level: NotificationLevel
    message: str
    created_at: datetime


class NotificationService:
    """Bounded in-memory history of notifications, oldest first."""

    def __init__(self, max_history: int) -> None:
        """Initialize notification service.

        Args:
            max_history: Number of notifications kept
        """
        self._history: deque[Notification] = deque(maxlen=max_history)

    def notify(
        self, level: NotificationLevel, message: str, created_at: datetime | None = None
    ) -> Notification:
        """Record a notification.

        Args:
            level: success or error
            message: Text shown to the user
            created_at: Event time, defaults to now

        Returns:
            The stored notification
        """
        notification = Notification(
            level=level, message=message, created_at=created_at or datetime.now()
        )
        self._history.append(notification)

        if level == "error":
            logger.warning(f"Notification: {message}")
        else:
            logger.info(f"Notification: {message}")

        return notification

    def recent(self, limit: int | None = None) -> list[Notification]:
        """Return stored notifications, newest last.

        Args:
            limit: Only return the newest ``limit`` entries

        Returns:
            List of notifications
        """
        items = list(self._history)
        if limit is not None:
            items = items[-limit:] if limit > 0 else []
        return items

    def clear(self) -> None:
        self._history.clear()

