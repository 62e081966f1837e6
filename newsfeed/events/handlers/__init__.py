"""Event handlers for EventBus."""

from typing import Protocol

from newsfeed.events.handlers.notification_handler import NotificationHandler


class EventHandler(Protocol):
    """Protocol for event handlers."""

    async def initialize(self, event_bus) -> None:
        """Initialize handler with event bus."""
        ...


__all__ = [
    "EventHandler",
    "NotificationHandler",
]
