"""Notification handler turning feed events into toasts."""

from loguru import logger

from newsfeed.events.bus import EventBus
from newsfeed.events.events import FeedEvent
from newsfeed.services.notification_service import NotificationService


class NotificationHandler:
    """Handler recording feed events in the notification history."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize notification handler.

        Args:
            notification_service: Notification service instance
        """
        self.notification_service = notification_service

    async def initialize(self, event_bus: EventBus) -> None:
        """Subscribe to feed events.

        Args:
            event_bus: EventBus instance
        """
        await event_bus.subscribe(FeedEvent, self.on_feed_event)
        logger.info("NotificationHandler initialized")

    async def on_feed_event(self, event: FeedEvent) -> None:
        """Handle a feed event.

        Args:
            event: Any feed notification event
        """
        self.notification_service.notify(
            level=event.level,
            message=event.message,
            created_at=getattr(event, "created_at", None),
        )
