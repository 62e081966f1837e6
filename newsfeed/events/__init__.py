"""Feed events."""

from newsfeed.events.bus import Event, EventBus
from newsfeed.events.events import (
    FeedEvent,
    FeedFetchFailedEvent,
    FeedRefreshFailedEvent,
    FeedUpdatedEvent,
    NotificationLevel,
)

__all__ = [
    "Event",
    "EventBus",
    "FeedEvent",
    "FeedUpdatedEvent",
    "FeedFetchFailedEvent",
    "FeedRefreshFailedEvent",
    "NotificationLevel",
]
