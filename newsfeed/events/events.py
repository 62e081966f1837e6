"""Feed notification events."""

from dataclasses import dataclass
from typing import ClassVar, Literal

from newsfeed.events.bus import Event

NotificationLevel = Literal["success", "error"]


@dataclass
class FeedEvent(Event):
    """Base class for user-facing feed notifications."""

    source: str

    level: ClassVar[NotificationLevel] = "success"
    message: ClassVar[str] = ""


@dataclass
class FeedUpdatedEvent(FeedEvent):
    """A notifying snapshot load succeeded."""

    item_count: int

    message: ClassVar[str] = "News updated successfully"


@dataclass
class FeedFetchFailedEvent(FeedEvent):
    """A snapshot load failed."""

    error: str

    level: ClassVar[NotificationLevel] = "error"
    message: ClassVar[str] = "Failed to fetch news"


@dataclass
class FeedRefreshFailedEvent(FeedEvent):
    """The regeneration command failed."""

    error: str

    level: ClassVar[NotificationLevel] = "error"
    message: ClassVar[str] = "Failed to refresh news"
