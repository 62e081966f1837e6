"""Domain models."""

from newsfeed.models.announcement import (
    AnnouncementItem,
    Identified,
    ItemKey,
    Positional,
    Snapshot,
    item_key,
    snapshot_adapter,
)

__all__ = [
    "AnnouncementItem",
    "Identified",
    "ItemKey",
    "Positional",
    "Snapshot",
    "item_key",
    "snapshot_adapter",
]
