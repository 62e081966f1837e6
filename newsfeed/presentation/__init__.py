"""Presentation adapter: formatting and view rendering."""

from newsfeed.presentation.formatting import format_last_update, format_timestamp, parse_timestamp
from newsfeed.presentation.view import (
    AnnouncementCard,
    CardKey,
    FeedView,
    ImpactBadge,
    card_key,
    render_feed,
)

__all__ = [
    "AnnouncementCard",
    "CardKey",
    "FeedView",
    "ImpactBadge",
    "card_key",
    "format_last_update",
    "format_timestamp",
    "parse_timestamp",
    "render_feed",
]
