"""Read-only view of the feed state."""

from typing import Literal

from pydantic import BaseModel

from newsfeed.models.announcement import AnnouncementItem, Identified, item_key
from newsfeed.presentation.formatting import format_last_update, format_timestamp
from newsfeed.services.sync_service import SyncState

DisplayMode = Literal["loading", "empty", "items"]


class ImpactBadge(BaseModel):
    """Impact classification badge."""

    label: str
    severity: Literal["high", "medium"]


class CardKey(BaseModel):
    """Stable card identity.

    ``kind`` keeps an item id and a snapshot position apart even when their
    text coincides.
    """

    kind: Literal["id", "position"]
    value: str


class AnnouncementCard(BaseModel):
    """One rendered announcement."""

    key: CardKey
    position: int
    source: str
    symbol: str
    impact: ImpactBadge | None
    headline: str
    company: str
    time: str


class FeedView(BaseModel):
    """Everything a client needs to draw the feed."""

    mode: DisplayMode
    cards: list[AnnouncementCard]
    count: int
    last_updated: str | None
    is_loading: bool
    is_refreshing: bool
    refresh_enabled: bool
    footer: str | None


def impact_badge(item: AnnouncementItem) -> ImpactBadge | None:
    """Badge for an item, or None when it is unclassified."""
    if not item.has_impact:
        return None
    severity = "high" if item.impact.upper() == "HIGH" else "medium"
    return ImpactBadge(label=item.impact, severity=severity)


def card_key(item: AnnouncementItem, index: int) -> CardKey:
    key = item_key(item, index)
    if isinstance(key, Identified):
        return CardKey(kind="id", value=key.id)
    return CardKey(kind="position", value=str(key.index))


def render_card(item: AnnouncementItem, index: int, timezone: str) -> AnnouncementCard:
    return AnnouncementCard(
        key=card_key(item, index),
        position=index,
        source=item.source,
        symbol=item.symbol,
        impact=impact_badge(item),
        headline=item.headline,
        company=item.company,
        time=format_timestamp(item.timestamp, timezone),
    )


def footer_text(count: int, poll_interval_minutes: float, retention_hours: int) -> str:
    return (
        f"Showing {count} announcements • Auto-refreshes every {poll_interval_minutes:g} minutes "
        f"• {retention_hours}-hour retention"
    )


def render_feed(
    state: SyncState,
    timezone: str = "Asia/Kolkata",
    poll_interval_minutes: float = 20,
    retention_hours: int = 48,
) -> FeedView:
    """Render the current state.

    The loading placeholder takes precedence over the snapshot; an empty
    snapshot renders the empty state. Reading the state never changes it.

    Args:
        state: Feed state to render
        timezone: Timezone for announcement times
        poll_interval_minutes: Poll interval shown in the footer
        retention_hours: Retention shown in the footer

    Returns:
        FeedView for the current state
    """
    items = state.items

    if state.is_loading:
        mode: DisplayMode = "loading"
        cards: list[AnnouncementCard] = []
    elif not items:
        mode = "empty"
        cards = []
    else:
        mode = "items"
        cards = [render_card(item, index, timezone) for index, item in enumerate(items)]

    return FeedView(
        mode=mode,
        cards=cards,
        count=len(items),
        last_updated=format_last_update(state.last_update),
        is_loading=state.is_loading,
        is_refreshing=state.is_refreshing,
        refresh_enabled=not state.is_refreshing,
        footer=footer_text(len(items), poll_interval_minutes, retention_hours) if items else None,
    )
