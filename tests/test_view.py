"""Test feed rendering."""

from datetime import datetime

from fakes import make_item

from newsfeed.models import Identified, Positional, item_key
from newsfeed.presentation import CardKey, render_feed
from newsfeed.services import SyncState


def state_with(items, loaded_at=datetime(2026, 10, 18, 10, 15), epoch=1) -> SyncState:
    state = SyncState()
    state.replace_snapshot(items, loaded_at, epoch)
    return state


def test_rendering_is_idempotent():
    """Test re-rendering a fixed snapshot yields the same view and leaves state alone."""
    items = [make_item(1), make_item(2, impact=None), make_item(3, id=None)]
    state = state_with(items)

    first = render_feed(state)
    second = render_feed(state)

    assert first == second
    assert first.count == 3
    assert [c.headline for c in first.cards] == [i.headline for i in items]
    assert state.items == tuple(items)


def test_loading_placeholder_dominates():
    """Test the loading mode wins even when a snapshot exists."""
    state = state_with([make_item(1)])
    state.begin_load()

    view = render_feed(state)

    assert view.mode == "loading"
    assert view.cards == []
    assert view.count == 1


def test_empty_snapshot_renders_empty_state():
    """Test a successful empty load shows the empty state."""
    view = render_feed(state_with([]))

    assert view.mode == "empty"
    assert view.last_updated == "Updated 10:15"
    assert view.footer is None


def test_impact_badges():
    """Test unclassified items get no badge."""
    items = [
        make_item(1, impact="HIGH"),
        make_item(2, impact="MEDIUM"),
        make_item(3, impact=None),
        make_item(4, impact=""),
    ]
    cards = render_feed(state_with(items)).cards

    assert cards[0].impact.severity == "high"
    assert cards[1].impact.severity == "medium"
    assert cards[1].impact.label == "MEDIUM"
    assert cards[2].impact is None
    assert cards[3].impact is None


def test_card_fields():
    card = render_feed(state_with([make_item(7)])).cards[0]

    assert card.key == CardKey(kind="id", value="ann-7")
    assert card.source == "NSE"
    assert card.symbol == "SYM7"
    assert card.company == "Company 7 Ltd"
    assert card.time == "18 Oct 2026, 02:30 pm"


def test_positional_key_for_items_without_id():
    """Test items without an id are keyed by position in this snapshot."""
    items = [make_item(1), make_item(2, id=None)]
    cards = render_feed(state_with(items)).cards

    assert cards[0].key == CardKey(kind="id", value="ann-1")
    assert cards[1].key == CardKey(kind="position", value="1")

    reordered = render_feed(state_with([make_item(2, id=None), make_item(1)], epoch=2)).cards
    assert reordered[0].key == CardKey(kind="position", value="0")


def test_id_that_looks_like_a_position_keeps_its_own_key():
    """Test an item whose id reads like a position never shares a key with a positional card."""
    items = [make_item(1, id="#1"), make_item(2, id=None)]
    cards = render_feed(state_with(items)).cards

    assert cards[0].key == CardKey(kind="id", value="#1")
    assert cards[1].key == CardKey(kind="position", value="1")
    assert cards[0].key != cards[1].key


def test_item_key_variants():
    assert item_key(make_item(1), 5) == Identified("ann-1")
    assert item_key(make_item(1, id=None), 5) == Positional(5)
    assert item_key(make_item(1, id=""), 0) == Positional(0)


def test_footer_and_refresh_control():
    state = state_with([make_item(1), make_item(2)])
    state.begin_refresh()

    view = render_feed(state, poll_interval_minutes=20, retention_hours=48)

    assert view.footer == (
        "Showing 2 announcements • Auto-refreshes every 20 minutes • 48-hour retention"
    )
    assert view.is_refreshing
    assert not view.refresh_enabled
