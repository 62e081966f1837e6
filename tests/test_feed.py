"""Test news feed lifecycle."""

import asyncio
from datetime import timedelta

import pytest
from fakes import FakeNewsSource, make_item

from newsfeed.external import FeedFetchError
from newsfeed.feed import NewsFeed, get_feed, reset_feed
from newsfeed.services.scheduler_service import POLL_JOB_ID


@pytest.mark.asyncio
async def test_start_loads_silently_and_arms_poll(settings):
    """Test mounting performs an unnotified first load and arms the timer."""
    source = FakeNewsSource([[make_item(1), make_item(2)]])
    feed = NewsFeed(settings, source=source)

    await feed.start()
    assert feed.is_started
    assert feed.poller.is_running()

    await feed.initial_load_task
    await feed.event_bus.join()

    assert feed.state.items == (make_item(1), make_item(2))
    assert feed.notification_service.recent() == []
    assert feed.view().mode == "items"

    job = feed.poller.scheduler.get_job(POLL_JOB_ID)
    assert job.trigger.interval == timedelta(minutes=20)
    assert feed.poller.next_poll_time() is not None

    await feed.stop()
    assert not feed.poller.is_running()
    assert not feed.is_started


@pytest.mark.asyncio
async def test_initial_failure_notifies(settings):
    source = FakeNewsSource([FeedFetchError("connection refused")])
    feed = NewsFeed(settings, source=source)

    await feed.start(poll=False)
    await feed.initial_load_task
    await feed.event_bus.join()

    assert [n.message for n in feed.notification_service.recent()] == ["Failed to fetch news"]
    assert feed.view().mode == "empty"
    assert feed.view().last_updated is None

    await feed.stop()


@pytest.mark.asyncio
async def test_refresh_cycle_through_feed(settings):
    """Test a manual refresh reloads after the delay and notifies."""
    source = FakeNewsSource([[make_item(1)], [make_item(1), make_item(2)]])
    feed = NewsFeed(settings, source=source)

    await feed.start(poll=False)
    await feed.initial_load_task

    assert await feed.refresh() is True
    await feed.refresher.wait_for_reloads()
    await feed.event_bus.join()

    assert source.calls == ["list", "refresh", "list"]
    assert feed.view().count == 2
    assert [n.message for n in feed.notification_service.recent()] == [
        "News updated successfully"
    ]

    await feed.stop()


@pytest.mark.asyncio
async def test_stop_cancels_pending_reload(settings):
    settings.sync.refresh_delay_seconds = 30
    source = FakeNewsSource()
    feed = NewsFeed(settings, source=source)

    await feed.start(poll=False, initial_load=False)
    await feed.refresh()
    assert feed.refresher.pending_reloads == 1

    await feed.stop()
    await asyncio.sleep(0)

    assert feed.refresher.pending_reloads == 0
    assert source.calls == ["refresh"]


@pytest.mark.asyncio
async def test_stop_during_regeneration_skips_reload(settings):
    """Test a command still in flight at stop never reloads after teardown."""
    settings.sync.refresh_delay_seconds = 0
    gate = asyncio.get_running_loop().create_future()
    source = FakeNewsSource([[make_item(1)]], refresh_result=gate)
    feed = NewsFeed(settings, source=source)

    await feed.start(poll=False, initial_load=False)
    refresh = asyncio.create_task(feed.refresh())
    await asyncio.sleep(0)
    assert feed.state.is_refreshing

    await feed.stop()
    gate.set_result(None)
    assert await refresh is False
    await asyncio.sleep(0.01)

    assert source.calls == ["refresh"]
    assert feed.refresher.pending_reloads == 0
    assert feed.state.last_update is None
    assert feed.notification_service.recent() == []


@pytest.mark.asyncio
async def test_stop_cancels_background_refresh(settings):
    """Test refreshes started in the background are cancelled on stop."""
    gate = asyncio.get_running_loop().create_future()
    source = FakeNewsSource(refresh_result=gate)
    feed = NewsFeed(settings, source=source)

    await feed.start(poll=False, initial_load=False)
    task = feed.start_refresh()
    await asyncio.sleep(0)

    await feed.stop()

    assert task.cancelled()
    assert not feed.state.is_refreshing
    assert source.calls == ["refresh"]


@pytest.mark.asyncio
async def test_restart_after_stop_refreshes_again(settings):
    settings.sync.refresh_delay_seconds = 0
    source = FakeNewsSource([[make_item(1)]])
    feed = NewsFeed(settings, source=source)

    await feed.start(poll=False, initial_load=False)
    await feed.stop()
    await feed.start(poll=False, initial_load=False)

    assert await feed.refresh() is True
    await feed.refresher.wait_for_reloads()
    assert feed.state.items == (make_item(1),)

    await feed.stop()


@pytest.mark.asyncio
async def test_view_shows_loading_before_initial_load_runs(settings):
    """Test the first render after mount is the loading placeholder, not the empty state."""
    gate = asyncio.get_running_loop().create_future()
    feed = NewsFeed(settings, source=FakeNewsSource([gate]))

    await feed.start(poll=False)
    assert feed.view().mode == "loading"

    await asyncio.sleep(0)
    assert feed.view().mode == "loading"

    gate.set_result([])
    await feed.initial_load_task
    assert feed.view().mode == "empty"

    await feed.stop()


@pytest.mark.asyncio
async def test_manual_refresh_does_not_reset_poll(settings):
    """Test the poll schedule is independent of manual refreshes."""
    source = FakeNewsSource()
    feed = NewsFeed(settings, source=source)

    await feed.start(initial_load=False)
    next_poll = feed.poller.next_poll_time()

    await feed.refresh()
    await feed.refresher.wait_for_reloads()

    assert feed.poller.next_poll_time() == next_poll

    await feed.stop()


@pytest.mark.asyncio
async def test_get_feed_singleton():
    await reset_feed()
    assert get_feed() is get_feed()

    first = get_feed()
    await reset_feed()
    assert get_feed() is not first

    await reset_feed()


def test_each_feed_owns_its_bus(settings):
    """Test feeds never share notification plumbing."""
    first = NewsFeed(settings, source=FakeNewsSource())
    second = NewsFeed(settings, source=FakeNewsSource())

    assert first.event_bus is not second.event_bus
    assert first.notification_service is not second.notification_service
