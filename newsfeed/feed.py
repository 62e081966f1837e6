"""News feed application manager."""

import asyncio
from contextlib import suppress

from loguru import logger

from newsfeed.config import Config, config
from newsfeed.events.bus import EventBus
from newsfeed.events.handlers import EventHandler, NotificationHandler
from newsfeed.external.news_service import NewsServiceClient, NewsSource
from newsfeed.presentation.view import FeedView, render_feed
from newsfeed.services.health_service import HealthChecker
from newsfeed.services.notification_service import NotificationService
from newsfeed.services.scheduler_service import PollScheduler
from newsfeed.services.sync_service import RefreshCoordinator, SyncController, SyncState


class NewsFeed:
    """Wires the synchronization core for the lifetime of one view."""

    def __init__(
        self,
        settings: Config | None = None,
        source: NewsSource | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize news feed.

        Args:
            settings: Configuration, defaults to the module-level config
            source: News service client, defaults to an aiohttp client
            event_bus: Notification bus, defaults to a private bus
        """
        self.settings = settings or config
        self.state = SyncState()
        self.health = HealthChecker(self.settings.health.unhealthy_threshold)
        self.source: NewsSource = source or NewsServiceClient(
            base_url=self.settings.news_service.base_url,
            timeout=self.settings.news_service.timeout_seconds,
        )
        self.event_bus = event_bus or EventBus()
        self.notification_service = NotificationService(
            self.settings.display.notification_history
        )
        self.controller = SyncController(
            state=self.state,
            source=self.source,
            event_bus=self.event_bus,
            health=self.health,
        )
        self.refresher = RefreshCoordinator(
            controller=self.controller,
            delay_seconds=self.settings.sync.refresh_delay_seconds,
        )
        self.poller = PollScheduler(
            interval_minutes=self.settings.sync.poll_interval_minutes,
            timezone=self.settings.display.timezone,
        )
        self.initial_load_task: asyncio.Task[bool] | None = None
        self._refresh_tasks: set[asyncio.Task[bool]] = set()
        self._started = False

    @property
    def is_started(self) -> bool:
        return self._started

    async def start(self, poll: bool = True, initial_load: bool | None = None) -> None:
        """Mount the feed: start notifications, arm the poll, kick off the first load.

        Args:
            poll: Arm the periodic poll
            initial_load: Override ``sync.initial_load`` from the configuration
        """
        if initial_load is None:
            initial_load = self.settings.sync.initial_load

        if self._started:
            logger.warning("News feed already started")
            return

        logger.info(f"Starting news feed against {self.settings.news_service.base_url}")

        try:
            self.refresher.reopen()
            await self.event_bus.start()

            handlers: list[EventHandler] = [NotificationHandler(self.notification_service)]
            for handler in handlers:
                await handler.initialize(self.event_bus)

            if poll:
                self.poller.add_poll_job(self.controller.poll)
                await self.poller.start()

            if initial_load:
                self.initial_load_task = asyncio.create_task(
                    self.controller.load_snapshot(notify_on_success=False, trigger="initial"),
                    name="newsfeed-initial-load",
                )

            self._started = True
            logger.info("News feed started")

        except Exception as e:
            logger.opt(exception=e).error(f"Failed to start news feed: {e}")
            await self.stop()
            raise

    async def stop(self) -> None:
        """Tear down: disarm the poll, abandon refreshes and drop pending reloads."""
        logger.info("Stopping news feed...")

        if self.poller.is_running():
            await self.poller.stop()

        await self.refresher.cancel_pending()

        refreshes = list(self._refresh_tasks)
        for task in refreshes:
            task.cancel()
        if refreshes:
            await asyncio.gather(*refreshes, return_exceptions=True)

        if self.initial_load_task is not None and not self.initial_load_task.done():
            self.initial_load_task.cancel()
            with suppress(asyncio.CancelledError):
                await self.initial_load_task

        await self.event_bus.stop()
        self._started = False
        logger.info("News feed stopped")

    async def refresh(self) -> bool:
        """Run a manual two-phase refresh."""
        return await self.refresher.request_refresh()

    def start_refresh(self) -> asyncio.Task[bool]:
        """Run a manual refresh in the background, owned by this feed until stop."""
        task = asyncio.create_task(self.refresh(), name="newsfeed-refresh")
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)
        return task

    async def reload(self, notify_on_success: bool = True) -> bool:
        """Reload the snapshot without asking the service to regenerate."""
        return await self.controller.load_snapshot(notify_on_success, trigger="manual")

    def view(self) -> FeedView:
        """Render the current state."""
        return render_feed(
            self.state,
            timezone=self.settings.display.timezone,
            poll_interval_minutes=self.settings.sync.poll_interval_minutes,
            retention_hours=self.settings.display.retention_hours,
        )


_feed: NewsFeed | None = None


def get_feed() -> NewsFeed:
    """Get news feed instance.

    Returns:
        NewsFeed singleton instance
    """
    global _feed
    if _feed is None:
        _feed = NewsFeed()
    return _feed


async def reset_feed() -> None:
    """Reset feed singleton (for testing)."""
    global _feed
    if _feed is not None and _feed.is_started:
        await _feed.stop()
    _feed = None
