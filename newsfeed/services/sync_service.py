"""Feed synchronization core.

``SyncState`` is the snapshot store shared by the view. ``SyncController``
loads full snapshots from the news service, and ``RefreshCoordinator`` runs the
two-phase manual refresh: ask the service to regenerate, wait, then reload.
Everything runs on one event loop; overlapping loads are ordered by a request
epoch so a late, older response never replaces a newer snapshot.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from loguru import logger

from newsfeed.events.bus import EventBus
from newsfeed.events.events import (
    FeedFetchFailedEvent,
    FeedRefreshFailedEvent,
    FeedUpdatedEvent,
)
from newsfeed.external.news_service import NewsSource
from newsfeed.models.announcement import AnnouncementItem, Snapshot
from newsfeed.services.health_service import HealthChecker


class SyncPhase(str, Enum):
    """Controller phase as seen by the view."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class SyncState:
    """Current snapshot plus staleness and activity flags.

    Only the controller and the refresh coordinator call the mutating methods;
    everything else reads the properties. A fresh state counts as loading
    until its first load settles.
    """

    def __init__(self) -> None:
        self._items: Snapshot = ()
        self._last_update: datetime | None = None
        self._snapshot_epoch = 0
        self._pending_loads = 0
        self._pending_refreshes = 0
        self._settled = False

    @property
    def items(self) -> Snapshot:
        return self._items

    @property
    def last_update(self) -> datetime | None:
        return self._last_update

    @property
    def snapshot_epoch(self) -> int:
        """Epoch of the load that produced the current snapshot, 0 if none."""
        return self._snapshot_epoch

    @property
    def has_settled(self) -> bool:
        """True once any load has succeeded, failed or been cancelled."""
        return self._settled

    @property
    def is_loading(self) -> bool:
        return self._pending_loads > 0 or not self._settled

    @property
    def is_refreshing(self) -> bool:
        return self._pending_refreshes > 0

    @property
    def phase(self) -> SyncPhase:
        if self.is_loading:
            return SyncPhase.LOADING
        if self._last_update is None:
            return SyncPhase.IDLE
        return SyncPhase.READY

    def begin_load(self) -> None:
        self._pending_loads += 1

    def end_load(self) -> None:
        self._pending_loads = max(0, self._pending_loads - 1)
        self._settled = True

    def replace_snapshot(
        self, items: list[AnnouncementItem], loaded_at: datetime, epoch: int
    ) -> None:
        self._items = tuple(items)
        self._last_update = loaded_at
        self._snapshot_epoch = epoch
        self._settled = True

    def begin_refresh(self) -> None:
        self._pending_refreshes += 1

    def end_refresh(self) -> None:
        self._pending_refreshes = max(0, self._pending_refreshes - 1)


class SyncController:
    """Loads full snapshots into a SyncState and reports the outcome."""

    def __init__(
        self,
        state: SyncState,
        source: NewsSource,
        event_bus: EventBus,
        health: HealthChecker | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize controller.

        Args:
            state: Snapshot store owned by this controller
            source: News service client
            event_bus: Bus receiving user-facing notifications
            health: Optional health tracker for remote calls
            clock: Time source for ``last_update``
        """
        self.state = state
        self.source = source
        self.event_bus = event_bus
        self.health = health
        self.clock = clock
        self._epoch = 0

    async def load_snapshot(
        self, notify_on_success: bool = False, trigger: str = "manual"
    ) -> bool:
        """Fetch the full list and replace the snapshot.

        Failures are reported and logged, never raised. The previous snapshot
        and ``last_update`` are kept on failure.

        Args:
            notify_on_success: Publish a success notification when applied
            trigger: What started the load, for logs and events

        Returns:
            True if this load's result became the current snapshot
        """
        self._epoch += 1
        epoch = self._epoch
        self.state.begin_load()
        logger.debug(f"Loading snapshot (epoch={epoch}, trigger={trigger})")

        try:
            items = await self.source.list_news()
        except asyncio.CancelledError:
            self.state.end_load()
            raise
        except Exception as e:
            self.state.end_load()
            self.record_remote_call(success=False)
            logger.error(f"Error fetching news ({trigger}): {e}")
            await self.event_bus.publish(FeedFetchFailedEvent(source=trigger, error=str(e)))
            return False

        self.state.end_load()
        self.record_remote_call(success=True)

        if epoch < self.state.snapshot_epoch:
            logger.info(
                f"Discarding stale snapshot (epoch={epoch}, "
                f"current={self.state.snapshot_epoch}, trigger={trigger})"
            )
            return False

        self.state.replace_snapshot(items, self.clock(), epoch)
        logger.info(f"Snapshot updated: {len(items)} announcements ({trigger})")

        if notify_on_success:
            await self.event_bus.publish(FeedUpdatedEvent(source=trigger, item_count=len(items)))

        return True

    async def poll(self) -> bool:
        """Periodic reload, notifying on success."""
        return await self.load_snapshot(notify_on_success=True, trigger="scheduled")

    def record_remote_call(self, success: bool) -> None:
        if self.health is None:
            return
        if success:
            self.health.record_success()
        else:
            self.health.record_failure()


class RefreshCoordinator:
    """Two-phase manual refresh: regeneration command, delay, reload."""

    def __init__(
        self,
        controller: SyncController,
        delay_seconds: float,
    ) -> None:
        """Initialize coordinator.

        Args:
            controller: Controller performing the phase-two reload
            delay_seconds: Wait between the command and the reload
        """
        self.controller = controller
        self.delay_seconds = delay_seconds
        self._reload_tasks: set[asyncio.Task[bool]] = set()
        self._closed = False

    @property
    def state(self) -> SyncState:
        return self.controller.state

    @property
    def pending_reloads(self) -> int:
        return len(self._reload_tasks)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def reopen(self) -> None:
        """Accept new reloads again after ``cancel_pending``."""
        self._closed = False

    async def request_refresh(self) -> bool:
        """Ask the service to regenerate and schedule the follow-up reload.

        Returns once the command settles. The reload runs later on its own.
        Concurrent calls are not collapsed; each runs a full cycle. A command
        that settles after ``cancel_pending`` schedules nothing.

        Returns:
            True if the command succeeded and a reload was scheduled
        """
        self.state.begin_refresh()
        logger.info("Requesting news regeneration")

        try:
            await self.controller.source.request_refresh()
        except Exception as e:
            self.controller.record_remote_call(success=False)
            logger.error(f"Error refreshing news: {e}")
            await self.controller.event_bus.publish(
                FeedRefreshFailedEvent(source="refresh", error=str(e))
            )
            return False
        finally:
            self.state.end_refresh()

        self.controller.record_remote_call(success=True)
        return self._schedule_reload()

    def _schedule_reload(self) -> bool:
        if self._closed:
            logger.info("Regeneration settled after teardown, reload skipped")
            return False

        task = asyncio.create_task(self._delayed_reload(), name="newsfeed-refresh-reload")
        self._reload_tasks.add(task)
        task.add_done_callback(self._reload_tasks.discard)
        logger.debug(f"Reload scheduled in {self.delay_seconds}s")
        return True

    async def _delayed_reload(self) -> bool:
        await asyncio.sleep(self.delay_seconds)
        return await self.controller.load_snapshot(notify_on_success=True, trigger="refresh")

    async def wait_for_reloads(self) -> None:
        """Wait for every scheduled reload to finish."""
        while self._reload_tasks:
            await asyncio.gather(*list(self._reload_tasks), return_exceptions=True)

    async def cancel_pending(self) -> None:
        """Cancel reloads that have not run yet and refuse new ones until reopened."""
        self._closed = True
        tasks = list(self._reload_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info(f"Cancelled {len(tasks)} pending reload(s)")
