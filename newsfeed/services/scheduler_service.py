"""Periodic feed poll scheduler."""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

POLL_JOB_ID = "feed_poll"


class PollScheduler:
    """Fires the feed poll on a fixed interval.

    Armed once on start and disarmed on stop. Manual refreshes do not reset
    the interval.
    """

    def __init__(self, interval_minutes: float, timezone: str) -> None:
        """Initialize poll scheduler.

        Args:
            interval_minutes: Minutes between polls
            timezone: Scheduler timezone
        """
        self.interval_minutes = interval_minutes
        self.scheduler = AsyncIOScheduler(timezone=timezone)
        self._running = False
        self._lock = asyncio.Lock()

    def add_poll_job(self, poll_func: Callable[[], Awaitable[bool]]) -> None:
        """Register the poll job.

        Args:
            poll_func: Async function performing one notifying reload
        """
        self.scheduler.add_job(
            poll_func,
            trigger=IntervalTrigger(minutes=self.interval_minutes),
            id=POLL_JOB_ID,
            name="Reload announcement feed",
            replace_existing=True,
            coalesce=True,
        )

        logger.info(f"Scheduled feed poll every {self.interval_minutes:g} minutes")

    async def start(self) -> None:
        """Start poll scheduler."""
        async with self._lock:
            if self._running:
                logger.warning("Poll scheduler already running")
                return

            self.scheduler.start()
            self._running = True
            logger.info("Poll scheduler started")

    async def stop(self) -> None:
        """Stop poll scheduler."""
        async with self._lock:
            if not self._running:
                return

            self.scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Poll scheduler stopped")

    def is_running(self) -> bool:
        """Check if scheduler is running.

        Returns:
            True if running, False otherwise
        """
        return self._running

    def next_poll_time(self) -> datetime | None:
        """Next scheduled poll, or None when not armed."""
        job = self.scheduler.get_job(POLL_JOB_ID)
        # pending jobs have no next_run_time until the scheduler starts
        return getattr(job, "next_run_time", None)
