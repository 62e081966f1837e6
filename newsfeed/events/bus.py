"""In-memory async event bus for feed notifications."""

import asyncio
import contextlib
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

from loguru import logger

E = TypeVar("E", bound="Event")

Handler = Callable[[Any], Coroutine[Any, Any, None]]


@dataclass
class Event:
    """Base class for all feed events."""

    def __post_init__(self) -> None:
        """Stamp the event with its creation time."""
        object.__setattr__(self, "created_at", datetime.now())


class EventBus:
    """Queue-backed publish/subscribe bus running on the current event loop.

    Handlers for one event run concurrently; a failing handler is logged and
    does not affect the others. Events are delivered in publish order.
    """

    def __init__(self, max_queue_size: int = 1000) -> None:
        """Initialize event bus."""
        self._queue: asyncio.Queue[Event] = asyncio.Queue(maxsize=max_queue_size)
        self._subscribers: dict[type[Event], list[Handler]] = {}
        self._running: bool = False
        self._worker_task: asyncio.Task[None] | None = None
        self._lock: asyncio.Lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._running

    async def subscribe(
        self, event_type: type[E], handler: Callable[[E], Coroutine[Any, Any, None]]
    ) -> None:
        """Register a handler for an event type and its subclasses."""
        async with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)
            logger.debug(
                f"Subscribed {getattr(handler, '__name__', handler)} to {event_type.__name__} "
                f"(total: {len(self._subscribers[event_type])})"
            )

    async def publish(self, event: Event) -> None:
        """Queue an event for delivery."""
        await self._queue.put(event)
        logger.debug(f"Published {event.__class__.__name__}")

    async def start(self) -> None:
        """Start delivering queued events."""
        if self._running:
            logger.warning("Event bus already running")
            return

        self._running = True
        self._worker_task = asyncio.create_task(self._process_events())
        logger.info("Event bus started")

    async def stop(self) -> None:
        """Stop delivery. Undelivered events are dropped."""
        if not self._running:
            return

        self._running = False

        if self._worker_task:
            self._worker_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker_task
            self._worker_task = None

        logger.info("Event bus stopped")

    async def join(self) -> None:
        """Wait until every published event has been delivered."""
        await self._queue.join()

    async def _process_events(self) -> None:
        while self._running:
            event = await self._queue.get()
            try:
                await self._dispatch_event(event)
            except Exception as e:
                logger.error(f"Error dispatching {event.__class__.__name__}: {e}")
            finally:
                self._queue.task_done()

    def _handlers_for(self, event: Event) -> list[Handler]:
        handlers: list[Handler] = []
        for event_type, subscribed in self._subscribers.items():
            if isinstance(event, event_type):
                handlers.extend(subscribed)
        return handlers

    async def _dispatch_event(self, event: Event) -> None:
        handlers = self._handlers_for(event)

        if not handlers:
            logger.debug(f"No subscribers for {event.__class__.__name__}")
            return

        await asyncio.gather(*(self._call_handler(h, event) for h in handlers))

    async def _call_handler(self, handler: Handler, event: Event) -> None:
        try:
            await handler(event)
        except Exception as e:
            logger.opt(exception=e).error(
                f"Handler {getattr(handler, '__name__', handler)} failed "
                f"for {event.__class__.__name__}: {e}"
            )
