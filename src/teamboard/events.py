"""Outbound board events and the in-process event bus."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Protocol
from uuid import uuid4

if TYPE_CHECKING:
    from teamboard.models import Task

logger = logging.getLogger(__name__)


def _new_event_id() -> str:
    return uuid4().hex


def _now() -> datetime:
    return datetime.now()


class BoardEvent(Protocol):
    """Base protocol for all board events."""

    @property
    def event_id(self) -> str: ...

    @property
    def occurred_at(self) -> datetime: ...


EventHandler = Callable[[BoardEvent], None]


class EventBus(Protocol):
    """Async fan-out bus for board events."""

    async def publish(self, event: BoardEvent) -> None:
        """Publish a single event to subscribers."""
        ...

    def subscribe(self, event_type: type[BoardEvent] | None = None) -> AsyncIterator[BoardEvent]:
        """Subscribe to events (optionally filtered by type)."""
        ...

    def add_handler(
        self,
        handler: EventHandler,
        event_type: type[BoardEvent] | None = None,
    ) -> None:
        """Register a sync handler for events (UI bridges use this)."""
        ...

    def remove_handler(self, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        ...


@dataclass(frozen=True)
class TaskDetailRequested:
    """The user clicked a card; the surrounding UI should open its detail view."""

    project_id: int
    task: Task
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class BoardUpdated:
    """Board contents changed. ``reason`` is one of load, move, edit, create."""

    project_id: int
    reason: str
    task_id: int | None = None
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class LoadingChanged:
    project_id: int
    loading: bool
    event_id: str = field(default_factory=_new_event_id)
    occurred_at: datetime = field(default_factory=_now)


class InMemoryEventBus:
    """Simple async event bus with fan-out to handlers and async subscribers.

    Suitable for single-process use. Events are not persisted or replayed;
    new subscribers only receive future events.
    """

    def __init__(self) -> None:
        self._handlers: list[tuple[type[BoardEvent] | None, EventHandler]] = []
        self._queues: list[tuple[type[BoardEvent] | None, asyncio.Queue[BoardEvent]]] = []
        self._lock = asyncio.Lock()

    async def publish(self, event: BoardEvent) -> None:
        """Publish event to all matching handlers and subscribers."""
        for filter_type, handler in self._handlers:
            if filter_type is None or isinstance(event, filter_type):
                try:
                    handler(event)
                except Exception:
                    logger.exception("Event handler failed for %s", type(event).__name__)

        async with self._lock:
            for filter_type, queue in self._queues:
                if filter_type is None or isinstance(event, filter_type):
                    with contextlib.suppress(asyncio.QueueFull):
                        queue.put_nowait(event)

    def add_handler(
        self,
        handler: EventHandler,
        event_type: type[BoardEvent] | None = None,
    ) -> None:
        """Register a synchronous handler for events."""
        self._handlers.append((event_type, handler))

    def remove_handler(self, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        self._handlers = [(t, h) for t, h in self._handlers if h is not handler]

    async def subscribe(
        self, event_type: type[BoardEvent] | None = None
    ) -> AsyncIterator[BoardEvent]:
        """Subscribe to events, yielding them as they arrive."""
        queue: asyncio.Queue[BoardEvent] = asyncio.Queue(maxsize=100)
        async with self._lock:
            self._queues.append((event_type, queue))
        try:
            while True:
                event = await queue.get()
                yield event
        finally:
            async with self._lock:
                self._queues = [(t, q) for t, q in self._queues if q is not queue]


__all__ = [
    "BoardEvent",
    "BoardUpdated",
    "EventBus",
    "EventHandler",
    "InMemoryEventBus",
    "LoadingChanged",
    "TaskDetailRequested",
]
