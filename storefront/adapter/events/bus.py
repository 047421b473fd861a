"""In-process domain event bus.

Subscribers run in background tasks; a failing subscriber is logged and
never reaches the flow that published the event.
"""

import asyncio
from collections.abc import Awaitable, Callable

import logfire

from storefront.domain.model.event import DomainEvent
from storefront.domain.service.event_service import EventPublisher

Subscriber = Callable[[DomainEvent], Awaitable[None]]


async def audit_subscriber(event: DomainEvent) -> None:
    """Record every published event in the trace log."""
    logfire.info(
        "Domain event",
        event=event.name,
        user_id=event.user.id,
        store_id=event.context.current_store.id,
        operator_user_id=event.user.operator_user_id,
    )


class BackgroundEventPublisher(EventPublisher):
    """Fans events out to subscribers on the running event loop."""

    def __init__(self, subscribers: list[Subscriber] | None = None) -> None:
        self.subscribers: list[Subscriber] = list(subscribers or [])
        self._background_tasks: set[asyncio.Task] = set()

    def subscribe(self, subscriber: Subscriber) -> None:
        self.subscribers.append(subscriber)

    async def publish(self, event: DomainEvent) -> None:
        for subscriber in self.subscribers:
            task = asyncio.create_task(self._deliver(subscriber, event))
            self._background_tasks.add(task)
            task.add_done_callback(self._background_tasks.discard)

    async def _deliver(self, subscriber: Subscriber, event: DomainEvent) -> None:
        try:
            await subscriber(event)
        except Exception as e:
            logfire.warn(
                "Event subscriber failed",
                event=event.name,
                subscriber=getattr(subscriber, "__name__", repr(subscriber)),
                error=str(e),
            )

    async def drain(self) -> None:
        """Wait for in-flight deliveries (used on shutdown)."""
        if self._background_tasks:
            await asyncio.gather(*self._background_tasks, return_exceptions=True)


class RecordingEventPublisher(EventPublisher):
    """Keeps published events in memory for assertions."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def publish(self, event: DomainEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[DomainEvent]) -> list[DomainEvent]:
        return [e for e in self.events if isinstance(e, event_type)]

    async def drain(self) -> None:
        pass
