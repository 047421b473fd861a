"""Event publishing interface."""

from abc import ABC, abstractmethod

from storefront.domain.model.event import DomainEvent


class EventPublisher(ABC):
    """Publishes domain events to decoupled subscribers.

    ``publish`` returns once the event is enqueued; delivery happens in the
    background and its outcome is not observed by the caller.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        pass
