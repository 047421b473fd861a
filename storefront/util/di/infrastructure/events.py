"""Event bus infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide

from storefront.adapter.events import BackgroundEventPublisher, audit_subscriber
from storefront.domain.service import EventPublisher
from storefront.util.di.base import ProviderBase


class EventsProvider(ProviderBase):
    """Event bus component base."""

    __mock_component__ = "events"


class ProdEventsProvider(EventsProvider):
    """Production event bus publishing on background tasks."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_event_publisher(self) -> AsyncIterator[EventPublisher]:
        """Provide the event publisher; pending deliveries drain on close."""
        publisher = BackgroundEventPublisher(subscribers=[audit_subscriber])
        yield publisher
        await publisher.drain()
