"""Mock event bus providers for testing."""

from dishka import Scope, alias, provide

from storefront.adapter.events import RecordingEventPublisher
from storefront.domain.service import EventPublisher
from storefront.util.di.infrastructure.events import EventsProvider


class MockEventsProvider(EventsProvider):
    """Mock event bus keeping published events for assertions."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_recording_event_publisher(self) -> RecordingEventPublisher:
        return RecordingEventPublisher()

    event_publisher = alias(source=RecordingEventPublisher, provides=EventPublisher)
