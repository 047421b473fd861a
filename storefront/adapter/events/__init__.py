"""Domain event bus adapter."""

from .bus import (
    BackgroundEventPublisher,
    RecordingEventPublisher,
    Subscriber,
    audit_subscriber,
)

__all__ = [
    "BackgroundEventPublisher",
    "RecordingEventPublisher",
    "Subscriber",
    "audit_subscriber",
]
