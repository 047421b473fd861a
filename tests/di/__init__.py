"""Mock providers for testing."""

from .events import MockEventsProvider
from .oauth import MockOAuthProvider
from .platform import MockPlatformProvider
from .container import build_test_container

__all__ = [
    "MockEventsProvider",
    "MockOAuthProvider",
    "MockPlatformProvider",
    "build_test_container",
]
