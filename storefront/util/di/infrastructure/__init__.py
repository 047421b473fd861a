"""Infrastructure providers."""

# Import bases
from .events import EventsProvider
from .oauth import OAuthProvider
from .platform import PlatformProvider

# Import implementations (needed for __subclasses__())
from .events import ProdEventsProvider  # noqa: F401
from .oauth import ProdOAuthProvider  # noqa: F401
from .platform import ProdPlatformProvider  # noqa: F401

__all__ = [
    "EventsProvider",
    "OAuthProvider",
    "PlatformProvider",
    "ProdEventsProvider",
    "ProdOAuthProvider",
    "ProdPlatformProvider",
]
