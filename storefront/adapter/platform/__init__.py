"""Commerce platform adapter."""

from .client import PlatformClient
from .credential_store import PlatformCredentialStore
from .notifications import MockNotificationGateway, PlatformNotificationGateway

__all__ = [
    "MockNotificationGateway",
    "PlatformClient",
    "PlatformCredentialStore",
    "PlatformNotificationGateway",
]
