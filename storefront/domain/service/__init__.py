"""Domain services."""

from .account_service import AccountService
from .auth_service import ExternalAuthService, OAuthClient
from .authorization_service import AuthorizationService
from .base import Service
from .event_service import EventPublisher
from .notification_service import NotificationGateway, NotificationService
from .session_service import SessionGrant, SessionService
from .store_service import StoreService
from .token_service import UserTokenService
from .url_builder import StorefrontUrlBuilder

__all__ = [
    "AccountService",
    "AuthorizationService",
    "EventPublisher",
    "ExternalAuthService",
    "NotificationGateway",
    "NotificationService",
    "OAuthClient",
    "Service",
    "SessionGrant",
    "SessionService",
    "StoreService",
    "StorefrontUrlBuilder",
    "UserTokenService",
]
