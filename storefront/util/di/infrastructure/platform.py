"""Commerce platform infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire

from storefront.adapter.platform import (
    PlatformClient,
    PlatformCredentialStore,
    PlatformNotificationGateway,
)
from storefront.config import PlatformSettings
from storefront.domain.repository import CredentialStore
from storefront.domain.service import NotificationGateway
from storefront.util.di.base import ProviderBase


class PlatformProvider(ProviderBase):
    """Platform component base (credential store and notifications)."""

    __mock_component__ = "platform"


class ProdPlatformProvider(PlatformProvider):
    """Production platform provider using the remote REST API."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_platform_client(
        self, settings: PlatformSettings
    ) -> AsyncIterator[PlatformClient]:
        """Provide the shared platform HTTP client.

        Closed when the container closes.
        """
        client = PlatformClient(settings=settings)
        logfire.info("Platform client created", base_url=settings.base_url)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_credential_store(self, client: PlatformClient) -> CredentialStore:
        """Provide platform-backed credential store."""
        return PlatformCredentialStore(client=client)

    @provide(scope=Scope.APP)
    def get_notification_gateway(self, client: PlatformClient) -> NotificationGateway:
        """Provide platform-backed notification gateway."""
        return PlatformNotificationGateway(client=client)
