"""OAuth infrastructure providers for external login."""

from dishka import Scope, provide

from storefront.adapter.oauth import RealOAuthClient
from storefront.config import AuthSettings
from storefront.domain.service import OAuthClient
from storefront.util.di.base import ProviderBase


class OAuthProvider(ProviderBase):
    """OAuth component base."""

    __mock_component__ = "oauth"


class ProdOAuthProvider(OAuthProvider):
    """Production OAuth provider built from configured external providers."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_oauth_clients(self, auth_settings: AuthSettings) -> dict[str, OAuthClient]:
        """Provide dictionary of OAuth clients by provider name.

        Raises:
            ValueError: If a provider is configured without credentials
        """
        clients: dict[str, OAuthClient] = {}
        for provider in auth_settings.external_providers:
            if not provider.client_id or not provider.client_secret:
                raise ValueError(f"{provider.name} OAuth credentials must be configured")
            clients[provider.name] = RealOAuthClient(settings=provider)
        return clients
