"""Mock OAuth providers for testing."""

from dishka import Scope, provide

from storefront.adapter.oauth import MockOAuthClient
from storefront.domain.service import OAuthClient
from storefront.util.di.infrastructure.oauth import OAuthProvider


class MockOAuthProvider(OAuthProvider):
    """Mock OAuth provider exposing a single "Mock" external provider."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mock_oauth_client(self) -> MockOAuthClient:
        return MockOAuthClient(name="Mock")

    @provide(scope=Scope.APP)
    def get_oauth_clients(self, client: MockOAuthClient) -> dict[str, OAuthClient]:
        """Provide dictionary of OAuth clients by provider name."""
        return {client.name: client}
