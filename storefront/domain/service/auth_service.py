"""External authentication domain service."""

from storefront.domain.error import UnsupportedProviderError
from storefront.domain.value import ExternalLoginInfo

from .base import Service

# Claim types consulted, in order, for a new user's first name
FIRST_NAME_CLAIMS = ("given_name", "urn:github:name", "name")
LAST_NAME_CLAIM = "family_name"
EMAIL_CLAIM = "email"


class OAuthClient:
    """Generic OAuth client interface for all providers."""

    async def initiate_authorization(self, state: str, redirect_uri: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection
            redirect_uri: Callback URL the provider returns to

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(
        self, code: str, state: str, redirect_uri: str
    ) -> ExternalLoginInfo:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification
            redirect_uri: Callback URL used when the flow was initiated

        Returns:
            Provider identity and claims
        """
        raise NotImplementedError


class ExternalAuthService(Service):
    """Domain service for external login providers.

    Coordinates authentication across every configured OAuth provider.
    """

    def __init__(self, oauth_clients: dict[str, OAuthClient]) -> None:
        """Initialize external auth service.

        Args:
            oauth_clients: Map of provider name to OAuth client implementation
        """
        self.oauth_clients = {
            name.lower(): client for name, client in oauth_clients.items()
        }

    def _client(self, provider: str) -> OAuthClient:
        client = self.oauth_clients.get(provider.lower())
        if not client:
            raise UnsupportedProviderError(provider)
        return client

    async def initiate_login(self, provider: str, state: str, redirect_uri: str) -> str:
        """Initiate OAuth login flow for any provider.

        Raises:
            UnsupportedProviderError: If provider not configured
        """
        return await self._client(provider).initiate_authorization(state, redirect_uri)

    async def complete_login(
        self, provider: str, code: str, state: str, redirect_uri: str
    ) -> ExternalLoginInfo:
        """Complete OAuth login flow for any provider.

        Raises:
            UnsupportedProviderError: If provider not configured
        """
        return await self._client(provider).complete_authorization(
            code, state, redirect_uri
        )
