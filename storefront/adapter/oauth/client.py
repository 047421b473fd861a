"""Generic OAuth 2.0 client implementation.

Implements the authorization code flow with PKCE against any provider
configured in ``auth.external_providers``.
"""

import hashlib
import secrets
from base64 import urlsafe_b64encode
from urllib.parse import urlencode

import httpx
import logfire

from storefront.adapter.error import OAuthError
from storefront.config import ExternalProviderSettings
from storefront.domain.service.auth_service import OAuthClient
from storefront.domain.value import ExternalLoginInfo


class RealOAuthClient(OAuthClient):
    """OAuth 2.0 client with PKCE support for one provider."""

    def __init__(
        self,
        settings: ExternalProviderSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OAuth client.

        Args:
            settings: Provider endpoints, credentials and claim mappings
            transport: Optional transport (for tests)
        """
        self.settings = settings
        self.transport = transport

        # PKCE verifiers per state (in-memory; single instance deployments only)
        self._pkce_verifiers: dict[str, str] = {}

    @property
    def name(self) -> str:
        return self.settings.name

    def _generate_pkce_pair(self) -> tuple[str, str]:
        """Generate PKCE code verifier and challenge.

        Returns:
            Tuple of (verifier, challenge)
        """
        code_verifier = urlsafe_b64encode(secrets.token_bytes(32)).decode("utf-8")
        code_verifier = code_verifier.rstrip("=")

        challenge_bytes = hashlib.sha256(code_verifier.encode("utf-8")).digest()
        code_challenge = urlsafe_b64encode(challenge_bytes).decode("utf-8")
        code_challenge = code_challenge.rstrip("=")

        return code_verifier, code_challenge

    async def initiate_authorization(self, state: str, redirect_uri: str) -> str:
        """Build the provider authorization URL.

        Args:
            state: State parameter for CSRF protection
            redirect_uri: Callback URL the provider returns to

        Returns:
            Authorization URL to redirect user to
        """
        code_verifier, code_challenge = self._generate_pkce_pair()
        self._pkce_verifiers[state] = code_verifier

        params = {
            "response_type": "code",
            "client_id": self.settings.client_id,
            "redirect_uri": redirect_uri,
            "scope": self.settings.scope,
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
        }

        logfire.info(
            "OAuth authorization initiated",
            provider=self.name,
            redirect_uri=redirect_uri,
        )

        return f"{self.settings.authorize_url}?{urlencode(params)}"

    async def complete_authorization(
        self, code: str, state: str, redirect_uri: str
    ) -> ExternalLoginInfo:
        """Exchange the code and fetch the provider identity.

        Raises:
            OAuthError: If OAuth flow fails
        """
        code_verifier = self._pkce_verifiers.pop(state, None)
        if not code_verifier:
            raise OAuthError("Invalid state or PKCE verifier not found")

        async with httpx.AsyncClient(transport=self.transport, timeout=30.0) as client:
            access_token = await self._exchange_code_for_token(
                client, code, code_verifier, redirect_uri
            )
            user_info = await self._get_user_info(client, access_token)

        key = user_info.get(self.settings.key_claim)
        if key is None:
            raise OAuthError(
                f"Provider {self.name} returned no '{self.settings.key_claim}' claim"
            )

        logfire.info("OAuth completed", provider=self.name, provider_key=str(key))

        return ExternalLoginInfo(
            login_provider=self.name,
            provider_key=str(key),
            provider_display_name=self.name,
            claims=self._claims(user_info),
        )

    def _claims(self, user_info: dict) -> dict[str, str]:
        """Flatten userinfo into claims, applying configured renames."""
        claims: dict[str, str] = {}
        for field, value in user_info.items():
            if value is None or isinstance(value, (dict, list)):
                continue
            if isinstance(value, str) and not value.strip():
                continue
            claims[self.settings.claim_mappings.get(field, field)] = str(value)
        return claims

    async def _exchange_code_for_token(
        self,
        client: httpx.AsyncClient,
        code: str,
        code_verifier: str,
        redirect_uri: str,
    ) -> str:
        """Exchange authorization code for access token.

        Raises:
            OAuthError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.settings.client_id,
            "redirect_uri": redirect_uri,
            "code_verifier": code_verifier,
        }

        try:
            response = await client.post(
                self.settings.token_url,
                data=data,
                auth=(self.settings.client_id, self.settings.client_secret),
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logfire.error("OAuth token exchange HTTP error", provider=self.name, error=str(e))
            raise OAuthError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "OAuth token exchange failed",
                provider=self.name,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthError(f"Token exchange failed: {response.status_code}")

        token = response.json().get("access_token")
        if not token:
            raise OAuthError("Token response has no access_token")
        return token

    async def _get_user_info(self, client: httpx.AsyncClient, access_token: str) -> dict:
        """Fetch the userinfo document.

        Raises:
            OAuthError: If API request fails
        """
        try:
            response = await client.get(
                self.settings.userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logfire.error("OAuth userinfo HTTP error", provider=self.name, error=str(e))
            raise OAuthError(f"HTTP error fetching user info: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "OAuth userinfo request failed",
                provider=self.name,
                status_code=response.status_code,
                error=response.text,
            )
            raise OAuthError(f"User info request failed: {response.status_code}")

        return response.json()


class MockOAuthClient(OAuthClient):
    """Mock OAuth client for testing.

    The provider key is the authorization code, so each test picks its own
    identity. The code ``"invalid"`` fails like a provider error.
    """

    def __init__(self, name: str = "Mock", claims: dict[str, str] | None = None):
        self.name = name
        self.claims: dict[str, str] = dict(claims or {})

    async def initiate_authorization(self, state: str, redirect_uri: str) -> str:
        return "https://oauth.example.com/authorize?" + urlencode(
            {"state": state, "redirect_uri": redirect_uri, "mock": "true"}
        )

    async def complete_authorization(
        self, code: str, state: str, redirect_uri: str
    ) -> ExternalLoginInfo:
        if code == "invalid":
            raise OAuthError("Mock provider rejected the code")
        return ExternalLoginInfo(
            login_provider=self.name,
            provider_key=code,
            provider_display_name=self.name,
            claims=dict(self.claims),
        )
