"""Domain layer DI providers."""

from dishka import Scope, provide

from storefront.config import AuthSettings, StorefrontSettings
from storefront.domain.repository import CredentialStore
from storefront.domain.service import (
    AccountService,
    AuthorizationService,
    ExternalAuthService,
    NotificationGateway,
    NotificationService,
    OAuthClient,
    SessionService,
    StorefrontUrlBuilder,
    StoreService,
    UserTokenService,
)
from storefront.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; store and URL lookups only depend on
    configuration and live for the whole application.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_store_service(self, storefront_settings: StorefrontSettings) -> StoreService:
        """Provide configured store lookup."""
        return StoreService(storefront_settings=storefront_settings)

    @provide(scope=Scope.APP)
    def get_url_builder(
        self, storefront_settings: StorefrontSettings
    ) -> StorefrontUrlBuilder:
        """Provide store/locale aware URL builder."""
        return StorefrontUrlBuilder(
            default_store_id=storefront_settings.default_store_id
        )

    @provide
    def get_account_service(self, credential_store: CredentialStore) -> AccountService:
        """Provide account domain service."""
        return AccountService(credential_store=credential_store)

    @provide
    def get_token_service(self, credential_store: CredentialStore) -> UserTokenService:
        """Provide user token domain service."""
        return UserTokenService(credential_store=credential_store)

    @provide
    def get_session_service(
        self, credential_store: CredentialStore, auth_settings: AuthSettings
    ) -> SessionService:
        """Provide session domain service."""
        return SessionService(
            credential_store=credential_store, auth_settings=auth_settings
        )

    @provide
    def get_notification_service(
        self, gateway: NotificationGateway
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(gateway=gateway)

    @provide
    def get_external_auth_service(
        self, oauth_clients: dict[str, OAuthClient]
    ) -> ExternalAuthService:
        """Provide external login domain service.

        Args:
            oauth_clients: Dictionary mapping provider names to OAuth clients

        Returns:
            ExternalAuthService configured with all available OAuth clients
        """
        return ExternalAuthService(oauth_clients=oauth_clients)

    @provide
    def get_authorization_service(
        self, credential_store: CredentialStore
    ) -> AuthorizationService:
        """Provide authorization domain service."""
        return AuthorizationService(credential_store=credential_store)
