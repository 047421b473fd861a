"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from storefront.config import (
    AuthSettings,
    PlatformSettings,
    Settings,
    StorefrontSettings,
)
from storefront.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_storefront_settings(self, settings: Settings) -> StorefrontSettings:
        return settings.storefront

    @provide(scope=Scope.APP)
    def provide_platform_settings(self, settings: Settings) -> PlatformSettings:
        return settings.platform
