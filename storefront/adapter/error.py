"""Adapter layer errors."""

from storefront.domain.error import ExternalLoginError


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class PlatformError(ProviderError):
    """The commerce platform API failed or answered unexpectedly."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class OAuthError(ProviderError, ExternalLoginError):
    """An OAuth provider could not complete the login."""

    pass
