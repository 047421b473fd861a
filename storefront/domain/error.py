"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnsupportedProviderError(DomainError):
    """Raised when an external login provider is not configured."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported login provider: {provider}")


class StoreNotFoundError(DomainError):
    """Raised when a request addresses a store this storefront does not serve."""

    def __init__(self, store_id: str):
        self.store_id = store_id
        super().__init__(f"Store not configured: {store_id}")


class ExternalLoginError(DomainError):
    """Raised when an external provider cannot produce login info."""

    pass
