"""Test configuration and fixtures."""

import logfire
import pytest

from storefront.config import Settings, StorefrontSettings, StoreSettings
from storefront.domain.model import Store, User, WorkContext
from storefront.domain.value import StoreId

# Keep spans and logs local and quiet during tests
logfire.configure(send_to_logfire=False, console=False)


DEFAULT_STORE = Store(
    id=StoreId("electronics"),
    name="Electronics",
    host="electronics.example.com",
    email="noreply@electronics.example.com",
    default_language="en-US",
    languages=("en-US", "de-DE"),
)

OTHER_STORE = Store(
    id=StoreId("clothing"),
    name="Clothing",
    host="clothing.example.com",
    email="noreply@clothing.example.com",
    default_language="en-US",
    languages=("en-US",),
)


def make_settings(**storefront_overrides) -> Settings:
    """Settings with two stores and the given storefront overrides."""
    storefront = StorefrontSettings(
        default_store_id="electronics",
        stores=[
            StoreSettings(
                id="electronics",
                name="Electronics",
                host="electronics.example.com",
                email="noreply@electronics.example.com",
                languages=["en-US", "de-DE"],
            ),
            StoreSettings(
                id="clothing",
                name="Clothing",
                host="clothing.example.com",
                email="noreply@clothing.example.com",
            ),
        ],
        **storefront_overrides,
    )
    return Settings(environment="test", storefront=storefront)


def make_context(
    user: User | None = None,
    store: Store = DEFAULT_STORE,
    language: str = "en-US",
    path: str = "/",
) -> WorkContext:
    """Work context for a request to ``store``."""
    return WorkContext(
        current_store=store,
        current_language=language,
        current_user=user,
        request_scheme="https",
        request_host="testserver",
        request_path=path,
    )


@pytest.fixture
def context() -> WorkContext:
    return make_context()
