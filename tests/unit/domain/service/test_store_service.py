"""Unit tests for StoreService path resolution."""

import pytest

from storefront.domain.error import StoreNotFoundError
from storefront.domain.service import StoreService
from tests.conftest import make_settings


@pytest.fixture
def store_service() -> StoreService:
    return StoreService(make_settings().storefront)


class TestResolvePath:
    def test_plain_path_uses_default_store(self, store_service):
        store, language, path = store_service.resolve_path("/account/login")

        assert store.id == "electronics"
        assert language == "en-US"
        assert path == "/account/login"

    def test_store_and_language_prefix_is_stripped(self, store_service):
        store, language, path = store_service.resolve_path("/electronics/de-de/account")

        assert store.id == "electronics"
        assert language == "de-DE"
        assert path == "/account"

    def test_store_prefix_only(self, store_service):
        store, language, path = store_service.resolve_path("/clothing/account/login")

        assert store.id == "clothing"
        assert language == "en-US"
        assert path == "/account/login"

    def test_language_prefix_only(self, store_service):
        store, language, path = store_service.resolve_path("/de-DE/account")

        assert store.id == "electronics"
        assert language == "de-DE"
        assert path == "/account"

    def test_unsupported_language_stays_in_path(self, store_service):
        _, language, path = store_service.resolve_path("/clothing/de-DE/account")

        assert language == "en-US"
        assert path == "/de-DE/account"

    def test_root(self, store_service):
        store, _, path = store_service.resolve_path("/")

        assert store.id == "electronics"
        assert path == "/"


class TestGet:
    def test_unknown_store_raises(self, store_service):
        with pytest.raises(StoreNotFoundError):
            store_service.get("garden")

    def test_lookup_is_case_insensitive(self, store_service):
        assert store_service.get("Clothing").id == "clothing"
