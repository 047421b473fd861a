"""Unit tests for StorefrontUrlBuilder."""

import pytest

from storefront.domain.service import StorefrontUrlBuilder
from tests.conftest import DEFAULT_STORE, OTHER_STORE, make_context


@pytest.fixture
def url_builder() -> StorefrontUrlBuilder:
    return StorefrontUrlBuilder(default_store_id="electronics")


class TestToAppAbsolute:
    def test_default_store_and_language_keep_plain_paths(self, url_builder):
        assert url_builder.to_app_absolute("~/account", DEFAULT_STORE, "en-US") == "/account"

    def test_root(self, url_builder):
        assert url_builder.to_app_absolute("~/", DEFAULT_STORE, "en-US") == "/"

    def test_non_default_language_is_prefixed(self, url_builder):
        assert (
            url_builder.to_app_absolute("~/account/login", DEFAULT_STORE, "de-DE")
            == "/de-DE/account/login"
        )

    def test_non_default_store_is_prefixed(self, url_builder):
        assert (
            url_builder.to_app_absolute("~/account?x=1", OTHER_STORE, "en-US")
            == "/clothing/account?x=1"
        )

    def test_store_root(self, url_builder):
        assert url_builder.to_app_absolute("~/", OTHER_STORE, "en-US") == "/clothing"

    def test_non_virtual_path_is_unchanged(self, url_builder):
        assert url_builder.to_app_absolute("/cart", OTHER_STORE, "en-US") == "/cart"


class TestReturnUrls:
    @pytest.mark.parametrize(
        "url",
        ["https://evil.example.com/", "//evil.example.com", "/\\evil.example.com", "", None],
    )
    def test_non_local_urls_fall_back_to_store_root(self, url_builder, url):
        assert url_builder.sanitize_return_url(url) == "~/"

    @pytest.mark.parametrize("url", ["/cart", "/account?tab=orders", "~/account"])
    def test_local_urls_are_kept(self, url_builder, url):
        assert url_builder.sanitize_return_url(url) == url

    def test_redirect_url_resolves_for_store(self, url_builder):
        context = make_context(store=OTHER_STORE)

        assert url_builder.redirect_url("https://evil.example.com", context) == "/clothing"
        assert url_builder.redirect_url("~/account", context) == "/clothing/account"


class TestAbsoluteUrl:
    def test_uses_store_host(self, url_builder):
        url = url_builder.absolute_url(
            "~/account/resetpassword", make_context(), {"userId": "u1", "token": "t"}
        )

        assert url == (
            "https://electronics.example.com/account/resetpassword?userId=u1&token=t"
        )

    def test_falls_back_to_request_host(self, url_builder):
        store = DEFAULT_STORE.model_copy(update={"host": None})

        url = url_builder.absolute_url("~/account", make_context(store=store))

        assert url == "https://testserver/account"
