"""Unit tests for the challenge policy and store routing middleware."""

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
import pytest

from storefront.domain.service import StorefrontUrlBuilder, StoreService
from storefront.interface.api.challenge import ChallengePolicy, register_challenge_handlers
from storefront.interface.api.routing import StoreRoutingMiddleware
from storefront.interface.error import AccessDenied, AuthenticationRequired
from tests.conftest import make_settings


@pytest.fixture
def client() -> TestClient:
    settings = make_settings()
    store_service = StoreService(storefront_settings=settings.storefront)
    policy = ChallengePolicy(
        url_builder=StorefrontUrlBuilder(settings.storefront.default_store_id),
        store_service=store_service,
        api_path_prefix=settings.storefront.api_path_prefix,
    )

    app = FastAPI()

    @app.get("/account/orders")
    async def orders():
        raise AuthenticationRequired()

    @app.get("/admin")
    async def admin():
        raise AccessDenied()

    @app.get("/storefrontapi/orders")
    async def api_orders():
        raise AuthenticationRequired()

    @app.get("/storefrontapi/admin")
    async def api_admin():
        raise AccessDenied()

    @app.get("/whereami")
    async def whereami(request: Request):
        return {
            "store": request.state.store.id,
            "language": request.state.language,
            "path": request.url.path,
            "original_path": request.state.original_path,
        }

    register_challenge_handlers(app, policy)
    app.add_middleware(StoreRoutingMiddleware, store_service=store_service)
    return TestClient(app)


class TestChallengePolicy:
    def test_browser_request_redirects_to_login(self, client: TestClient):
        response = client.get("/account/orders?page=2", follow_redirects=False)

        assert response.status_code == 302
        assert (
            response.headers["location"]
            == "/account/login?ReturnUrl=%2Faccount%2Forders%3Fpage%3D2"
        )

    def test_login_redirect_keeps_store_and_language(self, client: TestClient):
        response = client.get("/clothing/en-US/account/orders", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == (
            "/clothing/account/login?ReturnUrl=%2Fclothing%2Fen-US%2Faccount%2Forders"
        )

    def test_non_default_language_is_kept(self, client: TestClient):
        response = client.get("/de-DE/account/orders", follow_redirects=False)

        assert response.headers["location"].startswith("/de-DE/account/login?")

    def test_browser_request_redirects_to_access_denied(self, client: TestClient):
        response = client.get("/admin", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/account/accessdenied?ReturnUrl=%2Fadmin"

    def test_api_request_gets_401(self, client: TestClient):
        response = client.get("/storefrontapi/orders", follow_redirects=False)

        assert response.status_code == 401
        assert "location" not in response.headers

    def test_prefixed_api_request_gets_401(self, client: TestClient):
        response = client.get(
            "/clothing/en-US/storefrontapi/orders", follow_redirects=False
        )

        assert response.status_code == 401

    def test_api_request_gets_403(self, client: TestClient):
        response = client.get("/storefrontapi/admin", follow_redirects=False)

        assert response.status_code == 403


class TestStoreRoutingMiddleware:
    def test_plain_path_uses_default_store(self, client: TestClient):
        response = client.get("/whereami")

        assert response.json() == {
            "store": "electronics",
            "language": "en-US",
            "path": "/whereami",
            "original_path": "/whereami",
        }

    def test_store_and_language_prefix_is_stripped(self, client: TestClient):
        response = client.get("/Clothing/en-us/whereami")

        assert response.json() == {
            "store": "clothing",
            "language": "en-US",
            "path": "/whereami",
            "original_path": "/Clothing/en-us/whereami",
        }

    def test_language_only_prefix(self, client: TestClient):
        response = client.get("/de-DE/whereami")

        body = response.json()
        assert body["store"] == "electronics"
        assert body["language"] == "de-DE"
        assert body["path"] == "/whereami"
