"""End-to-end tests for the account flows over HTTP."""

from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

import pytest
from fastapi.testclient import TestClient

from storefront.adapter.events import RecordingEventPublisher
from storefront.adapter.platform import MockNotificationGateway
from storefront.domain.model import (
    ResetPasswordEmailNotification,
    User,
    UserLoginEvent,
    UserRegisteredEvent,
)
from storefront.domain.service.authorization_service import LOGIN_ON_BEHALF_PERMISSION
from storefront.interface.api.app import create_app
from storefront.persistence.repository.inmemory import InMemoryCredentialStore
from tests.conftest import make_settings
from tests.di import build_test_container

PASSWORD = "Abc12345!"
TOKEN_FIELD = "__RequestVerificationToken"


@dataclass
class Shop:
    client: TestClient
    store: InMemoryCredentialStore
    gateway: MockNotificationGateway
    events: RecordingEventPublisher

    def token(self, page: str) -> str:
        """Open a form page and return its anti-forgery token."""
        response = self.client.get(page)
        assert response.status_code == 200
        return response.json()["antiforgery_token"]

    def post(self, path: str, data: dict, page: str | None = None):
        token = self.token(page or path.split("?")[0])
        return self.client.post(
            path, data={**data, TOKEN_FIELD: token}, follow_redirects=False
        )

    def login(self, user_name: str, password: str = PASSWORD):
        return self.post(
            "/account/login", {"userName": user_name, "password": password}
        )


@pytest.fixture
def shop():
    settings = make_settings()
    container = build_test_container(settings=settings)
    app = create_app(settings=settings, container=container)

    with TestClient(app) as client:
        yield Shop(
            client=client,
            store=client.portal.call(container.get, InMemoryCredentialStore),
            gateway=client.portal.call(container.get, MockNotificationGateway),
            events=client.portal.call(container.get, RecordingEventPublisher),
        )


class TestRegistration:
    def test_register_then_view_account(self, shop: Shop):
        # Act
        response = shop.post(
            "/account/register",
            {
                "UserName": "alice",
                "Email": "alice@example.com",
                "Password": PASSWORD,
                "FirstName": "Alice",
            },
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/account"
        assert "storefront.session" in response.cookies

        account = shop.client.get("/account")
        assert account.status_code == 200
        assert account.json()["view"] == "customers/account"
        assert account.json()["form"]["values"]["user_name"] == "alice"

        assert [type(e) for e in shop.events.events] == [
            UserRegisteredEvent,
            UserLoginEvent,
        ]
        assert len(shop.gateway.sent) == 1

    def test_register_errors_render_view_with_token(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)

        # Act
        response = shop.post(
            "/account/register",
            {"UserName": "alice", "Email": "alice@example.com", "Password": PASSWORD},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["view"] == "customers/register"
        assert [e["code"] for e in body["form"]["errors"]] == ["duplicate-user-name"]
        assert "Password" not in body["form"]["values"]
        assert body["antiforgery_token"]

    def test_register_with_email_box_left_empty(self, shop: Shop):
        # Act
        response = shop.post(
            "/account/register",
            {
                "UserName": "bob",
                "Email": "",
                "Password": PASSWORD,
                "FirstName": "",
                "LastName": "",
            },
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/account"
        user = shop.client.portal.call(shop.store.find_by_name, "bob")
        assert user.email is None

    def test_register_in_other_store(self, shop: Shop):
        # Act
        response = shop.post(
            "/clothing/account/register",
            {"UserName": "bob", "Password": PASSWORD},
        )

        # Assert
        assert response.headers["location"] == "/clothing/account"
        user = shop.client.portal.call(shop.store.find_by_name, "bob")
        assert user.store_id == "clothing"


class TestAntiforgery:
    def test_post_without_token_is_rejected(self, shop: Shop):
        # Arrange
        shop.token("/account/login")

        # Act
        response = shop.client.post(
            "/account/login", data={"userName": "alice", "password": PASSWORD}
        )

        # Assert
        assert response.status_code == 400

    def test_post_with_wrong_token_is_rejected(self, shop: Shop):
        shop.token("/account/login")

        response = shop.client.post(
            "/account/login",
            data={"userName": "alice", "password": PASSWORD, TOKEN_FIELD: "forged"},
        )

        assert response.status_code == 400

    def test_token_accepted_from_header(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)
        token = shop.token("/account/login")

        # Act
        response = shop.client.post(
            "/account/login",
            json={"userName": "alice", "password": PASSWORD},
            headers={"X-XSRF-TOKEN": token},
            follow_redirects=False,
        )

        # Assert
        assert response.status_code == 302

    def test_sms_code_entry_requires_token(self, shop: Shop):
        shop.token("/account/forgotpassword")

        response = shop.client.post(
            "/account/forgotpasswordbycode", data={"email": "alice", "code": "123456"}
        )

        assert response.status_code == 400


class TestLogin:
    def test_login_redirects_to_return_url(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)

        # Act
        response = shop.post(
            "/account/login?ReturnUrl=/cart",
            {"userName": "alice", "password": PASSWORD},
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/cart"

    def test_login_page_carries_return_url(self, shop: Shop):
        response = shop.client.get("/account/login?ReturnUrl=%2Faccount%2Forders")

        assert response.status_code == 200
        assert response.json()["form"]["values"] == {"return_url": "/account/orders"}

    def test_return_url_query_key_is_case_insensitive(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)

        # Act
        response = shop.post(
            "/account/login?returnUrl=/cart",
            {"userName": "alice", "password": PASSWORD},
        )

        # Assert
        assert response.headers["location"] == "/cart"

    def test_return_url_posted_back_with_form(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)
        page = shop.client.get("/account/login?ReturnUrl=%2Fcart").json()

        # Act
        response = shop.post(
            "/account/login",
            {"userName": "alice", "password": PASSWORD, **page["form"]["values"]},
        )

        # Assert
        assert response.headers["location"] == "/cart"

    def test_failed_login_renders_error(self, shop: Shop):
        response = shop.login("nobody")

        assert response.status_code == 200
        assert response.json()["form"]["errors"][0]["code"] == "login-failed"

    def test_logout_clears_session(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)
        shop.login("alice")

        # Act
        response = shop.client.get("/account/logout", follow_redirects=False)

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        assert shop.client.get("/storefrontapi/account").status_code == 401


class TestChallenges:
    def test_anonymous_page_redirects_to_login(self, shop: Shop):
        response = shop.client.get("/account", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/account/login?ReturnUrl=%2Faccount"

    def test_anonymous_api_call_gets_401(self, shop: Shop):
        response = shop.client.get("/storefrontapi/account", follow_redirects=False)

        assert response.status_code == 401

    def test_signed_in_api_call(self, shop: Shop):
        # Arrange
        shop.store.add_user(
            User(user_name="alice", email="alice@example.com"), password=PASSWORD
        )
        shop.login("alice")

        # Act
        response = shop.client.get("/storefrontapi/account")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["user_name"] == "alice"
        assert body["is_impersonated"] is False

    def test_forbidden_page_redirects_to_access_denied(self, shop: Shop):
        # Arrange
        shop.store.add_user(User(user_name="alice"), password=PASSWORD)
        target = shop.store.add_user(User(user_name="bob"), password=PASSWORD)
        shop.login("alice")

        # Act
        response = shop.client.get(
            f"/account/impersonate/{target.id}", follow_redirects=False
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"].startswith(
            "/account/accessdenied?ReturnUrl=%2Faccount%2Fimpersonate%2F"
        )


class TestExternalLogin:
    def test_external_login_redirects_to_provider(self, shop: Shop):
        response = shop.client.get(
            "/account/externallogin",
            params={"authType": "Mock", "returnUrl": "/cart"},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"].startswith(
            "https://oauth.example.com/authorize?"
        )

    def test_callback_provisions_and_signs_in(self, shop: Shop):
        # Act
        response = shop.client.get(
            "/account/externallogincallback",
            params={"authType": "Mock", "code": "key-9", "state": "s-1"},
            follow_redirects=False,
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        account = shop.client.get("/storefrontapi/account").json()
        assert account["user_name"] == "Mock--key-9"


class TestPasswordReset:
    def test_reset_by_email_link(self, shop: Shop):
        # Arrange
        shop.store.add_user(
            User(user_name="alice", email="alice@example.com"), password=PASSWORD
        )

        # Act: request the link
        response = shop.post("/account/forgotpassword", {"email": "alice@example.com"})

        # Assert
        assert response.json()["form"]["posted_successfully"] is True
        [notification] = shop.gateway.sent
        assert isinstance(notification, ResetPasswordEmailNotification)
        query = parse_qs(urlsplit(notification.url).query)

        # Act: open the link
        page = shop.client.get(
            "/account/resetpassword",
            params={"userId": query["userId"][0], "token": query["token"][0]},
        )
        assert page.json()["view"] == "customers/reset_password"
        token = page.json()["antiforgery_token"]

        # Act: choose the new password
        done = shop.client.post(
            "/account/resetpassword",
            data={
                "token": query["token"][0],
                "userName": "alice",
                "password": "Xyz98765!",
                "passwordConfirmation": "Xyz98765!",
                TOKEN_FIELD: token,
            },
        )

        # Assert
        assert done.json()["view"] == "customers/reset_password_confirmation"
        assert shop.login("alice", "Xyz98765!").status_code == 302


class TestImpersonation:
    def test_operator_impersonates_customer(self, shop: Shop):
        # Arrange
        shop.store.add_user(
            User(user_name="operator", permissions=(LOGIN_ON_BEHALF_PERMISSION,)),
            password=PASSWORD,
        )
        target = shop.store.add_user(User(user_name="customer"), password=PASSWORD)
        shop.login("operator")

        # Act
        response = shop.client.get(
            f"/account/impersonate/{target.id}", follow_redirects=False
        )

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/"
        account = shop.client.get("/storefrontapi/account").json()
        assert account["user_name"] == "customer"
        assert account["is_impersonated"] is True
        assert account["operator_user_name"] == "operator"

    def test_anonymous_impersonation_goes_to_login(self, shop: Shop):
        response = shop.client.get("/account/impersonate/u-1", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == (
            "/account/login?ReturnUrl=/account/impersonate/u-1"
        )


class TestHealth:
    def test_health(self, shop: Shop):
        response = shop.client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
