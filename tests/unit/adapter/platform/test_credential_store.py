"""Unit tests for the platform-backed credential store and gateway."""

import json

import httpx
import pytest

from storefront.adapter.error import PlatformError
from storefront.adapter.platform import (
    PlatformClient,
    PlatformCredentialStore,
    PlatformNotificationGateway,
)
from storefront.config import PlatformSettings
from storefront.domain.model import ResetPasswordSmsNotification, User
from storefront.domain.value import LoginStatus, StoreErrorCode, StoreId, UserStatus

USER_DTO = {
    "id": "u-1",
    "userName": "alice",
    "email": "alice@example.com",
    "storeId": "electronics",
    "status": "Rejected",
    "contact": {"firstName": "Alice", "organizationId": "org-1"},
    "logins": [{"loginProvider": "GitHub", "providerKey": "42"}],
    "permissions": ["platform:security:loginOnBehalf"],
    "lockoutEnd": "2030-01-01T00:00:00+00:00",
}


class PlatformStub:
    """Answers platform requests from a path -> (status, body) table."""

    def __init__(self, routes: dict[tuple[str, str], tuple[int, object]]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(
            (request.method, request.url.path), (404, None)
        )
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)


def _client(stub: PlatformStub) -> PlatformClient:
    return PlatformClient(
        PlatformSettings(base_url="https://platform.example.com", api_key="key-1"),
        transport=httpx.MockTransport(stub),
    )


class TestPlatformCredentialStore:
    @pytest.mark.asyncio
    async def test_find_by_id_maps_user(self):
        # Arrange
        stub = PlatformStub(
            {("GET", "/api/platform/security/users/id/u-1"): (200, USER_DTO)}
        )
        store = PlatformCredentialStore(_client(stub))

        # Act
        user = await store.find_by_id("u-1")

        # Assert
        assert user.user_name == "alice"
        assert user.store_id == StoreId("electronics")
        assert user.status == UserStatus.REJECTED
        assert user.contact.organization_id == "org-1"
        assert user.external_logins[0].provider_key == "42"
        assert user.lockout_end.year == 2030
        assert stub.requests[0].headers["api_key"] == "key-1"

    @pytest.mark.asyncio
    async def test_missing_user_is_none(self):
        store = PlatformCredentialStore(_client(PlatformStub({})))

        assert await store.find_by_name("nobody") is None

    @pytest.mark.asyncio
    async def test_path_segments_are_escaped(self):
        # Arrange
        stub = PlatformStub({})
        store = PlatformCredentialStore(_client(stub))

        # Act
        await store.find_by_email("a/b@example.com")

        # Assert
        assert b"/email/a%2Fb" in stub.requests[0].url.raw_path

    @pytest.mark.asyncio
    async def test_create_user_translates_errors(self):
        # Arrange
        stub = PlatformStub(
            {
                ("POST", "/api/platform/security/users/create"): (
                    200,
                    {
                        "succeeded": False,
                        "errors": [
                            {"code": "DuplicateUserName", "description": "taken"},
                            {"code": "SomethingNew"},
                        ],
                    },
                )
            }
        )
        store = PlatformCredentialStore(_client(stub))

        # Act
        result = await store.create_user(User(user_name="alice"), "Abc12345!")

        # Assert
        assert not result.succeeded
        assert [e.code for e in result.errors] == [
            StoreErrorCode.DUPLICATE_USER_NAME,
            StoreErrorCode.DEFAULT_ERROR,
        ]
        body = json.loads(stub.requests[0].content)
        assert body["userName"] == "alice"
        assert body["password"] == "Abc12345!"

    @pytest.mark.asyncio
    async def test_password_check_maps_status(self):
        # Arrange
        stub = PlatformStub(
            {
                ("POST", "/api/platform/security/users/alice/checkpassword"): (
                    200,
                    {"status": "LockedOut"},
                )
            }
        )
        store = PlatformCredentialStore(_client(stub))

        # Act
        outcome = await store.password_sign_in("alice", "pw")

        # Assert
        assert outcome.status == LoginStatus.LOCKED_OUT
        assert json.loads(stub.requests[0].content) == {
            "password": "pw",
            "lockoutOnFailure": True,
        }

    @pytest.mark.asyncio
    async def test_server_error_raises(self):
        stub = PlatformStub(
            {("POST", "/api/platform/security/users/alice/checkpassword"): (500, {})}
        )
        store = PlatformCredentialStore(_client(stub))

        with pytest.raises(PlatformError) as exc_info:
            await store.password_sign_in("alice", "pw")
        assert exc_info.value.status_code == 500


class TestPlatformNotificationGateway:
    @pytest.mark.asyncio
    async def test_send_posts_payload(self):
        # Arrange
        stub = PlatformStub(
            {
                ("POST", "/api/notifications/send"): (
                    200,
                    {"isSuccess": False, "errorMessage": "Invalid number"},
                )
            }
        )
        gateway = PlatformNotificationGateway(_client(stub))
        sms = ResetPasswordSmsNotification(
            store_id=StoreId("electronics"),
            language="en-US",
            recipient="+15550100",
            token="123456",
        )

        # Act
        result = await gateway.send(sms)

        # Assert
        assert not result.is_success
        assert result.error_message == "Invalid number"
        payload = json.loads(stub.requests[0].content)
        assert payload["type"] == "ResetPasswordSmsNotification"
        assert payload["channel"] == "Sms"
        assert payload["token"] == "123456"
