"""Unit tests for ForgotLoginUseCase."""

from dishka import AsyncContainer
import pytest

from storefront.adapter.platform import MockNotificationGateway
from storefront.application.usecase.account import ForgotLoginRequest, ForgotLoginUseCase
from storefront.application.usecase.base import View
from storefront.domain.model import RemindUserNameNotification, User
from storefront.persistence.repository.inmemory import InMemoryCredentialStore
from tests.conftest import make_context, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestForgotLoginUseCase:
    @pytest.mark.asyncio
    async def test_reminds_user_name(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ForgotLoginUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        gateway = await unit_env.get(MockNotificationGateway)
        store.add_user(User(user_name="alice", email="alice@example.com"))

        # Act
        result = await use_case.execute(
            ForgotLoginRequest(context=make_context(), values={"email": "Alice@Example.com"})
        )

        # Assert
        assert result.view == View.FORGOT_LOGIN
        assert result.form.posted_successfully
        [reminder] = gateway.sent
        assert isinstance(reminder, RemindUserNameNotification)
        assert reminder.user_name == "alice"
        assert reminder.recipient == "alice@example.com"

    @pytest.mark.asyncio
    async def test_unknown_email_fails_generically(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ForgotLoginUseCase)
        gateway = await unit_env.get(MockNotificationGateway)

        # Act
        result = await use_case.execute(
            ForgotLoginRequest(context=make_context(), values={"email": "no@example.com"})
        )

        # Assert
        assert result.form.error_codes == ["operation-failed"]
        assert gateway.sent == []

    @pytest.mark.asyncio
    async def test_send_failure_is_reported(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ForgotLoginUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        gateway = await unit_env.get(MockNotificationGateway)
        store.add_user(User(user_name="alice", email="alice@example.com"))
        gateway.raise_error = ConnectionError("gateway down")

        # Act
        result = await use_case.execute(
            ForgotLoginRequest(context=make_context(), values={"email": "alice@example.com"})
        )

        # Assert
        assert not result.form.posted_successfully
        [error] = result.form.errors
        assert error.code == "notification-send-failed"
        assert error.description == "Error occurred while sending notification"
