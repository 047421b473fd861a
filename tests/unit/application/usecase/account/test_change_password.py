"""Unit tests for ChangePasswordUseCase."""

from dishka import AsyncContainer
import pytest

from storefront.application.usecase.account import (
    ChangePasswordRequest,
    ChangePasswordUseCase,
)
from storefront.application.usecase.base import Challenge, View
from storefront.domain.model import User
from storefront.domain.value import LoginStatus
from storefront.persistence.repository.inmemory import InMemoryCredentialStore
from tests.conftest import make_context, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestChangePasswordUseCase:
    @pytest.mark.asyncio
    async def test_change_password(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ChangePasswordUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice"), password="Abc12345!")

        # Act
        result = await use_case.execute(
            ChangePasswordRequest(
                context=make_context(user=user),
                values={
                    "oldPassword": "Abc12345!",
                    "newPassword": "Xyz98765!",
                    "newPasswordConfirmation": "Xyz98765!",
                },
            )
        )

        # Assert
        assert result.redirect_url == "/account"
        outcome = await store.password_sign_in("alice", "Xyz98765!")
        assert outcome.status == LoginStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ChangePasswordUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice"), password="Abc12345!")

        # Act
        result = await use_case.execute(
            ChangePasswordRequest(
                context=make_context(user=user),
                values={
                    "oldPassword": "nope",
                    "newPassword": "Xyz98765!",
                    "newPasswordConfirmation": "Xyz98765!",
                },
            )
        )

        # Assert
        assert result.view == View.ACCOUNT
        assert result.form.error_codes == ["password-mismatch"]

    @pytest.mark.asyncio
    async def test_confirmation_must_match(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ChangePasswordUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice"), password="Abc12345!")

        # Act
        result = await use_case.execute(
            ChangePasswordRequest(
                context=make_context(user=user),
                values={
                    "oldPassword": "Abc12345!",
                    "newPassword": "Xyz98765!",
                    "newPasswordConfirmation": "Xyz98765?",
                },
            )
        )

        # Assert
        assert result.form.error_codes == ["password-and-confirm-password-does-not-match"]

    @pytest.mark.asyncio
    async def test_anonymous_caller_is_challenged(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ChangePasswordUseCase)

        result = await use_case.execute(ChangePasswordRequest(context=make_context()))

        assert result.challenge == Challenge.LOGIN
