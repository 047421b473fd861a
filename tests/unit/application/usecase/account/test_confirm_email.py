"""Unit tests for ConfirmEmailUseCase."""

from dishka import AsyncContainer
import pytest

from storefront.application.usecase.account import ConfirmEmailRequest, ConfirmEmailUseCase
from storefront.application.usecase.base import View
from storefront.domain.model import User
from storefront.domain.value import TokenPurpose
from storefront.persistence.repository.inmemory import InMemoryCredentialStore
from tests.conftest import make_context, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestConfirmEmailUseCase:
    @pytest.mark.asyncio
    async def test_confirms_email_from_link(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ConfirmEmailUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice", email="alice@example.com"))
        token = await store.generate_token(user, TokenPurpose.EMAIL_CONFIRMATION)

        # Act
        result = await use_case.execute(
            ConfirmEmailRequest(context=make_context(), user_id=user.id, token=token)
        )

        # Assert
        assert result.view == View.CONFIRMATION_DONE
        assert (await store.find_by_id(user.id)).email_confirmed

    @pytest.mark.asyncio
    async def test_falls_back_to_signed_in_user(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ConfirmEmailUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice", email="alice@example.com"))
        token = await store.generate_token(user, TokenPurpose.EMAIL_CONFIRMATION)

        # Act
        result = await use_case.execute(
            ConfirmEmailRequest(context=make_context(user=user), token=token)
        )

        # Assert
        assert result.view == View.CONFIRMATION_DONE

    @pytest.mark.asyncio
    async def test_reset_token_is_not_accepted(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ConfirmEmailUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice", email="alice@example.com"))
        token = await store.generate_token(user, TokenPurpose.RESET_PASSWORD)

        # Act
        result = await use_case.execute(
            ConfirmEmailRequest(context=make_context(), user_id=user.id, token=token)
        )

        # Assert
        assert result.view == View.ERROR
        assert result.form.error_codes == ["invalid-token"]

    @pytest.mark.asyncio
    async def test_missing_token_is_invalid_url(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ConfirmEmailUseCase)

        result = await use_case.execute(ConfirmEmailRequest(context=make_context()))

        assert result.form.error_codes == ["invalid-url"]
