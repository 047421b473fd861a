"""Unit tests for LogoutUseCase."""

from dishka import AsyncContainer
import pytest

from storefront.application.usecase.account import LogoutRequest, LogoutUseCase
from storefront.domain.model import User
from storefront.persistence.repository.inmemory import InMemoryCredentialStore
from tests.conftest import make_context, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestLogoutUseCase:
    @pytest.mark.asyncio
    async def test_logout_ends_session(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(LogoutUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        user = store.add_user(User(user_name="alice"))
        await store.sign_in(user, is_persistent=True)

        # Act
        result = await use_case.execute(
            LogoutRequest(context=make_context(user=user, language="de-DE"))
        )

        # Assert
        assert result.redirect_url == "/de-DE"
        assert result.end_session
        assert user.id not in store.sessions

    @pytest.mark.asyncio
    async def test_anonymous_logout_still_clears_cookie(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(LogoutUseCase)

        result = await use_case.execute(LogoutRequest(context=make_context()))

        assert result.redirect_url == "/"
        assert result.end_session
