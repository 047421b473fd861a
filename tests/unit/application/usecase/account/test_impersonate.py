"""Unit tests for ImpersonateUseCase."""

from dishka import AsyncContainer
import pytest

from storefront.adapter.events import RecordingEventPublisher
from storefront.application.usecase.account import ImpersonateRequest, ImpersonateUseCase
from storefront.application.usecase.base import Challenge
from storefront.config import AuthSettings
from storefront.domain.model import User
from storefront.domain.service.authorization_service import LOGIN_ON_BEHALF_PERMISSION
from storefront.persistence.repository.inmemory import InMemoryCredentialStore
from storefront.util.jwt import verify_token
from tests.conftest import make_context, make_settings
from tests.harness import create_env_fixture

unit_env = create_env_fixture(settings=make_settings())


class TestImpersonateUseCase:
    @pytest.mark.asyncio
    async def test_operator_signs_in_as_target(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ImpersonateUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        events = await unit_env.get(RecordingEventPublisher)
        auth_settings = await unit_env.get(AuthSettings)
        operator = store.add_user(
            User(user_name="operator", permissions=(LOGIN_ON_BEHALF_PERMISSION,)),
            password="Abc12345!",
        )
        target = store.add_user(User(user_name="customer"), password="Abc12345!")

        # Act
        result = await use_case.execute(
            ImpersonateRequest(context=make_context(user=operator), user_id=target.id)
        )

        # Assert
        assert result.redirect_url == "/"
        assert result.session.user_id == target.id
        assert not result.session.is_persistent
        payload = verify_token(result.session.token, auth_settings)
        assert payload.operator_user_id == operator.id
        assert payload.operator_user_name == "operator"
        assert operator.id not in store.sessions
        assert store.sessions[target.id] is False
        assert events.events == []

    @pytest.mark.asyncio
    async def test_anonymous_caller_is_sent_to_login(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ImpersonateUseCase)

        result = await use_case.execute(
            ImpersonateRequest(
                context=make_context(path="/account/impersonate/42"), user_id="42"
            )
        )

        assert result.redirect_url == "/account/login?ReturnUrl=/account/impersonate/42"

    @pytest.mark.asyncio
    async def test_caller_without_capability_is_forbidden(
        self, unit_env: AsyncContainer
    ):
        # Arrange
        use_case = await unit_env.get(ImpersonateUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        caller = store.add_user(User(user_name="customer"), password="Abc12345!")
        target = store.add_user(User(user_name="other"), password="Abc12345!")

        # Act
        result = await use_case.execute(
            ImpersonateRequest(context=make_context(user=caller), user_id=target.id)
        )

        # Assert
        assert result.challenge == Challenge.FORBID
        assert result.session is None

    @pytest.mark.asyncio
    async def test_capability_is_read_from_store(self, unit_env: AsyncContainer):
        """A capability claimed only by the session principal is not trusted."""
        # Arrange
        use_case = await unit_env.get(ImpersonateUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        caller = store.add_user(User(user_name="customer"), password="Abc12345!")
        claimed = caller.model_copy(update={"is_administrator": True})

        # Act
        result = await use_case.execute(
            ImpersonateRequest(context=make_context(user=claimed), user_id="x")
        )

        # Assert
        assert result.challenge == Challenge.FORBID

    @pytest.mark.asyncio
    async def test_unknown_target_redirects_home(self, unit_env: AsyncContainer):
        # Arrange
        use_case = await unit_env.get(ImpersonateUseCase)
        store = await unit_env.get(InMemoryCredentialStore)
        admin = store.add_user(
            User(user_name="admin", is_administrator=True), password="Abc12345!"
        )

        # Act
        result = await use_case.execute(
            ImpersonateRequest(context=make_context(user=admin), user_id="missing")
        )

        # Assert
        assert result.redirect_url == "/"
        assert result.session is None
