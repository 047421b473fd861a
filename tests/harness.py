"""Test harness for unit and E2E tests.

Every external collaborator (platform, OAuth providers, event bus) is mocked
unless unmocked explicitly.
"""

import pytest_asyncio

from storefront.config import Settings
from storefront.util.di import Component
from tests.di import build_test_container


def create_env_fixture(
    unmock: set[Component] | None = None, settings: Settings | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access

    Args:
        unmock: Components to use real implementations for
        settings: Settings override for the container

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        unit_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_login(unit_env):
            store = await unit_env.get(InMemoryCredentialStore)
            store.add_user(User(user_name="alice"), password="Secret1!")
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set(), settings=settings)

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment
