"""Unit tests for eligibility specifications."""

from storefront.domain.model import User
from storefront.domain.specification import (
    CanLoginToStoreSpecification,
    IsUserSuspendedSpecification,
)
from storefront.domain.value import StoreId
from tests.conftest import DEFAULT_STORE, OTHER_STORE


class TestCanLoginToStoreSpecification:
    def test_user_of_same_store_can_login(self):
        user = User(user_name="alice", store_id=StoreId("electronics"))

        assert CanLoginToStoreSpecification(user).is_satisfied_by(DEFAULT_STORE)

    def test_user_of_other_store_cannot_login(self):
        user = User(user_name="alice", store_id=StoreId("clothing"))

        assert not CanLoginToStoreSpecification(user).is_satisfied_by(DEFAULT_STORE)

    def test_user_of_trusted_store_can_login(self):
        user = User(user_name="alice", store_id=StoreId("clothing"))
        store = DEFAULT_STORE.model_copy(update={"trusted_groups": (OTHER_STORE.id,)})

        assert CanLoginToStoreSpecification(user).is_satisfied_by(store)

    def test_administrator_can_login_anywhere(self):
        user = User(
            user_name="admin", store_id=StoreId("clothing"), is_administrator=True
        )

        assert CanLoginToStoreSpecification(user).is_satisfied_by(DEFAULT_STORE)

    def test_user_without_store_can_login(self):
        assert CanLoginToStoreSpecification(User(user_name="bob")).is_satisfied_by(
            DEFAULT_STORE
        )


class TestIsUserSuspendedSpecification:
    def test_suspended(self):
        assert IsUserSuspendedSpecification().is_satisfied_by(
            User(user_name="alice", is_suspended=True)
        )

    def test_not_suspended(self):
        assert not IsUserSuspendedSpecification().is_satisfied_by(User(user_name="alice"))
