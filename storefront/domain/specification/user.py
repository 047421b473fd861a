"""Eligibility specifications.

Pure predicates evaluated after credentials have been verified and before
a session is granted.
"""

from storefront.domain.model.store import Store
from storefront.domain.model.user import User


class CanLoginToStoreSpecification:
    """Whether a user may authenticate against a store.

    Administrators and users without a store may sign in anywhere. Other
    users may sign in to their own store or to a store that trusts it.
    """

    def __init__(self, user: User) -> None:
        self.user = user

    def is_satisfied_by(self, store: Store) -> bool:
        if self.user.is_administrator or not self.user.store_id:
            return True
        if self.user.store_id == store.id:
            return True
        return self.user.store_id in store.trusted_groups


class IsUserSuspendedSpecification:
    """Whether a user account is suspended."""

    def is_satisfied_by(self, user: User) -> bool:
        return user.is_suspended
