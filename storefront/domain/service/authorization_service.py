"""Authorization domain service."""

import logfire

from storefront.domain.model.user import User
from storefront.domain.repository import CredentialStore

from .base import Service

LOGIN_ON_BEHALF_PERMISSION = "platform:security:loginOnBehalf"


class AuthorizationService(Service):
    """Privileged capability checks.

    Decisions are made against the credential store's current record on
    every call, never against what the session cookie remembers.
    """

    def __init__(self, credential_store: CredentialStore) -> None:
        self.credential_store = credential_store

    async def can_impersonate(self, principal: User) -> bool:
        """Whether ``principal`` may sign in on behalf of other users."""
        with logfire.span("authorization_service.can_impersonate", user_id=principal.id):
            if principal.id is None:
                return False
            current = await self.credential_store.find_by_id(principal.id)
            if current is None or current.is_suspended:
                logfire.warn("Impersonation denied", user_id=principal.id)
                return False
            allowed = current.has_permission(LOGIN_ON_BEHALF_PERMISSION)
            if not allowed:
                logfire.warn("Impersonation denied", user_id=principal.id)
            return allowed
