"""User token domain service."""

import logfire

from storefront.domain.model.user import User
from storefront.domain.repository import CredentialStore
from storefront.domain.value import IdentityResult, TokenPurpose

from .base import Service


class UserTokenService(Service):
    """Issues, verifies and redeems purpose-scoped user tokens.

    Verification never consumes a token. Redemption (password reset, email
    confirmation) verifies and consumes in a single credential store call.
    """

    def __init__(self, credential_store: CredentialStore) -> None:
        self.credential_store = credential_store

    async def generate(self, user: User, purpose: TokenPurpose) -> str:
        with logfire.span(
            "token_service.generate", user_id=user.id, purpose=purpose.value
        ):
            return await self.credential_store.generate_token(user, purpose)

    async def verify(self, user: User, purpose: TokenPurpose, token: str) -> bool:
        """Check a token for ``(user, purpose)`` without consuming it."""
        with logfire.span("token_service.verify", user_id=user.id, purpose=purpose.value):
            is_valid = await self.credential_store.verify_token(user, purpose, token)
            if not is_valid:
                logfire.warn(
                    "Token verification failed", user_id=user.id, purpose=purpose.value
                )
            return is_valid

    async def reset_password(
        self, user: User, token: str, new_password: str
    ) -> IdentityResult:
        with logfire.span("token_service.reset_password", user_id=user.id):
            result = await self.credential_store.reset_password(
                user, token, new_password
            )
            if result.succeeded:
                logfire.info("Password reset", user_id=user.id)
            return result

    async def confirm_email(self, user: User, token: str) -> IdentityResult:
        with logfire.span("token_service.confirm_email", user_id=user.id):
            return await self.credential_store.confirm_email(user, token)
