"""Session domain service."""

import logfire

from storefront.config import AuthSettings
from storefront.domain.model.user import User
from storefront.domain.repository import CredentialStore
from storefront.domain.value.common import ValueObject
from storefront.util.jwt import (
    JWTError,
    TokenPayload,
    create_token,
    session_lifetime,
    verify_token,
)

from .base import Service


class SessionGrant(ValueObject):
    """A session to be handed to the caller as a signed cookie."""

    token: str
    user_id: str
    is_persistent: bool
    # Cookie max-age in seconds; None for browser-session cookies
    max_age: int | None = None


class SessionService(Service):
    """Establishes, restores and terminates sessions."""

    def __init__(
        self, credential_store: CredentialStore, auth_settings: AuthSettings
    ) -> None:
        self.credential_store = credential_store
        self.auth_settings = auth_settings

    async def sign_in(self, user: User, is_persistent: bool) -> SessionGrant:
        """Sign the user in and issue a session token.

        Operator fields on ``user`` are carried in the token so an
        impersonated session stays visible as such.
        """
        with logfire.span(
            "session_service.sign_in", user_id=user.id, is_persistent=is_persistent
        ):
            if user.id is None:
                raise ValueError("Cannot sign in a user without an id")

            await self.credential_store.sign_in(user, is_persistent)
            token = create_token(
                user_id=user.id,
                user_name=user.user_name,
                settings=self.auth_settings,
                store_id=user.store_id,
                persistent=is_persistent,
                operator_user_id=user.operator_user_id,
                operator_user_name=user.operator_user_name,
            )
            max_age = None
            if is_persistent:
                max_age = int(
                    session_lifetime(True, self.auth_settings).total_seconds()
                )

            logfire.info(
                "Session established",
                user_id=user.id,
                is_persistent=is_persistent,
                impersonated=user.is_impersonated,
            )
            return SessionGrant(
                token=token,
                user_id=user.id,
                is_persistent=is_persistent,
                max_age=max_age,
            )

    async def sign_out(self, user: User) -> None:
        with logfire.span("session_service.sign_out", user_id=user.id):
            await self.credential_store.sign_out(user)
            logfire.info("Session terminated", user_id=user.id)

    def read_session(self, token: str | None) -> TokenPayload | None:
        """Decode a session cookie without raising.

        Returns:
            Payload if the token is present and valid, None otherwise
        """
        if not token:
            return None
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.debug("Session cookie rejected, treating as anonymous", error=str(e))
            return None
