"""Account domain service."""

import logfire

from storefront.domain.error import NotFoundError
from storefront.domain.model.user import User
from storefront.domain.repository import CredentialStore
from storefront.domain.value import (
    ExternalLoginInfo,
    IdentityResult,
    LoginOutcome,
    UserId,
)

from .base import Service


class AccountService(Service):
    """Domain service for user lookups and account mutations."""

    def __init__(self, credential_store: CredentialStore) -> None:
        """Initialize account service.

        Args:
            credential_store: Credential store
        """
        self.credential_store = credential_store

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("account_service.get_by_id", user_id=user_id):
            user = await self.credential_store.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=user_id)
                raise NotFoundError("User", user_id)
            return user

    async def find_by_id(self, user_id: UserId) -> User | None:
        with logfire.span("account_service.find_by_id", user_id=user_id):
            return await self.credential_store.find_by_id(user_id)

    async def find_by_name(self, user_name: str) -> User | None:
        with logfire.span("account_service.find_by_name", user_name=user_name):
            user = await self.credential_store.find_by_name(user_name)
            if not user:
                logfire.info("User not found by name", user_name=user_name)
            return user

    async def find_by_email(self, email: str) -> User | None:
        with logfire.span("account_service.find_by_email"):
            return await self.credential_store.find_by_email(email)

    async def find_by_login(self, login_provider: str, provider_key: str) -> User | None:
        with logfire.span(
            "account_service.find_by_login",
            login_provider=login_provider,
            provider_key=provider_key,
        ):
            return await self.credential_store.find_by_login(
                login_provider, provider_key
            )

    async def find_by_email_or_name(self, value: str) -> User | None:
        """Resolve a user by email first, then by user name.

        Args:
            value: Email address or user name as typed by the caller

        Returns:
            The first match, or None
        """
        with logfire.span("account_service.find_by_email_or_name"):
            user = await self.credential_store.find_by_email(value)
            if user is None:
                user = await self.credential_store.find_by_name(value)
            return user

    async def find_by_name_or_email(
        self, user_name: str | None, email: str | None
    ) -> User | None:
        """Resolve a user by user name first, then by email.

        Args:
            user_name: User name, if submitted
            email: Email, if submitted

        Returns:
            The first match, or None
        """
        with logfire.span("account_service.find_by_name_or_email"):
            user = None
            if user_name:
                user = await self.credential_store.find_by_name(user_name)
            if user is None and email:
                user = await self.credential_store.find_by_email(email)
            return user

    async def create(self, user: User, password: str | None) -> IdentityResult:
        """Create a user in the credential store."""
        with logfire.span(
            "account_service.create", user_name=user.user_name, store_id=user.store_id
        ):
            result = await self.credential_store.create_user(user, password)
            if result.succeeded:
                logfire.info("User created", user_name=user.user_name)
            else:
                logfire.warn(
                    "User creation rejected",
                    user_name=user.user_name,
                    codes=[error.code.value for error in result.errors],
                )
            return result

    async def update(self, user: User) -> IdentityResult:
        with logfire.span("account_service.update", user_id=user.id):
            return await self.credential_store.update_user(user)

    async def add_external_login(
        self, user_id: UserId, info: ExternalLoginInfo
    ) -> IdentityResult:
        with logfire.span(
            "account_service.add_external_login",
            user_id=user_id,
            login_provider=info.login_provider,
        ):
            return await self.credential_store.add_external_login(user_id, info)

    async def verify_password(self, user_name: str, password: str) -> LoginOutcome:
        """Verify credentials with lockout tracking enabled."""
        with logfire.span("account_service.verify_password", user_name=user_name):
            outcome = await self.credential_store.password_sign_in(
                user_name, password, lockout_on_failure=True
            )
            logfire.info(
                "Password verification finished",
                user_name=user_name,
                status=outcome.status.value,
            )
            return outcome

    async def verify_external_login(
        self, login_provider: str, provider_key: str
    ) -> LoginOutcome:
        with logfire.span(
            "account_service.verify_external_login",
            login_provider=login_provider,
            provider_key=provider_key,
        ):
            return await self.credential_store.external_login_sign_in(
                login_provider, provider_key, bypass_two_factor=True
            )

    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> IdentityResult:
        with logfire.span("account_service.change_password", user_id=user.id):
            return await self.credential_store.change_password(
                user, current_password, new_password
            )
