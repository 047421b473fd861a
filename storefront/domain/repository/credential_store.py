"""Credential store interface.

The credential store is the system of record for users, password hashes,
external-login links, lockout counters and user tokens. Implementations
live in the adapter and persistence layers.
"""

from abc import ABC, abstractmethod
from typing import Optional

from storefront.domain.model.user import User
from storefront.domain.value import (
    ExternalLoginInfo,
    IdentityResult,
    LoginOutcome,
    TokenPurpose,
    UserId,
)


class CredentialStore(ABC):
    """Contract for user identity persistence and verification."""

    @abstractmethod
    async def create_user(self, user: User, password: Optional[str]) -> IdentityResult:
        """Create a user, optionally with a password.

        A failed creation must leave no user visible to later lookups.
        """
        pass

    @abstractmethod
    async def update_user(self, user: User) -> IdentityResult:
        """Persist changes to an existing user."""
        pass

    @abstractmethod
    async def find_by_name(self, user_name: str) -> Optional[User]:
        """Find a user by user name (case-insensitive)."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email (case-insensitive)."""
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by id."""
        pass

    @abstractmethod
    async def find_by_login(
        self, login_provider: str, provider_key: str
    ) -> Optional[User]:
        """Find the user linked to an external provider identity."""
        pass

    @abstractmethod
    async def password_sign_in(
        self, user_name: str, password: str, lockout_on_failure: bool = True
    ) -> LoginOutcome:
        """Verify a user name and password.

        Tracks failed attempts and lockout when ``lockout_on_failure`` is set.
        Verification only: no session is established.

        Args:
            user_name: User name as submitted
            password: Password as submitted
            lockout_on_failure: Count this attempt towards lockout

        Returns:
            The outcome of the attempt
        """
        pass

    @abstractmethod
    async def external_login_sign_in(
        self, login_provider: str, provider_key: str, bypass_two_factor: bool = True
    ) -> LoginOutcome:
        """Verify an external login link.

        Verification only: no session is established.
        """
        pass

    @abstractmethod
    async def add_external_login(
        self, user_id: UserId, info: ExternalLoginInfo
    ) -> IdentityResult:
        """Link an external provider identity to a user."""
        pass

    @abstractmethod
    async def generate_token(self, user: User, purpose: TokenPurpose) -> str:
        """Issue a token for ``(user, purpose)``."""
        pass

    @abstractmethod
    async def verify_token(self, user: User, purpose: TokenPurpose, token: str) -> bool:
        """Check a token without consuming it."""
        pass

    @abstractmethod
    async def reset_password(
        self, user: User, token: str, new_password: str
    ) -> IdentityResult:
        """Verify a reset token and set a new password.

        Verification and consumption happen in one step: success rotates the
        security stamp so the token cannot be used again.
        """
        pass

    @abstractmethod
    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> IdentityResult:
        """Change a password given the current one."""
        pass

    @abstractmethod
    async def confirm_email(self, user: User, token: str) -> IdentityResult:
        """Verify an email confirmation token and mark the email confirmed."""
        pass

    @abstractmethod
    async def sign_in(self, user: User, is_persistent: bool) -> None:
        """Record that a session was established for the user."""
        pass

    @abstractmethod
    async def sign_out(self, user: User) -> None:
        """Record that the user's session was terminated."""
        pass
