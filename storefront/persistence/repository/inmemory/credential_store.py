"""In-memory credential store for testing and local development."""

import asyncio
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from pydantic import EmailStr, TypeAdapter, ValidationError

from storefront.config import AuthSettings
from storefront.domain.model.user import ExternalLogin, User
from storefront.domain.repository import CredentialStore
from storefront.domain.value import (
    ExternalLoginInfo,
    IdentityError,
    IdentityResult,
    LoginOutcome,
    StoreErrorCode,
    TokenPurpose,
    UserId,
    UserStatus,
)
from storefront.util.tokens import (
    create_link_token,
    create_numeric_code,
    verify_link_token,
    verify_numeric_code,
)

_USER_NAME_CHARS = re.compile(r"^[A-Za-z0-9\-._@+]+$")
_EMAIL = TypeAdapter(EmailStr)
# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class PasswordPolicy:
    """Password rules enforced on create, reset and change."""

    required_length: int = 6
    required_unique_chars: int = 1
    require_non_alphanumeric: bool = True
    require_lowercase: bool = True
    require_uppercase: bool = True
    require_digit: bool = True

    def validate(self, password: str) -> list[IdentityError]:
        errors = []
        if len(password) < self.required_length:
            errors.append(
                IdentityError(
                    code=StoreErrorCode.PASSWORD_TOO_SHORT,
                    description=f"Passwords must be at least {self.required_length} characters.",
                )
            )
        if self.require_non_alphanumeric and password.isalnum():
            errors.append(IdentityError(code=StoreErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC))
        if self.require_digit and not any(c.isdigit() for c in password):
            errors.append(IdentityError(code=StoreErrorCode.PASSWORD_REQUIRES_DIGIT))
        if self.require_lowercase and not any(c.islower() for c in password):
            errors.append(IdentityError(code=StoreErrorCode.PASSWORD_REQUIRES_LOWER))
        if self.require_uppercase and not any(c.isupper() for c in password):
            errors.append(IdentityError(code=StoreErrorCode.PASSWORD_REQUIRES_UPPER))
        if len(set(password)) < self.required_unique_chars:
            errors.append(IdentityError(code=StoreErrorCode.PASSWORD_REQUIRES_UNIQUE_CHARS))
        return errors


def _new_stamp() -> str:
    return uuid.uuid4().hex


def _is_valid_email(value: str) -> bool:
    try:
        _EMAIL.validate_python(value)
    except ValidationError:
        return False
    return True


def _same(left: Optional[str], right: Optional[str]) -> bool:
    return left is not None and right is not None and left.lower() == right.lower()


class InMemoryCredentialStore(CredentialStore):
    """In-memory implementation of CredentialStore.

    Mutations are serialized with a lock so a failed create leaves nothing
    behind and token redemption is atomic with its verification.
    """

    def __init__(
        self,
        auth_settings: AuthSettings,
        password_policy: PasswordPolicy | None = None,
        bcrypt_rounds: int = 12,
    ) -> None:
        self.auth_settings = auth_settings
        self.password_policy = password_policy or PasswordPolicy()
        self.bcrypt_rounds = bcrypt_rounds
        self._users: dict[UserId, User] = {}
        self._lock = asyncio.Lock()
        # user id -> is_persistent for the most recent sign in
        self.sessions: dict[UserId, bool] = {}

    # Hashing

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode(
            "utf-8"
        )

    @staticmethod
    def _check_password(user: User, password: str) -> bool:
        if not user.password_hash:
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
                user.password_hash.encode("utf-8"),
            )
        except ValueError:
            return False

    # Seeding

    def add_user(self, user: User, password: Optional[str] = None) -> User:
        """Insert a user directly, bypassing validation."""
        user = user.model_copy(
            update={
                "id": user.id or UserId(uuid.uuid4().hex),
                "security_stamp": user.security_stamp or _new_stamp(),
                "password_hash": self.hash_password(password)
                if password
                else user.password_hash,
            }
        )
        self._users[user.id] = user
        return user

    # Validation

    def _validate_user(self, user: User) -> list[IdentityError]:
        errors = []
        if not user.user_name or not _USER_NAME_CHARS.match(user.user_name):
            errors.append(
                IdentityError(
                    code=StoreErrorCode.INVALID_USER_NAME,
                    description=f"User name '{user.user_name}' is invalid.",
                )
            )
        elif any(
            _same(other.user_name, user.user_name) and other.id != user.id
            for other in self._users.values()
        ):
            errors.append(
                IdentityError(
                    code=StoreErrorCode.DUPLICATE_USER_NAME,
                    description=f"User name '{user.user_name}' is already taken.",
                )
            )

        if user.email is not None:
            if not _is_valid_email(user.email):
                errors.append(
                    IdentityError(
                        code=StoreErrorCode.INVALID_EMAIL,
                        description=f"Email '{user.email}' is invalid.",
                    )
                )
            elif any(
                _same(other.email, user.email) and other.id != user.id
                for other in self._users.values()
            ):
                errors.append(
                    IdentityError(
                        code=StoreErrorCode.DUPLICATE_EMAIL,
                        description=f"Email '{user.email}' is already taken.",
                    )
                )
        return errors

    def _is_locked_out(self, user: User) -> bool:
        return (
            user.lockout_enabled
            and user.lockout_end is not None
            and user.lockout_end > datetime.now(timezone.utc)
        )

    # CredentialStore

    async def create_user(self, user: User, password: Optional[str]) -> IdentityResult:
        async with self._lock:
            errors = self._validate_user(user)
            if password is not None:
                errors.extend(self.password_policy.validate(password))
            for login in user.external_logins:
                if self._find_by_login(login.login_provider, login.provider_key):
                    errors.append(IdentityError(code=StoreErrorCode.LOGIN_ALREADY_ASSOCIATED))
            if errors:
                return IdentityResult.failed(*errors)

            created = user.model_copy(
                update={
                    "id": UserId(uuid.uuid4().hex),
                    "security_stamp": _new_stamp(),
                    "password_hash": self.hash_password(password) if password else None,
                }
            )
            self._users[created.id] = created
            return IdentityResult.success()

    async def update_user(self, user: User) -> IdentityResult:
        async with self._lock:
            if user.id is None or user.id not in self._users:
                return IdentityResult.from_code(
                    StoreErrorCode.CONCURRENCY_FAILURE, "User does not exist."
                )
            errors = self._validate_user(user)
            if errors:
                return IdentityResult.failed(*errors)
            stored = self._users[user.id]
            # Credentials and transient operator fields are not updatable here
            self._users[user.id] = user.model_copy(
                update={
                    "password_hash": stored.password_hash,
                    "security_stamp": stored.security_stamp,
                    "operator_user_id": None,
                    "operator_user_name": None,
                }
            )
            return IdentityResult.success()

    async def find_by_name(self, user_name: str) -> Optional[User]:
        return next(
            (u for u in self._users.values() if _same(u.user_name, user_name)), None
        )

    async def find_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users.values() if _same(u.email, email)), None)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    def _find_by_login(self, login_provider: str, provider_key: str) -> Optional[User]:
        for user in self._users.values():
            for login in user.external_logins:
                if (
                    _same(login.login_provider, login_provider)
                    and login.provider_key == provider_key
                ):
                    return user
        return None

    async def find_by_login(
        self, login_provider: str, provider_key: str
    ) -> Optional[User]:
        return self._find_by_login(login_provider, provider_key)

    async def password_sign_in(
        self, user_name: str, password: str, lockout_on_failure: bool = True
    ) -> LoginOutcome:
        async with self._lock:
            user = await self.find_by_name(user_name)
            if user is None:
                return LoginOutcome.failed()
            if self._is_locked_out(user):
                return LoginOutcome.locked_out()

            if not self._check_password(user, password):
                if lockout_on_failure and user.lockout_enabled:
                    failed_count = user.access_failed_count + 1
                    if failed_count >= self.auth_settings.max_failed_access_attempts:
                        self._users[user.id] = user.model_copy(
                            update={
                                "access_failed_count": 0,
                                "lockout_end": datetime.now(timezone.utc)
                                + timedelta(minutes=self.auth_settings.lockout_minutes),
                            }
                        )
                        return LoginOutcome.locked_out()
                    self._users[user.id] = user.model_copy(
                        update={"access_failed_count": failed_count}
                    )
                return LoginOutcome.failed()

            if user.status == UserStatus.REJECTED:
                return LoginOutcome.rejected("Account is rejected")

            self._users[user.id] = user.model_copy(
                update={"access_failed_count": 0, "lockout_end": None}
            )
            if user.two_factor_enabled:
                return LoginOutcome.requires_two_factor()
            return LoginOutcome.success()

    async def external_login_sign_in(
        self, login_provider: str, provider_key: str, bypass_two_factor: bool = True
    ) -> LoginOutcome:
        user = self._find_by_login(login_provider, provider_key)
        if user is None:
            return LoginOutcome.failed()
        if self._is_locked_out(user):
            return LoginOutcome.locked_out()
        if user.status == UserStatus.REJECTED:
            return LoginOutcome.rejected("Account is rejected")
        if user.two_factor_enabled and not bypass_two_factor:
            return LoginOutcome.requires_two_factor()
        return LoginOutcome.success()

    async def add_external_login(
        self, user_id: UserId, info: ExternalLoginInfo
    ) -> IdentityResult:
        async with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return IdentityResult.from_code(
                    StoreErrorCode.DEFAULT_ERROR, "User does not exist."
                )
            if self._find_by_login(info.login_provider, info.provider_key):
                return IdentityResult.from_code(StoreErrorCode.LOGIN_ALREADY_ASSOCIATED)
            login = ExternalLogin(
                login_provider=info.login_provider, provider_key=info.provider_key
            )
            self._users[user_id] = user.model_copy(
                update={"external_logins": (*user.external_logins, login)}
            )
            return IdentityResult.success()

    async def generate_token(self, user: User, purpose: TokenPurpose) -> str:
        stored = self._users.get(user.id) or user
        if purpose == TokenPurpose.PHONE_RESET_PASSWORD:
            return create_numeric_code(
                stored.id,
                purpose.value,
                stored.security_stamp,
                self.auth_settings.token_secret,
                self.auth_settings.phone_code_step_seconds,
            )
        return create_link_token(
            stored.id,
            purpose.value,
            stored.security_stamp,
            self.auth_settings.token_secret,
            timedelta(hours=self.auth_settings.token_lifespan_hours),
        )

    def _verify(self, user: User, purpose: TokenPurpose, token: str) -> bool:
        stored = self._users.get(user.id)
        if stored is None or not token:
            return False
        if purpose == TokenPurpose.PHONE_RESET_PASSWORD:
            return verify_numeric_code(
                token,
                stored.id,
                purpose.value,
                stored.security_stamp,
                self.auth_settings.token_secret,
                self.auth_settings.phone_code_step_seconds,
            )
        return verify_link_token(
            token,
            stored.id,
            purpose.value,
            stored.security_stamp,
            self.auth_settings.token_secret,
        )

    async def verify_token(self, user: User, purpose: TokenPurpose, token: str) -> bool:
        return self._verify(user, purpose, token)

    async def reset_password(
        self, user: User, token: str, new_password: str
    ) -> IdentityResult:
        async with self._lock:
            if not self._verify(user, TokenPurpose.RESET_PASSWORD, token):
                return IdentityResult.from_code(StoreErrorCode.INVALID_TOKEN)
            errors = self.password_policy.validate(new_password)
            if errors:
                return IdentityResult.failed(*errors)
            stored = self._users[user.id]
            self._users[user.id] = stored.model_copy(
                update={
                    "password_hash": self.hash_password(new_password),
                    "security_stamp": _new_stamp(),
                }
            )
            return IdentityResult.success()

    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> IdentityResult:
        async with self._lock:
            stored = self._users.get(user.id)
            if stored is None:
                return IdentityResult.from_code(
                    StoreErrorCode.DEFAULT_ERROR, "User does not exist."
                )
            if not self._check_password(stored, current_password):
                return IdentityResult.from_code(StoreErrorCode.PASSWORD_MISMATCH)
            errors = self.password_policy.validate(new_password)
            if errors:
                return IdentityResult.failed(*errors)
            self._users[user.id] = stored.model_copy(
                update={
                    "password_hash": self.hash_password(new_password),
                    "security_stamp": _new_stamp(),
                }
            )
            return IdentityResult.success()

    async def confirm_email(self, user: User, token: str) -> IdentityResult:
        async with self._lock:
            if not self._verify(user, TokenPurpose.EMAIL_CONFIRMATION, token):
                return IdentityResult.from_code(StoreErrorCode.INVALID_TOKEN)
            stored = self._users[user.id]
            self._users[user.id] = stored.model_copy(
                update={"email_confirmed": True, "security_stamp": _new_stamp()}
            )
            return IdentityResult.success()

    async def sign_in(self, user: User, is_persistent: bool) -> None:
        self.sessions[user.id] = is_persistent

    async def sign_out(self, user: User) -> None:
        self.sessions.pop(user.id, None)
