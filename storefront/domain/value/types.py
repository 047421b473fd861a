"""Domain value objects for storefront identity.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum
from typing import Iterable

from storefront.domain.value.common import ValueObject
from storefront.domain.value.errors import StoreErrorCode


class TokenPurpose(str, Enum):
    """Purpose a user token is scoped to."""

    EMAIL_CONFIRMATION = "EmailConfirmation"
    RESET_PASSWORD = "ResetPassword"
    # Numeric code delivered by SMS
    PHONE_RESET_PASSWORD = "PhoneResetPassword"


class UserStatus(str, Enum):
    """Administrative account status."""

    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationGatewayKind(str, Enum):
    """Channel used to deliver password reset credentials."""

    EMAIL = "Email"
    PHONE = "Phone"


class LoginStatus(str, Enum):
    """Terminal state of a single authentication attempt."""

    SUCCEEDED = "succeeded"
    LOCKED_OUT = "locked_out"
    REQUIRES_TWO_FACTOR = "requires_two_factor"
    REJECTED = "rejected"
    FAILED = "failed"


class LoginOutcome(ValueObject):
    """Result of a credential check, decided by the credential store."""

    status: LoginStatus
    reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == LoginStatus.SUCCEEDED

    @classmethod
    def success(cls) -> "LoginOutcome":
        return cls(status=LoginStatus.SUCCEEDED)

    @classmethod
    def locked_out(cls) -> "LoginOutcome":
        return cls(status=LoginStatus.LOCKED_OUT)

    @classmethod
    def requires_two_factor(cls) -> "LoginOutcome":
        return cls(status=LoginStatus.REQUIRES_TWO_FACTOR)

    @classmethod
    def rejected(cls, reason: str) -> "LoginOutcome":
        return cls(status=LoginStatus.REJECTED, reason=reason)

    @classmethod
    def failed(cls) -> "LoginOutcome":
        return cls(status=LoginStatus.FAILED)


class IdentityError(ValueObject):
    """A single error reported by the credential store."""

    code: StoreErrorCode
    description: str | None = None


class IdentityResult(ValueObject):
    """Result of a credential store mutation."""

    succeeded: bool
    errors: tuple[IdentityError, ...] = ()

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        return cls(succeeded=False, errors=errors)

    @classmethod
    def from_code(
        cls, code: StoreErrorCode, description: str | None = None
    ) -> "IdentityResult":
        return cls.failed(IdentityError(code=code, description=description))


class ExternalLoginInfo(ValueObject):
    """Identity returned by an external login provider callback."""

    login_provider: str
    provider_key: str
    provider_display_name: str | None = None
    claims: dict[str, str] = {}

    def find_first_value(
        self, claim_types: Iterable[str], default: str | None = None
    ) -> str | None:
        """Return the first non-empty claim among ``claim_types``.

        Args:
            claim_types: Claim types in priority order
            default: Value returned when none of the claims is present

        Returns:
            The first non-empty claim value, or ``default``
        """
        for claim_type in claim_types:
            value = self.claims.get(claim_type)
            if value and value.strip():
                return value
        return default


class SendNotificationResult(ValueObject):
    """Outcome of a notification send."""

    is_success: bool
    error_message: str | None = None
