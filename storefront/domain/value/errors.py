"""Error vocabularies and the translation between them.

``StoreErrorCode`` is what the credential store reports. ``FormErrorCode`` is
the stable, kebab-case vocabulary shown to callers. Every store code has
exactly one entry in ``STORE_ERROR_TRANSLATIONS``.
"""

from enum import Enum
from types import MappingProxyType


class StoreErrorCode(str, Enum):
    """Error codes reported by the credential store."""

    DEFAULT_ERROR = "DefaultError"
    CONCURRENCY_FAILURE = "ConcurrencyFailure"
    DUPLICATE_USER_NAME = "DuplicateUserName"
    DUPLICATE_EMAIL = "DuplicateEmail"
    INVALID_USER_NAME = "InvalidUserName"
    INVALID_EMAIL = "InvalidEmail"
    INVALID_TOKEN = "InvalidToken"
    LOGIN_ALREADY_ASSOCIATED = "LoginAlreadyAssociated"
    PASSWORD_MISMATCH = "PasswordMismatch"
    PASSWORD_TOO_SHORT = "PasswordTooShort"
    PASSWORD_REQUIRES_NON_ALPHANUMERIC = "PasswordRequiresNonAlphanumeric"
    PASSWORD_REQUIRES_DIGIT = "PasswordRequiresDigit"
    PASSWORD_REQUIRES_LOWER = "PasswordRequiresLower"
    PASSWORD_REQUIRES_UPPER = "PasswordRequiresUpper"
    PASSWORD_REQUIRES_UNIQUE_CHARS = "PasswordRequiresUniqueChars"
    USER_ALREADY_HAS_PASSWORD = "UserAlreadyHasPassword"
    USER_LOCKOUT_NOT_ENABLED = "UserLockoutNotEnabled"

    @classmethod
    def parse(cls, value: str) -> "StoreErrorCode":
        """Parse a code from the wire, falling back to ``DEFAULT_ERROR``."""
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT_ERROR


class FormErrorCode(str, Enum):
    """User-facing error codes."""

    # Translated store rejections
    DEFAULT_ERROR = "default-error"
    CONCURRENCY_FAILURE = "concurrency-failure"
    DUPLICATE_USER_NAME = "duplicate-user-name"
    DUPLICATE_EMAIL = "duplicate-email"
    INVALID_USER_NAME = "invalid-user-name"
    INVALID_EMAIL = "invalid-email"
    INVALID_TOKEN = "invalid-token"
    LOGIN_ALREADY_ASSOCIATED = "login-already-associated"
    PASSWORD_MISMATCH = "password-mismatch"
    PASSWORD_TOO_SHORT = "password-too-short"
    PASSWORD_REQUIRES_NON_ALPHANUMERIC = "password-requires-non-alphanumeric"
    PASSWORD_REQUIRES_DIGIT = "password-requires-digit"
    PASSWORD_REQUIRES_LOWER = "password-requires-lower"
    PASSWORD_REQUIRES_UPPER = "password-requires-upper"
    PASSWORD_REQUIRES_UNIQUE_CHARS = "password-requires-unique-chars"
    USER_ALREADY_HAS_PASSWORD = "user-already-has-password"
    USER_LOCKOUT_NOT_ENABLED = "user-lockout-not-enabled"

    # Flow guards
    INVALID_URL = "invalid-url"
    USER_NOT_FOUND = "user-not-found"
    INVITATION_ALREADY_USED = "invitation-already-used"
    OPERATION_FAILED = "operation-failed"
    RESET_PASSWORD_IS_TURNED_OFF = "reset-password-is-turned-off"
    RESET_PASSWORD_INVALID_DATA = "reset-password-invalid-data"
    PASSWORD_AND_CONFIRM_PASSWORD_DOES_NOT_MATCH = (
        "password-and-confirm-password-does-not-match"
    )

    # Login outcomes
    USER_CANNOT_LOGIN_IN_STORE = "user-cannot-login-in-store"
    ACCOUNT_IS_BLOCKED = "account-is-blocked"
    LOGIN_FAILED = "login-failed"

    # Gateway
    NOTIFICATION_SEND_FAILED = "notification-send-failed"


STORE_ERROR_TRANSLATIONS: MappingProxyType[StoreErrorCode, FormErrorCode] = (
    MappingProxyType(
        {
            StoreErrorCode.DEFAULT_ERROR: FormErrorCode.DEFAULT_ERROR,
            StoreErrorCode.CONCURRENCY_FAILURE: FormErrorCode.CONCURRENCY_FAILURE,
            StoreErrorCode.DUPLICATE_USER_NAME: FormErrorCode.DUPLICATE_USER_NAME,
            StoreErrorCode.DUPLICATE_EMAIL: FormErrorCode.DUPLICATE_EMAIL,
            StoreErrorCode.INVALID_USER_NAME: FormErrorCode.INVALID_USER_NAME,
            StoreErrorCode.INVALID_EMAIL: FormErrorCode.INVALID_EMAIL,
            StoreErrorCode.INVALID_TOKEN: FormErrorCode.INVALID_TOKEN,
            StoreErrorCode.LOGIN_ALREADY_ASSOCIATED: FormErrorCode.LOGIN_ALREADY_ASSOCIATED,
            StoreErrorCode.PASSWORD_MISMATCH: FormErrorCode.PASSWORD_MISMATCH,
            StoreErrorCode.PASSWORD_TOO_SHORT: FormErrorCode.PASSWORD_TOO_SHORT,
            StoreErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC: (
                FormErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC
            ),
            StoreErrorCode.PASSWORD_REQUIRES_DIGIT: FormErrorCode.PASSWORD_REQUIRES_DIGIT,
            StoreErrorCode.PASSWORD_REQUIRES_LOWER: FormErrorCode.PASSWORD_REQUIRES_LOWER,
            StoreErrorCode.PASSWORD_REQUIRES_UPPER: FormErrorCode.PASSWORD_REQUIRES_UPPER,
            StoreErrorCode.PASSWORD_REQUIRES_UNIQUE_CHARS: (
                FormErrorCode.PASSWORD_REQUIRES_UNIQUE_CHARS
            ),
            StoreErrorCode.USER_ALREADY_HAS_PASSWORD: FormErrorCode.USER_ALREADY_HAS_PASSWORD,
            StoreErrorCode.USER_LOCKOUT_NOT_ENABLED: FormErrorCode.USER_LOCKOUT_NOT_ENABLED,
        }
    )
)


DEFAULT_DESCRIPTIONS: MappingProxyType[FormErrorCode, str] = MappingProxyType(
    {
        FormErrorCode.DEFAULT_ERROR: "An unknown failure has occurred.",
        FormErrorCode.CONCURRENCY_FAILURE: "Optimistic concurrency failure, object has been modified.",
        FormErrorCode.DUPLICATE_USER_NAME: "User name is already taken.",
        FormErrorCode.DUPLICATE_EMAIL: "Email is already taken.",
        FormErrorCode.INVALID_USER_NAME: "User name is invalid.",
        FormErrorCode.INVALID_EMAIL: "Email is invalid.",
        FormErrorCode.INVALID_TOKEN: "Invalid token.",
        FormErrorCode.LOGIN_ALREADY_ASSOCIATED: "A user with this login already exists.",
        FormErrorCode.PASSWORD_MISMATCH: "Incorrect password.",
        FormErrorCode.PASSWORD_TOO_SHORT: "Password is too short.",
        FormErrorCode.PASSWORD_REQUIRES_NON_ALPHANUMERIC: "Passwords must have at least one non alphanumeric character.",
        FormErrorCode.PASSWORD_REQUIRES_DIGIT: "Passwords must have at least one digit ('0'-'9').",
        FormErrorCode.PASSWORD_REQUIRES_LOWER: "Passwords must have at least one lowercase ('a'-'z').",
        FormErrorCode.PASSWORD_REQUIRES_UPPER: "Passwords must have at least one uppercase ('A'-'Z').",
        FormErrorCode.PASSWORD_REQUIRES_UNIQUE_CHARS: "Passwords must use more different characters.",
        FormErrorCode.USER_ALREADY_HAS_PASSWORD: "User already has a password set.",
        FormErrorCode.USER_LOCKOUT_NOT_ENABLED: "Lockout is not enabled for this user.",
        FormErrorCode.INVALID_URL: "The link is invalid.",
        FormErrorCode.USER_NOT_FOUND: "User not found.",
        FormErrorCode.INVITATION_ALREADY_USED: "The invitation has already been used.",
        FormErrorCode.OPERATION_FAILED: "Operation failed.",
        FormErrorCode.RESET_PASSWORD_IS_TURNED_OFF: "Reset password by code is turned off.",
        FormErrorCode.RESET_PASSWORD_INVALID_DATA: "User name or email is required.",
        FormErrorCode.PASSWORD_AND_CONFIRM_PASSWORD_DOES_NOT_MATCH: "Password and confirm password do not match.",
        FormErrorCode.USER_CANNOT_LOGIN_IN_STORE: "User cannot login to the current store.",
        FormErrorCode.ACCOUNT_IS_BLOCKED: "Your account has been blocked.",
        FormErrorCode.LOGIN_FAILED: "Login attempt failed.",
        FormErrorCode.NOTIFICATION_SEND_FAILED: "Error occurred while sending notification",
    }
)


def translate_store_error(code: StoreErrorCode) -> FormErrorCode:
    """Translate a credential store error code to its user-facing code."""
    return STORE_ERROR_TRANSLATIONS[code]
