"""Domain value objects for storefront identity."""

from storefront.domain.value.errors import (
    DEFAULT_DESCRIPTIONS,
    STORE_ERROR_TRANSLATIONS,
    FormErrorCode,
    StoreErrorCode,
    translate_store_error,
)
from storefront.domain.value.identifiers import StoreId, UserId
from storefront.domain.value.types import (
    ExternalLoginInfo,
    IdentityError,
    IdentityResult,
    LoginOutcome,
    LoginStatus,
    NotificationGatewayKind,
    SendNotificationResult,
    TokenPurpose,
    UserStatus,
)

__all__ = [
    # Identifiers
    "StoreId",
    "UserId",
    # Errors
    "DEFAULT_DESCRIPTIONS",
    "STORE_ERROR_TRANSLATIONS",
    "FormErrorCode",
    "StoreErrorCode",
    "translate_store_error",
    # Types
    "ExternalLoginInfo",
    "IdentityError",
    "IdentityResult",
    "LoginOutcome",
    "LoginStatus",
    "NotificationGatewayKind",
    "SendNotificationResult",
    "TokenPurpose",
    "UserStatus",
]
