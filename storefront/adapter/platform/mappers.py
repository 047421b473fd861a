"""Mappers between platform API payloads and domain models.

The platform speaks camelCase JSON.
"""

from datetime import datetime
from typing import Any, Dict

from storefront.domain.model.user import Contact, ExternalLogin, User
from storefront.domain.value import (
    IdentityError,
    IdentityResult,
    LoginOutcome,
    LoginStatus,
    StoreErrorCode,
    StoreId,
    UserId,
    UserStatus,
)

_LOGIN_STATUSES = {
    "succeeded": LoginStatus.SUCCEEDED,
    "lockedout": LoginStatus.LOCKED_OUT,
    "requirestwofactor": LoginStatus.REQUIRES_TWO_FACTOR,
    "rejected": LoginStatus.REJECTED,
    "failed": LoginStatus.FAILED,
}


def _parse_status(value: Any) -> UserStatus:
    try:
        return UserStatus(str(value or UserStatus.APPROVED.value).lower())
    except ValueError:
        return UserStatus.APPROVED


def dto_to_user(dto: Dict[str, Any]) -> User:
    """Convert a platform user payload to a User domain model."""
    contact = dto.get("contact")
    lockout_end = dto.get("lockoutEnd")
    return User(
        id=UserId(dto["id"]),
        user_name=dto["userName"],
        email=dto.get("email"),
        password_hash=dto.get("passwordHash"),
        store_id=StoreId(dto["storeId"]) if dto.get("storeId") else None,
        phone_number=dto.get("phoneNumber"),
        email_confirmed=dto.get("emailConfirmed", False),
        contact=Contact(
            first_name=contact.get("firstName"),
            last_name=contact.get("lastName"),
            full_name=contact.get("fullName"),
            email=contact.get("email"),
            organization_id=contact.get("organizationId"),
        )
        if contact
        else None,
        external_logins=tuple(
            ExternalLogin(
                login_provider=login["loginProvider"],
                provider_key=login["providerKey"],
            )
            for login in dto.get("logins") or []
        ),
        is_suspended=dto.get("isSuspended", False),
        status=_parse_status(dto.get("status")),
        is_administrator=dto.get("isAdministrator", False),
        permissions=tuple(dto.get("permissions") or ()),
        access_failed_count=dto.get("accessFailedCount", 0),
        lockout_enabled=dto.get("lockoutEnabled", True),
        lockout_end=datetime.fromisoformat(lockout_end) if lockout_end else None,
        two_factor_enabled=dto.get("twoFactorEnabled", False),
        security_stamp=dto.get("securityStamp") or "",
    )


def user_to_dto(user: User) -> Dict[str, Any]:
    """Convert a User domain model to a platform payload.

    Operator fields are session state and are never sent.
    """
    dto: Dict[str, Any] = {
        "id": user.id,
        "userName": user.user_name,
        "email": user.email,
        "storeId": user.store_id,
        "phoneNumber": user.phone_number,
        "emailConfirmed": user.email_confirmed,
        "isSuspended": user.is_suspended,
        "lockoutEnabled": user.lockout_enabled,
        "twoFactorEnabled": user.two_factor_enabled,
        "logins": [
            {"loginProvider": login.login_provider, "providerKey": login.provider_key}
            for login in user.external_logins
        ],
    }
    if user.contact:
        dto["contact"] = {
            "firstName": user.contact.first_name,
            "lastName": user.contact.last_name,
            "fullName": user.contact.full_name,
            "email": user.contact.email,
            "organizationId": user.contact.organization_id,
        }
    return dto


def dto_to_identity_result(dto: Dict[str, Any] | None) -> IdentityResult:
    """Convert a platform identity result; unknown codes become DefaultError."""
    if not dto:
        return IdentityResult.from_code(StoreErrorCode.DEFAULT_ERROR)
    if dto.get("succeeded"):
        return IdentityResult.success()
    errors = [
        IdentityError(
            code=StoreErrorCode.parse(error.get("code", "")),
            description=error.get("description"),
        )
        for error in dto.get("errors") or []
    ]
    if not errors:
        errors = [IdentityError(code=StoreErrorCode.DEFAULT_ERROR)]
    return IdentityResult.failed(*errors)


def dto_to_login_outcome(dto: Dict[str, Any] | None) -> LoginOutcome:
    """Convert a platform sign-in check result."""
    if not dto:
        return LoginOutcome.failed()
    status = _LOGIN_STATUSES.get(str(dto.get("status", "")).lower(), LoginStatus.FAILED)
    return LoginOutcome(status=status, reason=dto.get("reason"))
