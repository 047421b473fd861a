"""User aggregate root.

Users are owned by the credential store. A user belongs to exactly one
store when created, and may sign in locally, through linked external
providers, or on an operator's behalf while impersonated.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from storefront.domain.model.common import DomainModel
from storefront.domain.value import StoreId, UserId, UserStatus


class Contact(DomainModel):
    """Contact profile attached to a user."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    organization_id: Optional[str] = None


class ExternalLogin(DomainModel):
    """Link between a user and an external provider identity."""

    login_provider: str
    provider_key: str


class User(DomainModel):
    """User aggregate root."""

    id: Optional[UserId] = None  # Assigned by the credential store
    user_name: str
    email: Optional[str] = None
    password_hash: Optional[str] = None  # Absent until a password is set
    store_id: Optional[StoreId] = None
    phone_number: Optional[str] = None
    email_confirmed: bool = False
    contact: Optional[Contact] = None
    external_logins: tuple[ExternalLogin, ...] = ()

    # Set only while the account is impersonated
    operator_user_id: Optional[UserId] = None
    operator_user_name: Optional[str] = None

    is_suspended: bool = False
    status: UserStatus = UserStatus.APPROVED
    is_administrator: bool = False
    permissions: tuple[str, ...] = ()

    access_failed_count: int = Field(default=0, ge=0)
    lockout_enabled: bool = True
    lockout_end: Optional[datetime] = None
    two_factor_enabled: bool = False

    security_stamp: str = ""

    @property
    def is_impersonated(self) -> bool:
        """Whether an operator is acting as this user."""
        return self.operator_user_id is not None

    @property
    def notification_email(self) -> str:
        """Address notifications for this user are sent to."""
        if self.contact and self.contact.email:
            return self.contact.email
        return self.email or self.user_name

    def has_permission(self, permission: str) -> bool:
        return self.is_administrator or permission in self.permissions
