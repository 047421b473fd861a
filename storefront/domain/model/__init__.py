"""Domain model entities for storefront identity."""

from storefront.domain.model.event import (
    DomainEvent,
    UserLoginEvent,
    UserRegisteredEvent,
)
from storefront.domain.model.form import Form, FormError
from storefront.domain.model.notification import (
    EmailConfirmationNotification,
    Notification,
    RegistrationEmailNotification,
    RemindUserNameNotification,
    ResetPasswordEmailNotification,
    ResetPasswordSmsNotification,
)
from storefront.domain.model.store import Store
from storefront.domain.model.user import Contact, ExternalLogin, User
from storefront.domain.model.work_context import WorkContext

__all__ = [
    "Contact",
    "DomainEvent",
    "EmailConfirmationNotification",
    "ExternalLogin",
    "Form",
    "FormError",
    "Notification",
    "RegistrationEmailNotification",
    "RemindUserNameNotification",
    "ResetPasswordEmailNotification",
    "ResetPasswordSmsNotification",
    "Store",
    "User",
    "UserLoginEvent",
    "UserRegisteredEvent",
    "WorkContext",
]
