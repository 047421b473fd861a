"""Notifications sent through the notification gateway."""

from typing import Any, ClassVar

from storefront.domain.model.common import DomainModel
from storefront.domain.value import StoreId


class Notification(DomainModel):
    """Base notification.

    ``template`` names the message template on the platform side. Subclasses
    add the fields their template renders.
    """

    template: ClassVar[str] = "Notification"
    channel: ClassVar[str] = "Email"

    store_id: StoreId
    language: str
    sender: str | None = None
    recipient: str

    def to_payload(self) -> dict[str, Any]:
        """Serialize for the gateway."""
        return {
            "type": self.template,
            "channel": self.channel,
            **self.model_dump(mode="json"),
        }


class RegistrationEmailNotification(Notification):
    template: ClassVar[str] = "RegistrationEmailNotification"

    first_name: str | None = None
    last_name: str | None = None
    login: str


class EmailConfirmationNotification(Notification):
    template: ClassVar[str] = "EmailConfirmationNotification"

    url: str


class ResetPasswordEmailNotification(Notification):
    template: ClassVar[str] = "ResetPasswordEmailNotification"

    url: str


class ResetPasswordSmsNotification(Notification):
    template: ClassVar[str] = "ResetPasswordSmsNotification"
    channel: ClassVar[str] = "Sms"

    token: str


class RemindUserNameNotification(Notification):
    template: ClassVar[str] = "RemindUserNameNotification"

    user_name: str
