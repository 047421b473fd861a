"""Notification domain service."""

from abc import ABC, abstractmethod

import logfire

from storefront.domain.model.notification import Notification
from storefront.domain.value import SendNotificationResult

from .base import Service

SEND_FAILED_MESSAGE = "Error occurred while sending notification"


class NotificationGateway(ABC):
    """Delivers templated email and SMS messages."""

    @abstractmethod
    async def send(self, notification: Notification) -> SendNotificationResult:
        pass


class NotificationService(Service):
    """Sends notifications synchronously within the request.

    Gateway exceptions are converted to a failed result so a mail or SMS
    outage never reaches the caller as a raw fault.
    """

    def __init__(self, gateway: NotificationGateway) -> None:
        self.gateway = gateway

    async def send(self, notification: Notification) -> SendNotificationResult:
        with logfire.span(
            "notification_service.send",
            template=notification.template,
            store_id=notification.store_id,
        ):
            try:
                result = await self.gateway.send(notification)
            except Exception as e:
                logfire.error(
                    "Notification send raised",
                    template=notification.template,
                    error=str(e),
                )
                return SendNotificationResult(
                    is_success=False, error_message=SEND_FAILED_MESSAGE
                )

            if not result.is_success:
                logfire.warn(
                    "Notification send failed",
                    template=notification.template,
                    error=result.error_message,
                )
            return result
