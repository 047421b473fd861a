"""Notification gateways."""

import logfire

from storefront.adapter.platform.client import PlatformClient
from storefront.domain.model.notification import Notification
from storefront.domain.service.notification_service import NotificationGateway
from storefront.domain.value import SendNotificationResult

SEND_PATH = "/api/notifications/send"


class PlatformNotificationGateway(NotificationGateway):
    """Sends notifications through the platform notification module."""

    def __init__(self, client: PlatformClient) -> None:
        self.client = client

    async def send(self, notification: Notification) -> SendNotificationResult:
        dto = await self.client.post(SEND_PATH, json=notification.to_payload())
        result = SendNotificationResult(
            is_success=bool(dto and dto.get("isSuccess")),
            error_message=(dto or {}).get("errorMessage"),
        )
        logfire.info(
            "Notification sent",
            template=notification.template,
            is_success=result.is_success,
        )
        return result


class MockNotificationGateway(NotificationGateway):
    """Records notifications instead of sending them.

    Set ``error_message`` to make sends fail with that message, or
    ``raise_error`` to make them raise.
    """

    def __init__(self) -> None:
        self.sent: list[Notification] = []
        self.error_message: str | None = None
        self.raise_error: Exception | None = None

    async def send(self, notification: Notification) -> SendNotificationResult:
        if self.raise_error is not None:
            raise self.raise_error
        if self.error_message is not None:
            return SendNotificationResult(
                is_success=False, error_message=self.error_message
            )
        self.sent.append(notification)
        return SendNotificationResult(is_success=True)

    def sent_of(self, notification_type: type[Notification]) -> list[Notification]:
        return [n for n in self.sent if isinstance(n, notification_type)]
