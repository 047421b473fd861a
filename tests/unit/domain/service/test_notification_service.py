"""Unit tests for NotificationService."""

import pytest

from storefront.adapter.platform import MockNotificationGateway
from storefront.domain.model import RemindUserNameNotification
from storefront.domain.service import NotificationService


def _notification() -> RemindUserNameNotification:
    return RemindUserNameNotification(
        store_id="electronics", language="en-US", recipient="a@x.com", user_name="alice"
    )


class TestNotificationService:
    @pytest.mark.asyncio
    async def test_successful_send(self):
        gateway = MockNotificationGateway()

        result = await NotificationService(gateway).send(_notification())

        assert result.is_success
        assert len(gateway.sent) == 1

    @pytest.mark.asyncio
    async def test_gateway_message_is_passed_through(self):
        gateway = MockNotificationGateway()
        gateway.error_message = "Mailbox full"

        result = await NotificationService(gateway).send(_notification())

        assert not result.is_success
        assert result.error_message == "Mailbox full"

    @pytest.mark.asyncio
    async def test_gateway_exception_becomes_generic_failure(self):
        gateway = MockNotificationGateway()
        gateway.raise_error = ConnectionError("smtp down")

        result = await NotificationService(gateway).send(_notification())

        assert not result.is_success
        assert result.error_message == "Error occurred while sending notification"
