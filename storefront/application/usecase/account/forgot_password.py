"""Forgot password use case."""

import logfire

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import ForgotPasswordForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.config import StorefrontSettings
from storefront.domain.model import (
    Form,
    Notification,
    ResetPasswordEmailNotification,
    ResetPasswordSmsNotification,
    User,
    WorkContext,
)
from storefront.domain.service import (
    AccountService,
    NotificationService,
    StorefrontUrlBuilder,
    UserTokenService,
)
from storefront.domain.value import FormErrorCode, NotificationGatewayKind, TokenPurpose


class ForgotPasswordRequest(FlowRequest):
    """Forgot password form submission."""

    pass


class ForgotPasswordUseCase(BaseUseCase):
    """Use case for requesting a password reset by email link or SMS code.

    The gateway is chosen by ``reset_password_notification_gateway``. An
    unknown account, or a Phone reset for an account without a phone number,
    answers with the generic ``operation-failed`` error only.
    """

    def __init__(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        notification_service: NotificationService,
        url_builder: StorefrontUrlBuilder,
        storefront_settings: StorefrontSettings,
    ) -> None:
        self.account_service = account_service
        self.token_service = token_service
        self.notification_service = notification_service
        self.url_builder = url_builder
        self.storefront_settings = storefront_settings

    @property
    def gateway(self) -> NotificationGatewayKind:
        return NotificationGatewayKind(
            self.storefront_settings.reset_password_notification_gateway
        )

    async def execute(self, request: ForgotPasswordRequest) -> AccountResult:
        context = request.context
        form = Form.from_values(request.values)

        submission = parse_form(ForgotPasswordForm, request.values, form)
        if submission is None:
            return AccountResult.render(View.FORGOT_PASSWORD, form)

        with logfire.span("forgot_password.execute", gateway=self.gateway.value):
            user = await self.account_service.find_by_email_or_name(submission.email)
            if user is None:
                form.add_error(FormErrorCode.OPERATION_FAILED)
                return AccountResult.render(View.FORGOT_PASSWORD, form)

            if self.gateway == NotificationGatewayKind.PHONE:
                if not user.phone_number:
                    form.add_error(FormErrorCode.OPERATION_FAILED)
                    return AccountResult.render(View.FORGOT_PASSWORD, form)
                notification = await self._sms_notification(context, user)
                success_view = View.FORGOT_PASSWORD_CODE
                # Hidden field for the code entry form
                success_form = Form.from_values({"email": user.email or user.user_name})
            else:
                notification = await self._email_notification(context, user)
                success_view = View.FORGOT_PASSWORD
                success_form = form

            result = await self.notification_service.send(notification)
            if not result.is_success:
                form.add_error(
                    FormErrorCode.NOTIFICATION_SEND_FAILED, result.error_message
                )
                return AccountResult.render(View.FORGOT_PASSWORD, form)

            success_form.posted_successfully = True
            return AccountResult.render(success_view, success_form)

    async def _sms_notification(self, context: WorkContext, user: User) -> Notification:
        code = await self.token_service.generate(
            user, TokenPurpose.PHONE_RESET_PASSWORD
        )
        return ResetPasswordSmsNotification(
            store_id=context.current_store.id,
            language=context.current_language,
            recipient=user.phone_number,
            token=code,
        )

    async def _email_notification(
        self, context: WorkContext, user: User
    ) -> Notification:
        token = await self.token_service.generate(user, TokenPurpose.RESET_PASSWORD)
        return ResetPasswordEmailNotification(
            store_id=context.current_store.id,
            language=context.current_language,
            sender=context.current_store.email,
            recipient=user.notification_email,
            url=self.url_builder.absolute_url(
                "~/account/resetpassword",
                context,
                {"userId": str(user.id), "token": token},
            ),
        )
