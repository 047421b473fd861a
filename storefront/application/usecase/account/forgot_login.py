"""Forgotten user name recovery use case."""

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import ForgotLoginForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.domain.model import Form, RemindUserNameNotification
from storefront.domain.service import AccountService, NotificationService
from storefront.domain.value import FormErrorCode


class ForgotLoginRequest(FlowRequest):
    pass


class ForgotLoginUseCase(BaseUseCase):
    """Email a user their user name."""

    def __init__(
        self,
        account_service: AccountService,
        notification_service: NotificationService,
    ) -> None:
        self.account_service = account_service
        self.notification_service = notification_service

    async def execute(self, request: ForgotLoginRequest) -> AccountResult:
        context = request.context
        form = Form.from_values(request.values)

        submission = parse_form(ForgotLoginForm, request.values, form)
        if submission is None:
            return AccountResult.render(View.FORGOT_LOGIN, form)

        user = await self.account_service.find_by_email(submission.email)
        if user is None:
            form.add_error(FormErrorCode.OPERATION_FAILED)
            return AccountResult.render(View.FORGOT_LOGIN, form)

        result = await self.notification_service.send(
            RemindUserNameNotification(
                store_id=context.current_store.id,
                language=context.current_language,
                sender=context.current_store.email,
                recipient=user.notification_email,
                user_name=user.user_name,
            )
        )
        if not result.is_success:
            form.add_error(FormErrorCode.NOTIFICATION_SEND_FAILED, result.error_message)
        else:
            form.posted_successfully = True
        return AccountResult.render(View.FORGOT_LOGIN, form)
