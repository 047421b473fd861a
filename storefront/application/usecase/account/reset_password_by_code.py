"""SMS code verification use case."""

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import ResetPasswordByCodeForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.config import StorefrontSettings
from storefront.domain.model import Form
from storefront.domain.service import AccountService, UserTokenService
from storefront.domain.value import FormErrorCode, NotificationGatewayKind, TokenPurpose


class ResetPasswordByCodeRequest(FlowRequest):
    """Code entry form submission."""

    pass


class ResetPasswordByCodeUseCase(BaseUseCase):
    """Exchange a valid SMS code for a password reset token.

    The code is only a gate: on success a fresh ``ResetPassword`` token is
    issued and the caller continues on the password entry view with it.
    """

    def __init__(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        storefront_settings: StorefrontSettings,
    ) -> None:
        self.account_service = account_service
        self.token_service = token_service
        self.storefront_settings = storefront_settings

    async def execute(self, request: ResetPasswordByCodeRequest) -> AccountResult:
        form = Form.from_values(request.values)

        submission = parse_form(ResetPasswordByCodeForm, request.values, form)
        if submission is None:
            return AccountResult.render(View.FORGOT_PASSWORD_CODE, form)

        gateway = NotificationGatewayKind(
            self.storefront_settings.reset_password_notification_gateway
        )
        if gateway != NotificationGatewayKind.PHONE:
            form.add_error(FormErrorCode.RESET_PASSWORD_IS_TURNED_OFF)
            return AccountResult.render(View.FORGOT_PASSWORD_CODE, form)

        user = await self.account_service.find_by_email_or_name(submission.email)
        if user is None:
            form.add_error(FormErrorCode.OPERATION_FAILED)
            return AccountResult.render(View.FORGOT_PASSWORD_CODE, form)

        if not await self.token_service.verify(
            user, TokenPurpose.PHONE_RESET_PASSWORD, submission.code
        ):
            form.add_error(FormErrorCode.INVALID_TOKEN)
            return AccountResult.render(View.FORGOT_PASSWORD_CODE, form)

        token = await self.token_service.generate(user, TokenPurpose.RESET_PASSWORD)
        return AccountResult.render(
            View.RESET_PASSWORD,
            Form.from_values(
                {"token": token, "email": user.email, "user_name": user.user_name}
            ),
        )
