"""In-session password change use case."""

import logfire

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import ChangePasswordForm
from storefront.application.usecase.base import (
    AccountResult,
    BaseUseCase,
    Challenge,
    View,
)
from storefront.domain.model import Form
from storefront.domain.service import AccountService, StorefrontUrlBuilder
from storefront.domain.value import FormErrorCode


class ChangePasswordRequest(FlowRequest):
    pass


class ChangePasswordUseCase(BaseUseCase):
    """Change the signed-in user's password."""

    def __init__(
        self, account_service: AccountService, url_builder: StorefrontUrlBuilder
    ) -> None:
        self.account_service = account_service
        self.url_builder = url_builder

    async def execute(self, request: ChangePasswordRequest) -> AccountResult:
        context = request.context
        if not context.is_registered_user:
            return AccountResult(challenge=Challenge.LOGIN)

        form = Form.from_values(request.values)
        submission = parse_form(ChangePasswordForm, request.values, form)
        if submission is None:
            return AccountResult.render(View.ACCOUNT, form)

        if submission.new_password != submission.new_password_confirmation:
            form.add_error(FormErrorCode.PASSWORD_AND_CONFIRM_PASSWORD_DOES_NOT_MATCH)
            return AccountResult.render(View.ACCOUNT, form)

        with logfire.span("change_password.execute", user_id=context.current_user.id):
            user = await self.account_service.get_by_id(context.current_user.id)
            result = await self.account_service.change_password(
                user, submission.old_password, submission.new_password
            )
            if not result.succeeded:
                form.add_identity_errors(result.errors)
                return AccountResult.render(View.ACCOUNT, form)

            return AccountResult.redirect(
                self.url_builder.redirect_url("~/account", context)
            )
