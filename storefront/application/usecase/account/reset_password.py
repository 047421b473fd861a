"""Password reset use cases."""

import logfire
from pydantic import BaseModel

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import ResetPasswordForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.domain.model import Form, WorkContext
from storefront.domain.service import (
    AccountService,
    StorefrontUrlBuilder,
    UserTokenService,
)
from storefront.domain.value import FormErrorCode, TokenPurpose, UserId


class ResetPasswordPageRequest(BaseModel):
    """Reset link parameters."""

    context: WorkContext
    user_id: str | None = None
    token: str | None = None


class ResetPasswordPageUseCase(BaseUseCase):
    """Validate an emailed reset link before showing the password form."""

    def __init__(
        self, account_service: AccountService, token_service: UserTokenService
    ) -> None:
        self.account_service = account_service
        self.token_service = token_service

    async def execute(self, request: ResetPasswordPageRequest) -> AccountResult:
        form = Form()
        if not request.token or not request.user_id:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.INVALID_URL)
            )

        user = await self.account_service.find_by_id(UserId(request.user_id))
        if user is None:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.USER_NOT_FOUND)
            )

        if not await self.token_service.verify(
            user, TokenPurpose.RESET_PASSWORD, request.token
        ):
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.INVALID_TOKEN)
            )

        return AccountResult.render(
            View.RESET_PASSWORD,
            Form.from_values(
                {"token": request.token, "email": user.email, "user_name": user.user_name}
            ),
        )


class ResetPasswordRequest(FlowRequest):
    """Password entry form submission."""

    pass


class ResetPasswordUseCase(BaseUseCase):
    """Use case for the final password entry step."""

    def __init__(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        url_builder: StorefrontUrlBuilder,
    ) -> None:
        """Initialize reset password use case.

        Args:
            account_service: Account domain service
            token_service: User token domain service
            url_builder: Store URL builder
        """
        self.account_service = account_service
        self.token_service = token_service
        self.url_builder = url_builder

    async def execute(self, request: ResetPasswordRequest) -> AccountResult:
        """Reset the password with the held token.

        Password and confirmation must match and a user name or email must be
        present; both are checked before the store is called. The user is
        resolved by user name first, then email. An unresolved user is sent to
        the neutral confirmation page without error.

        Args:
            request: Password entry submission with work context

        Returns:
            Confirmation view, neutral redirect, or the password view with errors
        """
        context = request.context
        form = Form.from_values(request.values)

        submission = parse_form(ResetPasswordForm, request.values, form)
        if submission is None:
            return AccountResult.render(View.RESET_PASSWORD, form)

        if not submission.email and not submission.user_name:
            form.add_error(FormErrorCode.RESET_PASSWORD_INVALID_DATA)
        if submission.password != submission.password_confirmation:
            form.add_error(FormErrorCode.PASSWORD_AND_CONFIRM_PASSWORD_DOES_NOT_MATCH)
        if form.has_errors:
            return AccountResult.render(View.RESET_PASSWORD, form)

        with logfire.span("reset_password.execute"):
            user = await self.account_service.find_by_name_or_email(
                submission.user_name, submission.email
            )
            if user is None:
                logfire.info("Password reset for unknown user")
                return AccountResult.redirect(
                    self.url_builder.redirect_url(
                        "~/account/resetpassword/confirmation", context
                    )
                )

            result = await self.token_service.reset_password(
                user, submission.token, submission.password
            )
            if not result.succeeded:
                form.add_identity_errors(result.errors)
                return AccountResult.render(View.RESET_PASSWORD, form)

            form.posted_successfully = True
            return AccountResult.render(View.RESET_PASSWORD_CONFIRMATION, form)
