"""Email confirmation use case."""

from pydantic import BaseModel

from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.domain.model import Form, WorkContext
from storefront.domain.service import AccountService, UserTokenService
from storefront.domain.value import FormErrorCode, UserId


class ConfirmEmailRequest(BaseModel):
    context: WorkContext
    user_id: str | None = None
    token: str | None = None


class ConfirmEmailUseCase(BaseUseCase):
    """Confirm a user's email from the emailed link.

    The user comes from the link, falling back to the signed-in user.
    """

    def __init__(
        self, account_service: AccountService, token_service: UserTokenService
    ) -> None:
        self.account_service = account_service
        self.token_service = token_service

    async def execute(self, request: ConfirmEmailRequest) -> AccountResult:
        form = Form()
        if not request.token:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.INVALID_URL)
            )

        if request.user_id:
            user = await self.account_service.find_by_id(UserId(request.user_id))
        else:
            user = request.context.current_user
        if user is None:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.USER_NOT_FOUND)
            )

        result = await self.token_service.confirm_email(user, request.token)
        if not result.succeeded:
            return AccountResult.render(View.ERROR, form.add_identity_errors(result.errors))

        form.posted_successfully = True
        return AccountResult.render(View.CONFIRMATION_DONE, form)
