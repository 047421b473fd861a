"""Logout use case."""

from pydantic import BaseModel

from storefront.application.usecase.base import AccountResult, BaseUseCase
from storefront.domain.model import WorkContext
from storefront.domain.service import SessionService, StorefrontUrlBuilder


class LogoutRequest(BaseModel):
    context: WorkContext


class LogoutUseCase(BaseUseCase):
    """Terminate the current session and return to the store root."""

    def __init__(
        self, session_service: SessionService, url_builder: StorefrontUrlBuilder
    ) -> None:
        self.session_service = session_service
        self.url_builder = url_builder

    async def execute(self, request: LogoutRequest) -> AccountResult:
        user = request.context.current_user
        if user is not None:
            await self.session_service.sign_out(user)
        return AccountResult.redirect(
            self.url_builder.redirect_url("~/", request.context), end_session=True
        )
