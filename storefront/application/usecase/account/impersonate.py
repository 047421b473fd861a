"""Impersonation use case."""

from urllib.parse import quote

import logfire
from pydantic import BaseModel

from storefront.application.usecase.base import AccountResult, BaseUseCase
from storefront.domain.model import WorkContext
from storefront.domain.service import (
    AccountService,
    AuthorizationService,
    SessionService,
    StorefrontUrlBuilder,
)
from storefront.domain.value import UserId


class ImpersonateRequest(BaseModel):
    context: WorkContext
    user_id: str


class ImpersonateUseCase(BaseUseCase):
    """Use case for an operator signing in as another user."""

    def __init__(
        self,
        account_service: AccountService,
        authorization_service: AuthorizationService,
        session_service: SessionService,
        url_builder: StorefrontUrlBuilder,
    ) -> None:
        """Initialize impersonate use case.

        Args:
            account_service: Account domain service
            authorization_service: Capability checks
            session_service: Session domain service
            url_builder: Store URL builder
        """
        self.account_service = account_service
        self.authorization_service = authorization_service
        self.session_service = session_service
        self.url_builder = url_builder

    async def execute(self, request: ImpersonateRequest) -> AccountResult:
        """Replace the operator's session with the target user's.

        Steps:
        1. Anonymous callers are sent to login with this page as return URL
        2. The impersonation capability is checked against the store
        3. The target is stamped with the operator's id and name
        4. The operator is signed out and the target signed in non-persistently

        Args:
            request: Target user id with work context

        Returns:
            Redirect, or a forbid challenge when the capability is missing
        """
        context = request.context
        operator = context.current_user

        if operator is None or operator.id is None:
            login_url = f"~/account/login?ReturnUrl={quote(context.request_path)}"
            return AccountResult.redirect(
                self.url_builder.to_app_absolute(
                    login_url, context.current_store, context.current_language
                )
            )

        if not await self.authorization_service.can_impersonate(operator):
            return AccountResult.forbid()

        home = self.url_builder.redirect_url("~/", context)
        target = await self.account_service.find_by_id(UserId(request.user_id))
        if target is None:
            return AccountResult.redirect(home)

        with logfire.span(
            "impersonate.execute", operator_id=operator.id, target_id=target.id
        ):
            target = target.model_copy(
                update={
                    "operator_user_id": operator.id,
                    "operator_user_name": operator.user_name,
                }
            )
            await self.session_service.sign_out(operator)
            session = await self.session_service.sign_in(target, is_persistent=False)
            logfire.info(
                "Impersonation started", operator_id=operator.id, target_id=target.id
            )
            return AccountResult.redirect(home, session=session)
