"""Local login use case."""

import logfire

from storefront.application.usecase.account.common import (
    FlowRequest,
    is_eligible,
    parse_form,
)
from storefront.application.usecase.account.forms import LoginForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.domain.model import Form, UserLoginEvent
from storefront.domain.service import (
    AccountService,
    EventPublisher,
    SessionService,
    StorefrontUrlBuilder,
)
from storefront.domain.value import FormErrorCode, LoginStatus


class LoginRequest(FlowRequest):
    """Login form submission."""

    return_url: str | None = None


class LoginUseCase(BaseUseCase):
    """Use case for user name and password login."""

    def __init__(
        self,
        account_service: AccountService,
        session_service: SessionService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
    ) -> None:
        """Initialize login use case.

        Args:
            account_service: Account domain service
            session_service: Session domain service
            event_publisher: Domain event publisher
            url_builder: Store URL builder
        """
        self.account_service = account_service
        self.session_service = session_service
        self.event_publisher = event_publisher
        self.url_builder = url_builder

    async def execute(self, request: LoginRequest) -> AccountResult:
        """Execute login flow.

        Credentials are verified first (with lockout tracking). Only a raw
        credential success is followed by the store eligibility and
        suspension checks, and only if both pass is a session issued.
        Lockout and two-factor outcomes are handled before the generic
        failure.

        Args:
            request: Login submission with work context and return URL

        Returns:
            Redirect to the return URL with a session, or a login-related view
        """
        context = request.context
        form = Form.from_values(request.values)

        login = parse_form(LoginForm, request.values, form)
        if login is None:
            return AccountResult.render(View.LOGIN, form)

        user_name = login.user_name.strip()

        with logfire.span(
            "login.execute", user_name=user_name, store_id=context.current_store.id
        ):
            outcome = await self.account_service.verify_password(
                user_name, login.password
            )

            if outcome.status == LoginStatus.SUCCEEDED:
                user = await self.account_service.find_by_name(user_name)
                if user is not None and is_eligible(user, context.current_store):
                    session = await self.session_service.sign_in(
                        user, is_persistent=login.remember_me
                    )
                    await self.event_publisher.publish(
                        UserLoginEvent(context=context.with_user(user), user=user)
                    )
                    return AccountResult.redirect(
                        self.url_builder.redirect_url(request.return_url, context),
                        session=session,
                    )

                logfire.warn(
                    "Login refused for store",
                    user_name=user_name,
                    store_id=context.current_store.id,
                )
                form.add_error(FormErrorCode.USER_CANNOT_LOGIN_IN_STORE)
                return AccountResult.render(View.LOGIN, form)

            if outcome.status == LoginStatus.LOCKED_OUT:
                return AccountResult.render(View.LOCKED_OUT, form)

            if outcome.status == LoginStatus.REQUIRES_TWO_FACTOR:
                return AccountResult.redirect(
                    self.url_builder.redirect_url("~/account/sendcode", context)
                )

            if outcome.status == LoginStatus.REJECTED:
                form.add_error(FormErrorCode.ACCOUNT_IS_BLOCKED, outcome.reason)
            else:
                form.add_error(FormErrorCode.LOGIN_FAILED)
            return AccountResult.render(View.LOGIN, form)
