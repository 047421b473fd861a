"""External (OAuth) login use cases."""

import secrets

import logfire
from pydantic import BaseModel

from storefront.application.usecase.account.common import is_eligible
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.domain.error import ExternalLoginError, UnsupportedProviderError
from storefront.domain.model import (
    Contact,
    ExternalLogin,
    Form,
    User,
    UserLoginEvent,
    UserRegisteredEvent,
    WorkContext,
)
from storefront.domain.service import (
    AccountService,
    EventPublisher,
    ExternalAuthService,
    SessionService,
    StorefrontUrlBuilder,
)
from storefront.domain.service.auth_service import (
    EMAIL_CLAIM,
    FIRST_NAME_CLAIMS,
    LAST_NAME_CLAIM,
)
from storefront.domain.value import ExternalLoginInfo, FormErrorCode, LoginStatus

CALLBACK_PATH = "~/account/externallogincallback"


def _callback_url(
    url_builder: StorefrontUrlBuilder,
    context: WorkContext,
    auth_type: str,
    return_url: str,
) -> str:
    return url_builder.absolute_url(
        CALLBACK_PATH, context, {"authType": auth_type, "returnUrl": return_url}
    )


class ExternalLoginRequest(BaseModel):
    context: WorkContext
    auth_type: str | None = None
    return_url: str | None = None


class ExternalLoginUseCase(BaseUseCase):
    """Challenge: send the caller to the external provider."""

    def __init__(
        self, auth_service: ExternalAuthService, url_builder: StorefrontUrlBuilder
    ) -> None:
        self.auth_service = auth_service
        self.url_builder = url_builder

    async def execute(self, request: ExternalLoginRequest) -> AccountResult:
        if not request.auth_type:
            return AccountResult.render(View.LOGIN, status_code=400)

        return_url = self.url_builder.sanitize_return_url(request.return_url)
        state = secrets.token_urlsafe(32)
        try:
            authorization_url = await self.auth_service.initiate_login(
                request.auth_type,
                state,
                _callback_url(
                    self.url_builder, request.context, request.auth_type, return_url
                ),
            )
        except UnsupportedProviderError:
            logfire.warn("Unknown external provider", auth_type=request.auth_type)
            return AccountResult.render(View.LOGIN, status_code=400)

        return AccountResult.redirect(authorization_url)


class ExternalLoginCallbackRequest(BaseModel):
    context: WorkContext
    auth_type: str | None = None
    code: str | None = None
    state: str | None = None
    return_url: str | None = None


class ExternalLoginCallbackUseCase(BaseUseCase):
    """Use case for the external provider callback.

    Resolves the provider identity to a user by, in order: an existing
    link, linking to the signed-in user, or provisioning a new user named
    ``provider--key``. Every successful branch ends in one non-persistent
    session and exactly one UserLoginEvent.
    """

    def __init__(
        self,
        auth_service: ExternalAuthService,
        account_service: AccountService,
        session_service: SessionService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
    ) -> None:
        """Initialize external login callback use case.

        Args:
            auth_service: External auth domain service
            account_service: Account domain service
            session_service: Session domain service
            event_publisher: Domain event publisher
            url_builder: Store URL builder
        """
        self.auth_service = auth_service
        self.account_service = account_service
        self.session_service = session_service
        self.event_publisher = event_publisher
        self.url_builder = url_builder

    async def _login_info(
        self, request: ExternalLoginCallbackRequest
    ) -> ExternalLoginInfo | None:
        if not (request.auth_type and request.code and request.state):
            return None
        return_url = self.url_builder.sanitize_return_url(request.return_url)
        try:
            return await self.auth_service.complete_login(
                request.auth_type,
                request.code,
                request.state,
                _callback_url(
                    self.url_builder, request.context, request.auth_type, return_url
                ),
            )
        except (ExternalLoginError, UnsupportedProviderError) as e:
            logfire.warn(
                "External login info unavailable",
                auth_type=request.auth_type,
                error=str(e),
            )
            return None

    async def execute(self, request: ExternalLoginCallbackRequest) -> AccountResult:
        """Execute the external login callback.

        Args:
            request: Callback parameters with work context

        Returns:
            Redirect to the return URL with a session, or the login view
        """
        context = request.context
        form = Form()

        info = await self._login_info(request)
        if info is None:
            return AccountResult.render(View.LOGIN, form)

        with logfire.span(
            "external_login_callback.execute",
            login_provider=info.login_provider,
            provider_key=info.provider_key,
        ):
            outcome = await self.account_service.verify_external_login(
                info.login_provider, info.provider_key
            )

            if outcome.status == LoginStatus.LOCKED_OUT:
                return AccountResult.render(View.LOCKED_OUT, form)
            if outcome.status == LoginStatus.REJECTED:
                form.add_error(FormErrorCode.ACCOUNT_IS_BLOCKED, outcome.reason)
                return AccountResult.render(View.LOGIN, form)

            if not outcome.succeeded:
                if context.is_registered_user:
                    result = await self.account_service.add_external_login(
                        context.current_user.id, info
                    )
                else:
                    result = await self._provision_user(context, info)

                if not result.succeeded:
                    form.add_identity_errors(result.errors)
                    return AccountResult.render(View.LOGIN, form)

            user = await self.account_service.find_by_login(
                info.login_provider, info.provider_key
            )
            if user is None:
                form.add_error(FormErrorCode.USER_NOT_FOUND)
                return AccountResult.render(View.LOGIN, form)

            if not is_eligible(user, context.current_store):
                form.add_error(FormErrorCode.USER_CANNOT_LOGIN_IN_STORE)
                return AccountResult.render(View.LOGIN, form)

            session = await self.session_service.sign_in(user, is_persistent=False)
            await self.event_publisher.publish(
                UserLoginEvent(context=context.with_user(user), user=user)
            )

            return AccountResult.redirect(
                self.url_builder.redirect_url(request.return_url, context),
                session=session,
            )

    async def _provision_user(self, context: WorkContext, info: ExternalLoginInfo):
        """Create a user for an anonymous caller's new external identity."""
        email = info.find_first_value([EMAIL_CLAIM])
        first_name = info.find_first_value(FIRST_NAME_CLAIMS, "unknown")
        last_name = info.find_first_value([LAST_NAME_CLAIM])

        user = User(
            user_name=f"{info.login_provider}--{info.provider_key}",
            email=email,
            store_id=context.current_store.id,
            external_logins=(
                ExternalLogin(
                    login_provider=info.login_provider,
                    provider_key=info.provider_key,
                ),
            ),
            contact=Contact(
                first_name=first_name,
                last_name=last_name,
                full_name=" ".join(part for part in (first_name, last_name) if part),
                email=email,
            ),
        )

        result = await self.account_service.create(user, None)
        if result.succeeded:
            created = await self.account_service.find_by_login(
                info.login_provider, info.provider_key
            )
            await self.event_publisher.publish(
                UserRegisteredEvent(
                    context=context,
                    user=created or user,
                    source_model={
                        "user_name": user.user_name,
                        "email": email,
                        "first_name": first_name,
                        "last_name": last_name,
                    },
                )
            )
        return result
