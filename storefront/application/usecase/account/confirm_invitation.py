"""Invitation-based registration use cases.

The GET phase validates the invitation before any form is shown and ends
on the error view when it fails. The POST phase redisplays the invitation
form with every accumulated error so the caller can retry.
"""

import logfire
from pydantic import BaseModel

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import InvitationForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.domain.model import (
    Contact,
    Form,
    UserLoginEvent,
    UserRegisteredEvent,
    WorkContext,
)
from storefront.domain.service import (
    AccountService,
    EventPublisher,
    SessionService,
    StorefrontUrlBuilder,
    UserTokenService,
)
from storefront.domain.value import FormErrorCode, TokenPurpose


class ConfirmInvitationPageRequest(BaseModel):
    """Invitation link parameters."""

    context: WorkContext
    email: str | None = None
    token: str | None = None
    organization_id: str | None = None


class ConfirmInvitationPageUseCase(BaseUseCase):
    """Validate an invitation link before showing the invitation form."""

    def __init__(
        self, account_service: AccountService, token_service: UserTokenService
    ) -> None:
        self.account_service = account_service
        self.token_service = token_service

    async def execute(self, request: ConfirmInvitationPageRequest) -> AccountResult:
        form = Form()

        if not request.token or not request.email:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.INVALID_URL)
            )

        user = await self.account_service.find_by_email(request.email)
        if user is None:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.USER_NOT_FOUND)
            )

        # A placeholder account has no password until the invitation is used
        if user.password_hash:
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.INVITATION_ALREADY_USED)
            )

        if not await self.token_service.verify(
            user, TokenPurpose.RESET_PASSWORD, request.token
        ):
            return AccountResult.render(
                View.ERROR, form.add_error(FormErrorCode.INVALID_TOKEN)
            )

        return AccountResult.render(
            View.CONFIRM_INVITATION,
            Form.from_values(
                {
                    "email": request.email,
                    "token": request.token,
                    "organization_id": request.organization_id,
                }
            ),
        )


class ConfirmInvitationRequest(FlowRequest):
    """Invitation form submission."""

    pass


class ConfirmInvitationUseCase(BaseUseCase):
    """Use case for completing registration from an invitation."""

    def __init__(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        session_service: SessionService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
    ) -> None:
        """Initialize confirm invitation use case.

        Args:
            account_service: Account domain service
            token_service: User token domain service
            session_service: Session domain service
            event_publisher: Domain event publisher
            url_builder: Store URL builder
        """
        self.account_service = account_service
        self.token_service = token_service
        self.session_service = session_service
        self.event_publisher = event_publisher
        self.url_builder = url_builder

    async def execute(self, request: ConfirmInvitationRequest) -> AccountResult:
        """Redeem the invitation token and complete the account.

        The token is consumed by setting the password. User name, contact and
        organization are then written, and the user is signed in persistently.

        Args:
            request: Invitation submission with work context

        Returns:
            Redirect to the account page, or the invitation view with errors
        """
        context = request.context
        form = Form.from_values(request.values)

        invitation = parse_form(InvitationForm, request.values, form)
        if invitation is None:
            return AccountResult.render(View.CONFIRM_INVITATION, form)

        with logfire.span("confirm_invitation.execute", user_name=invitation.user_name):
            user = await self.account_service.find_by_email(invitation.email)
            if user is None:
                form.add_error(FormErrorCode.OPERATION_FAILED)
                return AccountResult.render(View.CONFIRM_INVITATION, form)

            result = await self.token_service.reset_password(
                user, invitation.token, invitation.password
            )
            if not result.succeeded:
                form.add_identity_errors(result.errors)
                return AccountResult.render(View.CONFIRM_INVITATION, form)

            # Password reset rotated the security stamp
            user = await self.account_service.get_by_id(user.id)
            user = user.model_copy(
                update={
                    "user_name": invitation.user_name,
                    "contact": Contact(
                        first_name=invitation.first_name,
                        last_name=invitation.last_name,
                        full_name=" ".join(
                            part
                            for part in (invitation.first_name, invitation.last_name)
                            if part
                        )
                        or None,
                        email=invitation.email,
                        organization_id=invitation.organization_id,
                    ),
                }
            )

            result = await self.account_service.update(user)
            if not result.succeeded:
                form.add_identity_errors(result.errors)
                return AccountResult.render(View.CONFIRM_INVITATION, form)

            await self.event_publisher.publish(
                UserRegisteredEvent(
                    context=context,
                    user=user,
                    source_model=invitation.model_dump(exclude={"password", "token"}),
                )
            )
            session = await self.session_service.sign_in(user, is_persistent=True)
            await self.event_publisher.publish(
                UserLoginEvent(context=context.with_user(user), user=user)
            )

            logfire.info("Invitation accepted", user_id=user.id)
            return AccountResult.redirect(
                self.url_builder.redirect_url("~/account", context), session=session
            )
