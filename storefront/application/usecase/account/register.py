"""Registration use case."""

import logfire

from storefront.application.usecase.account.common import FlowRequest, parse_form
from storefront.application.usecase.account.forms import RegistrationForm
from storefront.application.usecase.base import AccountResult, BaseUseCase, View
from storefront.config import StorefrontSettings
from storefront.domain.error import NotFoundError
from storefront.domain.model import (
    Contact,
    EmailConfirmationNotification,
    Form,
    RegistrationEmailNotification,
    User,
    UserLoginEvent,
    UserRegisteredEvent,
    WorkContext,
)
from storefront.domain.service import (
    AccountService,
    EventPublisher,
    NotificationService,
    SessionService,
    StorefrontUrlBuilder,
    UserTokenService,
)
from storefront.domain.value import TokenPurpose


class RegisterRequest(FlowRequest):
    """Registration form submission."""

    pass


class RegisterUseCase(BaseUseCase):
    """Use case for local account registration."""

    def __init__(
        self,
        account_service: AccountService,
        session_service: SessionService,
        token_service: UserTokenService,
        notification_service: NotificationService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
        storefront_settings: StorefrontSettings,
    ) -> None:
        """Initialize register use case.

        Args:
            account_service: Account domain service
            session_service: Session domain service
            token_service: User token domain service
            notification_service: Notification domain service
            event_publisher: Domain event publisher
            url_builder: Store URL builder
            storefront_settings: Storefront behaviour settings
        """
        self.account_service = account_service
        self.session_service = session_service
        self.token_service = token_service
        self.notification_service = notification_service
        self.event_publisher = event_publisher
        self.url_builder = url_builder
        self.storefront_settings = storefront_settings

    async def execute(self, request: RegisterRequest) -> AccountResult:
        """Execute registration flow.

        Steps:
        1. Echo the submission and validate it
        2. Create the user in the current store
        3. Re-fetch the canonical user and publish UserRegisteredEvent
        4. Sign in persistently and publish UserLoginEvent
        5. Send the registration notification, and optionally an email
           confirmation link

        Args:
            request: Registration submission with work context

        Returns:
            Redirect to the account page, or the registration view with errors
        """
        context = request.context
        form = Form.from_values(request.values)

        registration = parse_form(RegistrationForm, request.values, form)
        if registration is None:
            return AccountResult.render(View.REGISTER, form)

        with logfire.span(
            "register.execute",
            user_name=registration.user_name,
            store_id=context.current_store.id,
        ):
            user = User(
                user_name=registration.user_name,
                email=registration.email,
                store_id=context.current_store.id,
                contact=Contact(
                    first_name=registration.first_name,
                    last_name=registration.last_name,
                    full_name=registration.full_name,
                    email=registration.email,
                ),
            )

            result = await self.account_service.create(user, registration.password)
            if not result.succeeded:
                form.add_identity_errors(result.errors)
                return AccountResult.render(View.REGISTER, form)

            user = await self.account_service.find_by_name(registration.user_name)
            if user is None:
                raise NotFoundError("User", registration.user_name)

            await self.event_publisher.publish(
                UserRegisteredEvent(
                    context=context,
                    user=user,
                    source_model=registration.model_dump(exclude={"password"}),
                )
            )

            session = await self.session_service.sign_in(user, is_persistent=True)
            await self.event_publisher.publish(
                UserLoginEvent(context=context.with_user(user), user=user)
            )

            await self._send_notifications(context, registration, user)

            return AccountResult.redirect(
                self.url_builder.redirect_url("~/account", context), session=session
            )

    async def _send_notifications(
        self, context: WorkContext, registration: RegistrationForm, user: User
    ) -> None:
        """Send welcome and confirmation messages.

        Failures are logged only: the account already exists.
        """
        store = context.current_store
        welcome = RegistrationEmailNotification(
            store_id=store.id,
            language=context.current_language,
            sender=store.email,
            recipient=user.notification_email,
            first_name=registration.first_name,
            last_name=registration.last_name,
            login=registration.user_name,
        )
        await self.notification_service.send(welcome)

        if not self.storefront_settings.send_account_confirmation:
            return

        token = await self.token_service.generate(user, TokenPurpose.EMAIL_CONFIRMATION)
        confirmation = EmailConfirmationNotification(
            store_id=store.id,
            language=context.current_language,
            sender=store.email,
            recipient=user.notification_email,
            url=self.url_builder.absolute_url(
                "~/account/confirmemail",
                context,
                {"userId": str(user.id), "token": token},
            ),
        )
        await self.notification_service.send(confirmation)
