"""Application layer DI providers."""

from dishka import Scope, provide

from storefront.application.usecase.account import (
    ChangePasswordUseCase,
    ConfirmEmailUseCase,
    ConfirmInvitationPageUseCase,
    ConfirmInvitationUseCase,
    ExternalLoginCallbackUseCase,
    ExternalLoginUseCase,
    ForgotLoginUseCase,
    ForgotPasswordUseCase,
    ImpersonateUseCase,
    LoginUseCase,
    LogoutUseCase,
    RegisterUseCase,
    ResetPasswordByCodeUseCase,
    ResetPasswordPageUseCase,
    ResetPasswordUseCase,
)
from storefront.config import StorefrontSettings
from storefront.domain.service import (
    AccountService,
    AuthorizationService,
    EventPublisher,
    ExternalAuthService,
    NotificationService,
    SessionService,
    StorefrontUrlBuilder,
    UserTokenService,
)
from storefront.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Registration
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        account_service: AccountService,
        session_service: SessionService,
        token_service: UserTokenService,
        notification_service: NotificationService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
        storefront_settings: StorefrontSettings,
    ) -> RegisterUseCase:
        """Provide registration use case."""
        return RegisterUseCase(
            account_service=account_service,
            session_service=session_service,
            token_service=token_service,
            notification_service=notification_service,
            event_publisher=event_publisher,
            url_builder=url_builder,
            storefront_settings=storefront_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_invitation_page_use_case(
        self, account_service: AccountService, token_service: UserTokenService
    ) -> ConfirmInvitationPageUseCase:
        return ConfirmInvitationPageUseCase(
            account_service=account_service, token_service=token_service
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_invitation_use_case(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        session_service: SessionService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
    ) -> ConfirmInvitationUseCase:
        """Provide invitation acceptance use case."""
        return ConfirmInvitationUseCase(
            account_service=account_service,
            token_service=token_service,
            session_service=session_service,
            event_publisher=event_publisher,
            url_builder=url_builder,
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_email_use_case(
        self, account_service: AccountService, token_service: UserTokenService
    ) -> ConfirmEmailUseCase:
        return ConfirmEmailUseCase(
            account_service=account_service, token_service=token_service
        )

    # Sign in / sign out
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        account_service: AccountService,
        session_service: SessionService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
    ) -> LoginUseCase:
        """Provide local login use case."""
        return LoginUseCase(
            account_service=account_service,
            session_service=session_service,
            event_publisher=event_publisher,
            url_builder=url_builder,
        )

    @provide(scope=Scope.REQUEST)
    def get_logout_use_case(
        self, session_service: SessionService, url_builder: StorefrontUrlBuilder
    ) -> LogoutUseCase:
        return LogoutUseCase(session_service=session_service, url_builder=url_builder)

    @provide(scope=Scope.REQUEST)
    def get_external_login_use_case(
        self, auth_service: ExternalAuthService, url_builder: StorefrontUrlBuilder
    ) -> ExternalLoginUseCase:
        return ExternalLoginUseCase(auth_service=auth_service, url_builder=url_builder)

    @provide(scope=Scope.REQUEST)
    def get_external_login_callback_use_case(
        self,
        auth_service: ExternalAuthService,
        account_service: AccountService,
        session_service: SessionService,
        event_publisher: EventPublisher,
        url_builder: StorefrontUrlBuilder,
    ) -> ExternalLoginCallbackUseCase:
        """Provide external login callback use case."""
        return ExternalLoginCallbackUseCase(
            auth_service=auth_service,
            account_service=account_service,
            session_service=session_service,
            event_publisher=event_publisher,
            url_builder=url_builder,
        )

    @provide(scope=Scope.REQUEST)
    def get_impersonate_use_case(
        self,
        account_service: AccountService,
        authorization_service: AuthorizationService,
        session_service: SessionService,
        url_builder: StorefrontUrlBuilder,
    ) -> ImpersonateUseCase:
        """Provide impersonation use case."""
        return ImpersonateUseCase(
            account_service=account_service,
            authorization_service=authorization_service,
            session_service=session_service,
            url_builder=url_builder,
        )

    # Password recovery
    @provide(scope=Scope.REQUEST)
    def get_forgot_password_use_case(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        notification_service: NotificationService,
        url_builder: StorefrontUrlBuilder,
        storefront_settings: StorefrontSettings,
    ) -> ForgotPasswordUseCase:
        """Provide forgot password use case."""
        return ForgotPasswordUseCase(
            account_service=account_service,
            token_service=token_service,
            notification_service=notification_service,
            url_builder=url_builder,
            storefront_settings=storefront_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_reset_password_by_code_use_case(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        storefront_settings: StorefrontSettings,
    ) -> ResetPasswordByCodeUseCase:
        return ResetPasswordByCodeUseCase(
            account_service=account_service,
            token_service=token_service,
            storefront_settings=storefront_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_reset_password_page_use_case(
        self, account_service: AccountService, token_service: UserTokenService
    ) -> ResetPasswordPageUseCase:
        return ResetPasswordPageUseCase(
            account_service=account_service, token_service=token_service
        )

    @provide(scope=Scope.REQUEST)
    def get_reset_password_use_case(
        self,
        account_service: AccountService,
        token_service: UserTokenService,
        url_builder: StorefrontUrlBuilder,
    ) -> ResetPasswordUseCase:
        return ResetPasswordUseCase(
            account_service=account_service,
            token_service=token_service,
            url_builder=url_builder,
        )

    @provide(scope=Scope.REQUEST)
    def get_forgot_login_use_case(
        self,
        account_service: AccountService,
        notification_service: NotificationService,
    ) -> ForgotLoginUseCase:
        return ForgotLoginUseCase(
            account_service=account_service,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_change_password_use_case(
        self, account_service: AccountService, url_builder: StorefrontUrlBuilder
    ) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            account_service=account_service, url_builder=url_builder
        )
