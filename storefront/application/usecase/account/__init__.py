"""Account use cases."""

from .change_password import ChangePasswordRequest, ChangePasswordUseCase
from .confirm_email import ConfirmEmailRequest, ConfirmEmailUseCase
from .confirm_invitation import (
    ConfirmInvitationPageRequest,
    ConfirmInvitationPageUseCase,
    ConfirmInvitationRequest,
    ConfirmInvitationUseCase,
)
from .external_login import (
    ExternalLoginCallbackRequest,
    ExternalLoginCallbackUseCase,
    ExternalLoginRequest,
    ExternalLoginUseCase,
)
from .forgot_login import ForgotLoginRequest, ForgotLoginUseCase
from .forgot_password import ForgotPasswordRequest, ForgotPasswordUseCase
from .impersonate import ImpersonateRequest, ImpersonateUseCase
from .login import LoginRequest, LoginUseCase
from .logout import LogoutRequest, LogoutUseCase
from .register import RegisterRequest, RegisterUseCase
from .reset_password import (
    ResetPasswordPageRequest,
    ResetPasswordPageUseCase,
    ResetPasswordRequest,
    ResetPasswordUseCase,
)
from .reset_password_by_code import (
    ResetPasswordByCodeRequest,
    ResetPasswordByCodeUseCase,
)

__all__ = [
    "ChangePasswordRequest",
    "ChangePasswordUseCase",
    "ConfirmEmailRequest",
    "ConfirmEmailUseCase",
    "ConfirmInvitationPageRequest",
    "ConfirmInvitationPageUseCase",
    "ConfirmInvitationRequest",
    "ConfirmInvitationUseCase",
    "ExternalLoginCallbackRequest",
    "ExternalLoginCallbackUseCase",
    "ExternalLoginRequest",
    "ExternalLoginUseCase",
    "ForgotLoginRequest",
    "ForgotLoginUseCase",
    "ForgotPasswordRequest",
    "ForgotPasswordUseCase",
    "ImpersonateRequest",
    "ImpersonateUseCase",
    "LoginRequest",
    "LoginUseCase",
    "LogoutRequest",
    "LogoutUseCase",
    "RegisterRequest",
    "RegisterUseCase",
    "ResetPasswordByCodeRequest",
    "ResetPasswordByCodeUseCase",
    "ResetPasswordPageRequest",
    "ResetPasswordPageUseCase",
    "ResetPasswordRequest",
    "ResetPasswordUseCase",
]
