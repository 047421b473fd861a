"""Account routes.

Every handler builds the request's ``WorkContext``, runs one account use
case and lets ``ResultRenderer`` turn the outcome into a JSON view payload
or a redirect. POST handlers require the anti-forgery token.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from storefront.application.usecase.account import (
    ChangePasswordRequest,
    ChangePasswordUseCase,
    ConfirmEmailRequest,
    ConfirmEmailUseCase,
    ConfirmInvitationPageRequest,
    ConfirmInvitationPageUseCase,
    ConfirmInvitationRequest,
    ConfirmInvitationUseCase,
    ExternalLoginCallbackRequest,
    ExternalLoginCallbackUseCase,
    ExternalLoginRequest,
    ExternalLoginUseCase,
    ForgotLoginRequest,
    ForgotLoginUseCase,
    ForgotPasswordRequest,
    ForgotPasswordUseCase,
    ImpersonateRequest,
    ImpersonateUseCase,
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutUseCase,
    RegisterRequest,
    RegisterUseCase,
    ResetPasswordByCodeRequest,
    ResetPasswordByCodeUseCase,
    ResetPasswordPageRequest,
    ResetPasswordPageUseCase,
    ResetPasswordRequest,
    ResetPasswordUseCase,
)
from storefront.application.usecase.base import AccountResult, View
from storefront.domain.model import Form, WorkContext
from storefront.interface.api.dependencies import (
    get_submitted_values,
    get_work_context,
    require_antiforgery,
    require_registered_user,
)

router = APIRouter(prefix="/account", tags=["account"], route_class=DishkaRoute)


def _render(request: Request, result: AccountResult) -> Response:
    return request.app.state.renderer.render(request, result)


def _page(request: Request, view: View, values: dict | None = None) -> Response:
    return _render(request, AccountResult.render(view, Form.from_values(values)))


def _return_url(request: Request, values: dict | None = None) -> str | None:
    """ReturnUrl from the query string in any casing, else from the posted form."""
    for key, value in request.query_params.items():
        if key.lower() in ("returnurl", "return_url"):
            return value
    for key in ("return_url", "returnUrl", "ReturnUrl"):
        if values and values.get(key):
            return values[key]
    return None


@router.get("")
async def account(
    request: Request, context: WorkContext = Depends(require_registered_user)
) -> Response:
    """Account page of the signed-in user."""
    user = context.current_user
    return _page(
        request,
        View.ACCOUNT,
        {
            "user_name": user.user_name,
            "email": user.email,
            "is_impersonated": user.is_impersonated,
            "operator_user_name": user.operator_user_name,
        },
    )


# Registration


@router.get("/register")
async def register_page(request: Request) -> Response:
    return _page(request, View.REGISTER)


@router.post("/register", dependencies=[Depends(require_antiforgery)])
async def register(
    request: Request,
    use_case: FromDishka[RegisterUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Register a new customer in the current store."""
    result = await use_case.execute(RegisterRequest(context=context, values=values))
    return _render(request, result)


@router.get("/confirminvitation")
async def confirm_invitation_page(
    request: Request,
    use_case: FromDishka[ConfirmInvitationPageUseCase],
    context: WorkContext = Depends(get_work_context),
    email: str | None = Query(default=None),
    token: str | None = Query(default=None),
    organization_id: str | None = Query(default=None, alias="organizationId"),
) -> Response:
    """Validate an invitation link before showing the form."""
    result = await use_case.execute(
        ConfirmInvitationPageRequest(
            context=context, email=email, token=token, organization_id=organization_id
        )
    )
    return _render(request, result)


@router.post("/confirminvitation", dependencies=[Depends(require_antiforgery)])
async def confirm_invitation(
    request: Request,
    use_case: FromDishka[ConfirmInvitationUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Accept an invitation by choosing a user name and password."""
    result = await use_case.execute(
        ConfirmInvitationRequest(context=context, values=values)
    )
    return _render(request, result)


@router.get("/confirmemail")
async def confirm_email(
    request: Request,
    use_case: FromDishka[ConfirmEmailUseCase],
    context: WorkContext = Depends(get_work_context),
    user_id: str | None = Query(default=None, alias="userId"),
    token: str | None = Query(default=None),
) -> Response:
    result = await use_case.execute(
        ConfirmEmailRequest(context=context, user_id=user_id, token=token)
    )
    return _render(request, result)


# Sign in / sign out


@router.get("/login")
async def login_page(request: Request) -> Response:
    return_url = _return_url(request)
    return _page(
        request, View.LOGIN, {"return_url": return_url} if return_url else None
    )


@router.post("/login", dependencies=[Depends(require_antiforgery)])
async def login(
    request: Request,
    use_case: FromDishka[LoginUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Sign in with user name and password."""
    result = await use_case.execute(
        LoginRequest(
            context=context, values=values, return_url=_return_url(request, values)
        )
    )
    return _render(request, result)


@router.get("/logout")
async def logout(
    request: Request,
    use_case: FromDishka[LogoutUseCase],
    context: WorkContext = Depends(get_work_context),
) -> Response:
    result = await use_case.execute(LogoutRequest(context=context))
    return _render(request, result)


@router.get("/externallogin")
async def external_login(
    request: Request,
    use_case: FromDishka[ExternalLoginUseCase],
    context: WorkContext = Depends(get_work_context),
    auth_type: str | None = Query(default=None, alias="authType"),
    return_url: str | None = Query(default=None, alias="returnUrl"),
) -> Response:
    """Redirect to the external provider's authorization page."""
    result = await use_case.execute(
        ExternalLoginRequest(context=context, auth_type=auth_type, return_url=return_url)
    )
    return _render(request, result)


@router.get("/externallogincallback")
async def external_login_callback(
    request: Request,
    use_case: FromDishka[ExternalLoginCallbackUseCase],
    context: WorkContext = Depends(get_work_context),
    auth_type: str | None = Query(default=None, alias="authType"),
    code: str | None = Query(default=None),
    state: str | None = Query(default=None),
    return_url: str | None = Query(default=None, alias="returnUrl"),
) -> Response:
    """Complete an external login, linking or provisioning the account."""
    result = await use_case.execute(
        ExternalLoginCallbackRequest(
            context=context,
            auth_type=auth_type,
            code=code,
            state=state,
            return_url=return_url,
        )
    )
    return _render(request, result)


@router.get("/impersonate/{user_id}")
async def impersonate(
    user_id: str,
    request: Request,
    use_case: FromDishka[ImpersonateUseCase],
    context: WorkContext = Depends(get_work_context),
) -> Response:
    """Sign in as another user on their behalf."""
    result = await use_case.execute(ImpersonateRequest(context=context, user_id=user_id))
    return _render(request, result)


@router.get("/accessdenied")
async def access_denied(request: Request) -> Response:
    return _page(request, View.ACCESS_DENIED)


# Password and user name recovery


@router.get("/forgotpassword")
async def forgot_password_page(request: Request) -> Response:
    return _page(request, View.FORGOT_PASSWORD)


@router.post("/forgotpassword", dependencies=[Depends(require_antiforgery)])
async def forgot_password(
    request: Request,
    use_case: FromDishka[ForgotPasswordUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Send a reset link or SMS code."""
    result = await use_case.execute(
        ForgotPasswordRequest(context=context, values=values)
    )
    return _render(request, result)


@router.post("/forgotpasswordbycode", dependencies=[Depends(require_antiforgery)])
async def forgot_password_by_code(
    request: Request,
    use_case: FromDishka[ResetPasswordByCodeUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Exchange an SMS code for a password reset token."""
    result = await use_case.execute(
        ResetPasswordByCodeRequest(context=context, values=values)
    )
    return _render(request, result)


@router.get("/resetpassword")
async def reset_password_page(
    request: Request,
    use_case: FromDishka[ResetPasswordPageUseCase],
    context: WorkContext = Depends(get_work_context),
    user_id: str | None = Query(default=None, alias="userId"),
    token: str | None = Query(default=None),
) -> Response:
    result = await use_case.execute(
        ResetPasswordPageRequest(context=context, user_id=user_id, token=token)
    )
    return _render(request, result)


@router.post("/resetpassword", dependencies=[Depends(require_antiforgery)])
async def reset_password(
    request: Request,
    use_case: FromDishka[ResetPasswordUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Set a new password with a reset token."""
    result = await use_case.execute(ResetPasswordRequest(context=context, values=values))
    return _render(request, result)


@router.get("/resetpassword/confirmation")
async def reset_password_confirmation(request: Request) -> Response:
    return _page(request, View.RESET_PASSWORD_CONFIRMATION)


@router.get("/forgotlogin")
async def forgot_login_page(request: Request) -> Response:
    return _page(request, View.FORGOT_LOGIN)


@router.post("/forgotlogin", dependencies=[Depends(require_antiforgery)])
async def forgot_login(
    request: Request,
    use_case: FromDishka[ForgotLoginUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Email the user name registered for an address."""
    result = await use_case.execute(ForgotLoginRequest(context=context, values=values))
    return _render(request, result)


@router.post("/password", dependencies=[Depends(require_antiforgery)])
async def change_password(
    request: Request,
    use_case: FromDishka[ChangePasswordUseCase],
    context: WorkContext = Depends(get_work_context),
    values: dict = Depends(get_submitted_values),
) -> Response:
    """Change the signed-in user's password."""
    result = await use_case.execute(
        ChangePasswordRequest(context=context, values=values)
    )
    return _render(request, result)
