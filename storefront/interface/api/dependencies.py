"""Request-level dependencies shared by the account routes."""

from fastapi import Depends, Request

from storefront.config import AuthSettings
from storefront.domain.model import WorkContext
from storefront.domain.service import AccountService, SessionService, StoreService
from storefront.interface.error import AuthenticationRequired


async def read_values(request: Request) -> dict:
    """Submitted values from a form or JSON body."""
    if request.method in ("GET", "HEAD"):
        return {}
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        body = await request.json()
        return dict(body) if isinstance(body, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


async def get_submitted_values(request: Request) -> dict:
    """Submitted values without the anti-forgery field."""
    values = await read_values(request)
    auth_settings: AuthSettings = request.app.state.settings.auth
    values.pop(auth_settings.antiforgery_field_name, None)
    return values


async def require_antiforgery(request: Request) -> None:
    """Reject mutating requests without a matching anti-forgery token."""
    await request.app.state.antiforgery.validate(request)


async def get_work_context(request: Request) -> WorkContext:
    """Build the work context for this request.

    The signed-in user is restored from the session cookie and re-read from
    the credential store; operator fields from the cookie mark impersonated
    sessions.
    """
    container = request.state.dishka_container
    store_service = await container.get(StoreService)
    store = getattr(request.state, "store", None) or store_service.default_store
    language = getattr(request.state, "language", None) or store.default_language

    auth_settings: AuthSettings = request.app.state.settings.auth
    session_service = await container.get(SessionService)
    payload = session_service.read_session(
        request.cookies.get(auth_settings.session_cookie_name)
    )

    user = None
    if payload is not None:
        account_service = await container.get(AccountService)
        user = await account_service.find_by_id(payload.user_id)
        if user is not None and payload.operator_user_id:
            user = user.model_copy(
                update={
                    "operator_user_id": payload.operator_user_id,
                    "operator_user_name": payload.operator_user_name,
                }
            )

    path = getattr(request.state, "original_path", None) or request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"

    return WorkContext(
        current_store=store,
        current_language=language,
        current_user=user,
        request_scheme=request.url.scheme,
        request_host=request.url.netloc,
        request_path=path,
    )


async def require_registered_user(
    context: WorkContext = Depends(get_work_context),
) -> WorkContext:
    """Work context of a signed-in user.

    Raises:
        AuthenticationRequired: If the caller is anonymous
    """
    if not context.is_registered_user:
        raise AuthenticationRequired()
    return context
