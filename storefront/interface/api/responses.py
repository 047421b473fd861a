"""Turn account flow results into HTTP responses."""

from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from storefront.application.usecase.base import AccountResult, Challenge
from storefront.config import Settings
from storefront.interface.api.antiforgery import Antiforgery
from storefront.interface.error import AccessDenied, AuthenticationRequired


class ResultRenderer:
    """Renders views as JSON and applies session cookie changes."""

    def __init__(self, settings: Settings, antiforgery: Antiforgery) -> None:
        self.settings = settings
        self.antiforgery = antiforgery

    def render(self, request: Request, result: AccountResult) -> Response:
        """Build the response for ``result``.

        Raises:
            AuthenticationRequired: For a login challenge
            AccessDenied: For a forbid challenge
        """
        if result.challenge is Challenge.LOGIN:
            raise AuthenticationRequired()
        if result.challenge is Challenge.FORBID:
            raise AccessDenied()

        if result.is_redirect:
            response: Response = RedirectResponse(
                result.redirect_url, status_code=status.HTTP_302_FOUND
            )
        else:
            token = self.antiforgery.get_or_create_token(request)
            response = JSONResponse(
                self.view_payload(result, token), status_code=result.status_code
            )
            self.antiforgery.store_token(response, token)

        self._apply_session(response, result)
        return response

    @staticmethod
    def view_payload(result: AccountResult, antiforgery_token: str) -> dict[str, Any]:
        return {
            "view": result.view.value if result.view else None,
            "form": result.form.model_dump(mode="json"),
            "antiforgery_token": antiforgery_token,
        }

    def _apply_session(self, response: Response, result: AccountResult) -> None:
        cookie_name = self.settings.auth.session_cookie_name
        if result.end_session and result.session is None:
            response.delete_cookie(cookie_name)
        if result.session is not None:
            # Non-persistent sessions use browser-session cookies
            response.set_cookie(
                key=cookie_name,
                value=result.session.token,
                max_age=result.session.max_age,
                httponly=True,
                secure=self.settings.is_production,
                samesite="lax",
            )
