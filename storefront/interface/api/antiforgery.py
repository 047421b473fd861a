"""Double-submit anti-forgery tokens.

A random token is issued in a cookie; mutating requests must echo it in the
form field or the request header.
"""

import hmac
import secrets

from fastapi import Request, Response

from storefront.config import AuthSettings
from storefront.interface.api.dependencies import read_values
from storefront.interface.error import AntiforgeryError


class Antiforgery:
    def __init__(self, auth_settings: AuthSettings, secure: bool = False) -> None:
        self.settings = auth_settings
        self.secure = secure

    def get_or_create_token(self, request: Request) -> str:
        token = request.cookies.get(self.settings.antiforgery_cookie_name)
        return token or secrets.token_urlsafe(32)

    def store_token(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.settings.antiforgery_cookie_name,
            value=token,
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )

    async def validate(self, request: Request) -> None:
        """Check the request token against the cookie.

        Raises:
            AntiforgeryError: If either token is missing or they differ
        """
        cookie_token = request.cookies.get(self.settings.antiforgery_cookie_name)
        if not cookie_token:
            raise AntiforgeryError("Anti-forgery cookie missing")

        request_token = request.headers.get(self.settings.antiforgery_header_name)
        if not request_token:
            values = await read_values(request)
            request_token = values.get(self.settings.antiforgery_field_name)
        if not request_token:
            raise AntiforgeryError("Anti-forgery token missing")

        if not hmac.compare_digest(str(request_token), cookie_token):
            raise AntiforgeryError("Anti-forgery token mismatch")

