"""Redirect/challenge policy for unauthenticated and forbidden requests.

API callers (paths under ``storefront.api_path_prefix``) get a bare 401/403.
Browser requests are redirected to the login or access-denied page, with the
page path qualified for the current store and language.
"""

import logging
from urllib.parse import urlencode

from fastapi import Request, status
from fastapi.responses import RedirectResponse, Response

from storefront.domain.model import Store
from storefront.domain.service import StorefrontUrlBuilder, StoreService
from storefront.interface.error import AccessDenied, AuthenticationRequired

logger = logging.getLogger(__name__)

LOGIN_PATH = "/account/login"
ACCESS_DENIED_PATH = "/account/accessdenied"


class ChallengePolicy:
    def __init__(
        self,
        url_builder: StorefrontUrlBuilder,
        store_service: StoreService,
        api_path_prefix: str,
    ) -> None:
        self.url_builder = url_builder
        self.store_service = store_service
        self.api_path_prefix = api_path_prefix.rstrip("/")

    def is_api_request(self, request: Request) -> bool:
        path = request.url.path
        return path == self.api_path_prefix or path.startswith(
            self.api_path_prefix + "/"
        )

    def _store_and_language(self, request: Request) -> tuple[Store, str]:
        store = getattr(request.state, "store", None) or self.store_service.default_store
        language = getattr(request.state, "language", None) or store.default_language
        return store, language

    def _return_url(self, request: Request) -> str:
        path = getattr(request.state, "original_path", None) or request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        return path

    def _redirect(self, request: Request, default_path: str) -> Response:
        store, language = self._store_and_language(request)
        # Only the path of the default redirect URI is rewritten
        path = self.url_builder.to_app_absolute(f"~{default_path}", store, language)
        location = f"{path}?{urlencode({'ReturnUrl': self._return_url(request)})}"
        return RedirectResponse(location, status_code=status.HTTP_302_FOUND)

    def redirect_to_login(self, request: Request) -> Response:
        if self.is_api_request(request):
            logger.info(f"Unauthenticated API request to {request.url.path}")
            return Response(status_code=status.HTTP_401_UNAUTHORIZED)
        return self._redirect(request, LOGIN_PATH)

    def redirect_to_access_denied(self, request: Request) -> Response:
        if self.is_api_request(request):
            logger.info(f"Forbidden API request to {request.url.path}")
            return Response(status_code=status.HTTP_403_FORBIDDEN)
        return self._redirect(request, ACCESS_DENIED_PATH)


def register_challenge_handlers(app, policy: ChallengePolicy) -> None:
    """Route authentication and authorization failures through ``policy``."""

    async def _authentication_required(request: Request, exc: AuthenticationRequired):
        return policy.redirect_to_login(request)

    async def _access_denied(request: Request, exc: AccessDenied):
        return policy.redirect_to_access_denied(request)

    app.add_exception_handler(AuthenticationRequired, _authentication_required)
    app.add_exception_handler(AccessDenied, _access_denied)
