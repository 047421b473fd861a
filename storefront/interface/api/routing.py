"""Store and language prefix routing.

Every route answers both at its plain path (``/account/login``) and under a
``/{store}/{language}`` prefix (``/clothing/de-DE/account/login``). The
middleware strips the prefix before routing and records what it resolved.
"""

from starlette.types import ASGIApp, Receive, Scope, Send

from storefront.domain.service import StoreService


class StoreRoutingMiddleware:
    def __init__(self, app: ASGIApp, store_service: StoreService) -> None:
        self.app = app
        self.store_service = store_service

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        original_path = scope["path"]
        store, language, path = self.store_service.resolve_path(original_path)

        state = dict(scope.get("state") or {})
        state["store"] = store
        state["language"] = language
        # Path as requested, used for ReturnUrl values
        state["original_path"] = original_path

        scope = dict(scope)
        scope["path"] = path
        scope["raw_path"] = path.encode("utf-8")
        scope["state"] = state
        await self.app(scope, receive, send)
