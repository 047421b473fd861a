"""Store and locale aware URL building."""

from urllib.parse import urlencode, urlsplit

from storefront.domain.model.store import Store
from storefront.domain.model.work_context import WorkContext

from .base import Service


class StorefrontUrlBuilder(Service):
    """Turns virtual paths (``~/account``) into store-qualified URLs.

    The store segment is emitted only for non-default stores and the language
    segment only for non-default languages, so the default store keeps plain
    paths such as ``/account``.
    """

    def __init__(self, default_store_id: str) -> None:
        self.default_store_id = default_store_id

    def _prefix(self, store: Store, language: str) -> str:
        segments = []
        if store.id != self.default_store_id:
            segments.append(store.id)
        if language and language.lower() != store.default_language.lower():
            segments.append(language)
        return "".join(f"/{segment}" for segment in segments)

    def to_app_absolute(self, virtual_path: str, store: Store, language: str) -> str:
        """Resolve a virtual path against the store and language.

        Paths that do not start with ``~`` are returned unchanged.

        Args:
            virtual_path: Path such as ``~/account/login?ReturnUrl=/cart``
            store: Store the URL belongs to
            language: Active language

        Returns:
            Application-absolute path
        """
        if not virtual_path.startswith("~"):
            return virtual_path

        path = virtual_path[1:] or "/"
        if not path.startswith("/"):
            path = f"/{path}"
        prefix = self._prefix(store, language)
        if path == "/" and prefix:
            return prefix
        if path.startswith("/?") and prefix:
            return f"{prefix}{path[1:]}"
        return f"{prefix}{path}"

    @staticmethod
    def is_local_url(url: str | None) -> bool:
        """Whether ``url`` stays on this site."""
        if not url:
            return False
        if url.startswith("~/") or url == "~":
            return True
        if not url.startswith("/") or url.startswith("//") or url.startswith("/\\"):
            return False
        parts = urlsplit(url)
        return not parts.scheme and not parts.netloc

    def sanitize_return_url(self, url: str | None) -> str:
        """Return ``url`` if it is local, otherwise the store root."""
        return url if self.is_local_url(url) else "~/"

    def redirect_url(self, url: str | None, context: WorkContext) -> str:
        """Resolve a redirect target for the current store and language."""
        return self.to_app_absolute(
            self.sanitize_return_url(url),
            context.current_store,
            context.current_language,
        )

    def absolute_url(
        self,
        virtual_path: str,
        context: WorkContext,
        query: dict[str, str] | None = None,
    ) -> str:
        """Build an absolute URL on the current store's host.

        Used for links sent by email, which must point at the store the user
        registered in rather than whatever host served the request.
        """
        store = context.current_store
        host = store.host or context.request_host
        path = self.to_app_absolute(virtual_path, store, context.current_language)
        url = f"{context.request_scheme}://{host}{path}"
        if query:
            url = f"{url}?{urlencode(query)}"
        return url
