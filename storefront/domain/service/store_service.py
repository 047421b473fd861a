"""Store lookup from configuration."""

from storefront.config import StorefrontSettings
from storefront.domain.error import StoreNotFoundError
from storefront.domain.model.store import Store
from storefront.domain.value import StoreId

from .base import Service


class StoreService(Service):
    """Resolves the stores this storefront serves."""

    def __init__(self, storefront_settings: StorefrontSettings) -> None:
        self.default_store_id = StoreId(storefront_settings.default_store_id)
        self._stores: dict[str, Store] = {
            s.id.lower(): Store(
                id=StoreId(s.id),
                name=s.name,
                host=s.host,
                email=s.email,
                default_language=s.default_language,
                languages=tuple(s.languages),
                trusted_groups=tuple(StoreId(g) for g in s.trusted_groups),
            )
            for s in storefront_settings.stores
        }

    @property
    def default_store(self) -> Store:
        return self.get(self.default_store_id)

    def find(self, store_id: str) -> Store | None:
        return self._stores.get(store_id.lower())

    def get(self, store_id: str) -> Store:
        """Get a configured store.

        Raises:
            StoreNotFoundError: If the store is not configured
        """
        store = self.find(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        return store

    def resolve_path(self, path: str) -> tuple[Store, str, str]:
        """Split an optional ``/{store}/{language}`` prefix off ``path``.

        Either segment may be omitted. Unknown leading segments are left in
        the path, so ``/account`` resolves to the default store.

        Returns:
            Tuple of (store, language, remaining path)
        """
        segments = path.lstrip("/").split("/")
        store = self.find(segments[0]) if segments[0] else None
        if store is not None:
            segments = segments[1:]
        else:
            store = self.default_store

        language = store.default_language
        if segments and segments[0] and store.supports_language(segments[0]):
            language = next(
                lang for lang in store.languages if lang.lower() == segments[0].lower()
            )
            segments = segments[1:]

        return store, language, "/" + "/".join(segments)
