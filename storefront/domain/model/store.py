"""Store entity."""

from storefront.domain.model.common import DomainModel
from storefront.domain.value import StoreId


class Store(DomainModel):
    """A store served by this storefront.

    Customers of ``trusted_groups`` stores may sign in here as well.
    """

    id: StoreId
    name: str
    host: str | None = None
    email: str | None = None
    default_language: str = "en-US"
    languages: tuple[str, ...] = ("en-US",)
    trusted_groups: tuple[StoreId, ...] = ()

    def supports_language(self, language: str) -> bool:
        return language.lower() in {lang.lower() for lang in self.languages}
