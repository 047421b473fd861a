"""Per-request context passed explicitly into every use case."""

from typing import Optional

from storefront.domain.model.common import DomainModel
from storefront.domain.model.store import Store
from storefront.domain.model.user import User


class WorkContext(DomainModel):
    """Store, language and principal of the current request."""

    current_store: Store
    current_language: str
    current_user: Optional[User] = None
    request_scheme: str = "http"
    request_host: str = "localhost"
    request_path: str = "/"

    @property
    def is_registered_user(self) -> bool:
        return self.current_user is not None and self.current_user.id is not None

    def with_user(self, user: Optional[User]) -> "WorkContext":
        return self.model_copy(update={"current_user": user})
