"""Domain events.

Events are published only after the state change they describe has
returned from the credential store.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field

from storefront.domain.model.common import DomainModel
from storefront.domain.model.user import User
from storefront.domain.model.work_context import WorkContext


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(DomainModel):
    """Base class for domain events."""

    context: WorkContext
    user: User
    occurred_at: datetime = Field(default_factory=_utcnow)

    @property
    def name(self) -> str:
        return type(self).__name__


class UserRegisteredEvent(DomainEvent):
    """A user account was created or an invitation was accepted."""

    source_model: Optional[dict[str, Any]] = None


class UserLoginEvent(DomainEvent):
    """A session was established for a user."""

    pass
