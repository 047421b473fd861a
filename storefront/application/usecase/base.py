"""Base use case and the result every account flow step produces."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from storefront.domain.model.form import Form
from storefront.domain.service.session_service import SessionGrant


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class View(str, Enum):
    """Views an account flow can end on."""

    LOGIN = "customers/login"
    REGISTER = "customers/register"
    ACCOUNT = "customers/account"
    CONFIRM_INVITATION = "customers/confirm_invitation"
    FORGOT_PASSWORD = "customers/forgot_password"
    FORGOT_PASSWORD_CODE = "customers/forgot_password_code"
    FORGOT_LOGIN = "customers/forgot_login"
    RESET_PASSWORD = "customers/reset_password"
    RESET_PASSWORD_CONFIRMATION = "customers/reset_password_confirmation"
    ACCESS_DENIED = "customers/access_denied"
    LOCKED_OUT = "lockedout"
    CONFIRMATION_DONE = "confirmation-done"
    ERROR = "error"


class Challenge(str, Enum):
    """Authentication challenges handed to the challenge policy."""

    LOGIN = "login"
    FORBID = "forbid"


class AccountResult(BaseModel):
    """Terminal outcome of one flow step.

    Exactly one of ``view``, ``redirect_url`` or ``challenge`` is set.
    ``session`` and ``end_session`` describe cookie changes to apply.
    """

    view: Optional[View] = None
    redirect_url: Optional[str] = None
    challenge: Optional[Challenge] = None
    status_code: int = 200
    form: Form = Field(default_factory=Form)
    session: Optional[SessionGrant] = None
    end_session: bool = False

    @classmethod
    def render(
        cls, view: View, form: Form | None = None, status_code: int = 200
    ) -> "AccountResult":
        return cls(view=view, form=form or Form(), status_code=status_code)

    @classmethod
    def redirect(
        cls,
        url: str,
        session: SessionGrant | None = None,
        end_session: bool = False,
    ) -> "AccountResult":
        return cls(redirect_url=url, session=session, end_session=end_session)

    @classmethod
    def forbid(cls) -> "AccountResult":
        return cls(challenge=Challenge.FORBID)

    @property
    def is_redirect(self) -> bool:
        return self.redirect_url is not None
