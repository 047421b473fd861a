"""Helpers shared by account use cases."""

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.model import Form, Store, User, WorkContext
from storefront.domain.specification import (
    CanLoginToStoreSpecification,
    IsUserSuspendedSpecification,
)

FormT = TypeVar("FormT", bound=BaseModel)


class FlowRequest(BaseModel):
    """A POSTed form together with the request's work context."""

    context: WorkContext
    values: dict[str, Any] = {}


def parse_form(
    model: type[FormT], values: Mapping[str, Any], form: Form
) -> FormT | None:
    """Validate ``values`` into ``model``.

    Validation failures are appended to ``form`` and no store call should
    follow.

    Returns:
        The parsed model, or None if validation failed
    """
    try:
        return model.model_validate(dict(values))
    except PydanticValidationError as e:
        form.add_validation_errors(e)
        return None


def is_eligible(user: User, store: Store) -> bool:
    """Whether ``user`` may be granted a session in ``store``."""
    return CanLoginToStoreSpecification(user).is_satisfied_by(
        store
    ) and not IsUserSuspendedSpecification().is_satisfied_by(user)
