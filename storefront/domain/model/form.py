"""Form/error model.

A ``Form`` echoes the caller's submitted values back on failure together
with an ordered list of ``FormError`` entries in the kebab-case vocabulary
of ``FormErrorCode``. Forms live for one request and are never persisted.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.value import (
    DEFAULT_DESCRIPTIONS,
    FormErrorCode,
    IdentityError,
    translate_store_error,
)

# Password fields are never echoed back
_SECRET_FIELD = re.compile(r"password", re.IGNORECASE)


def _kebab(value: str) -> str:
    value = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", value)
    return value.replace("_", "-").lower()


class FormError(BaseModel):
    """A single user-facing error."""

    code: str
    description: str | None = None


class Form(BaseModel):
    """Submitted values plus accumulated errors."""

    values: dict[str, Any] = Field(default_factory=dict)
    errors: list[FormError] = Field(default_factory=list)
    posted_successfully: bool = False

    @classmethod
    def from_values(cls, values: Mapping[str, Any] | BaseModel | None) -> "Form":
        """Build a form echoing ``values`` minus passwords."""
        if values is None:
            return cls()
        if isinstance(values, BaseModel):
            values = values.model_dump(mode="json")
        return cls(
            values={
                key: value
                for key, value in values.items()
                if not _SECRET_FIELD.search(key)
            }
        )

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def error_codes(self) -> list[str]:
        return [error.code for error in self.errors]

    def add_error(
        self, code: FormErrorCode | str, description: str | None = None
    ) -> "Form":
        """Append an error, defaulting the description for known codes."""
        if isinstance(code, FormErrorCode):
            description = description or DEFAULT_DESCRIPTIONS.get(code)
            code = code.value
        self.errors.append(FormError(code=code, description=description))
        return self

    def add_identity_errors(self, errors: Iterable[IdentityError]) -> "Form":
        """Translate credential store errors and append them in order."""
        for error in errors:
            self.add_error(translate_store_error(error.code), error.description)
        return self

    def add_validation_errors(self, exc: PydanticValidationError) -> "Form":
        """Append one error per field-level validation failure."""
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "form"
            self.add_error(_kebab(error["type"]), f"{field}: {error['msg']}")
        return self
