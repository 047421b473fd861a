"""Submitted form models for account flows.

Field names accept both ``snake_case`` and the camel/Pascal spellings used
by storefront themes (``userName``, ``UserName``).
"""

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)


class AccountForm(BaseModel):
    """Base class for submitted account forms."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


def _blank_to_none(value: object) -> object:
    # HTML forms post empty inputs as ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RegistrationForm(AccountForm):
    user_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("user_name", "username", "userName", "UserName"),
    )
    password: str = Field(min_length=1, validation_alias=AliasChoices("password", "Password"))
    email: EmailStr | None = Field(
        default=None, validation_alias=AliasChoices("email", "Email")
    )
    first_name: str | None = Field(
        default=None, validation_alias=AliasChoices("first_name", "firstName", "FirstName")
    )
    last_name: str | None = Field(
        default=None, validation_alias=AliasChoices("last_name", "lastName", "LastName")
    )

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def optional_blank(cls, value: object) -> object:
        return _blank_to_none(value)

    @property
    def full_name(self) -> str | None:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or None


class InvitationForm(AccountForm):
    email: EmailStr = Field(validation_alias=AliasChoices("email", "Email"))
    token: str = Field(min_length=1, validation_alias=AliasChoices("token", "Token"))
    user_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("user_name", "username", "userName", "UserName"),
    )
    password: str = Field(min_length=1, validation_alias=AliasChoices("password", "Password"))
    first_name: str | None = Field(
        default=None, validation_alias=AliasChoices("first_name", "firstName", "FirstName")
    )
    last_name: str | None = Field(
        default=None, validation_alias=AliasChoices("last_name", "lastName", "LastName")
    )
    organization_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "organization_id", "organizationId", "OrganizationId"
        ),
    )

    @field_validator("first_name", "last_name", "organization_id", mode="before")
    @classmethod
    def optional_blank(cls, value: object) -> object:
        return _blank_to_none(value)


class LoginForm(AccountForm):
    user_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("user_name", "username", "userName", "UserName"),
    )
    password: str = Field(min_length=1, validation_alias=AliasChoices("password", "Password"))
    remember_me: bool = Field(
        default=False,
        validation_alias=AliasChoices("remember_me", "rememberMe", "RememberMe"),
    )

    @field_validator("remember_me", mode="before")
    @classmethod
    def parse_checkbox(cls, value: object) -> object:
        # HTML checkboxes post "on"
        if isinstance(value, str) and value.lower() == "on":
            return True
        return value


class ForgotPasswordForm(AccountForm):
    # Email address or user name
    email: str = Field(min_length=1, validation_alias=AliasChoices("email", "Email"))


class ForgotLoginForm(AccountForm):
    email: EmailStr = Field(validation_alias=AliasChoices("email", "Email"))


class ResetPasswordByCodeForm(AccountForm):
    email: str = Field(min_length=1, validation_alias=AliasChoices("email", "Email"))
    code: str = Field(min_length=1, validation_alias=AliasChoices("code", "Code"))


class ResetPasswordForm(AccountForm):
    token: str = Field(min_length=1, validation_alias=AliasChoices("token", "Token"))
    email: str | None = Field(default=None, validation_alias=AliasChoices("email", "Email"))
    user_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("user_name", "username", "userName", "UserName"),
    )
    password: str = Field(min_length=1, validation_alias=AliasChoices("password", "Password"))
    password_confirmation: str = Field(
        default="",
        validation_alias=AliasChoices(
            "password_confirmation", "passwordConfirmation", "PasswordConfirmation"
        ),
    )

    @field_validator("email", "user_name", mode="before")
    @classmethod
    def optional_blank(cls, value: object) -> object:
        return _blank_to_none(value)


class ChangePasswordForm(AccountForm):
    old_password: str = Field(
        min_length=1,
        validation_alias=AliasChoices("old_password", "oldPassword", "OldPassword"),
    )
    new_password: str = Field(
        min_length=1,
        validation_alias=AliasChoices("new_password", "newPassword", "NewPassword"),
    )
    new_password_confirmation: str = Field(
        default="",
        validation_alias=AliasChoices(
            "new_password_confirmation",
            "newPasswordConfirmation",
            "NewPasswordConfirmation",
        ),
    )
