"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseModel):
    """A store served by this storefront."""

    id: str
    name: str
    # Public host used for links in emails (e.g. "electronics.example.com")
    host: str | None = None
    # Sender address for store notifications
    email: str | None = None
    default_language: str = "en-US"
    languages: list[str] = ["en-US"]
    # Other stores whose customers may sign in here
    trusted_groups: list[str] = []


class StorefrontSettings(BaseModel):
    """Storefront behaviour configuration."""

    default_store_id: str = "electronics"
    stores: list[StoreSettings] = [
        StoreSettings(
            id="electronics",
            name="Electronics",
            host="localhost:8000",
            email="noreply@localhost",
        )
    ]

    # Send a second "confirm your email" message after registration
    send_account_confirmation: bool = False

    # Channel used to deliver password reset credentials
    reset_password_notification_gateway: Literal["Email", "Phone"] = "Email"

    # Requests under this prefix are programmatic callers
    api_path_prefix: str = "/storefrontapi"


class ExternalProviderSettings(BaseModel):
    """OAuth 2.0 external login provider configuration."""

    name: str
    authorize_url: str
    token_url: str
    userinfo_url: str
    client_id: str = "CHANGE_ME_IN_PRODUCTION"
    client_secret: str = "CHANGE_ME_IN_PRODUCTION"
    scope: str = "openid profile email"

    # Userinfo field holding the permanent provider key
    key_claim: str = "sub"

    # Userinfo field -> claim type renames (e.g. {"name": "urn:github:name"})
    claim_mappings: dict[str, str] = {}


class AuthSettings(BaseModel):
    """Authentication configuration."""

    # Session cookie signing
    jwt_secret: str = "CHANGE_ME_IN_PRODUCTION"  # Must be overridden in production
    jwt_algorithm: str = "HS256"
    session_cookie_name: str = "storefront.session"
    persistent_session_days: int = 14
    session_hours: int = 12

    # User tokens (email confirmation, password reset)
    token_secret: str = "CHANGE_ME_IN_PRODUCTION"
    token_lifespan_hours: int = 24
    # SMS codes are valid for this many seconds per step, +/- two steps
    phone_code_step_seconds: int = 180

    # Lockout
    max_failed_access_attempts: int = 5
    lockout_minutes: int = 5

    # Anti-forgery double-submit token
    antiforgery_cookie_name: str = "storefront.antiforgery"
    antiforgery_field_name: str = "__RequestVerificationToken"
    antiforgery_header_name: str = "X-XSRF-TOKEN"

    external_providers: list[ExternalProviderSettings] = []


class PlatformSettings(BaseModel):
    """Remote commerce platform connection."""

    base_url: str = "http://localhost:10645"
    api_key: str = "CHANGE_ME_IN_PRODUCTION"
    timeout_seconds: float = 30.0


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # If None, sends when a token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, using ``__`` for nested values:

        ENVIRONMENT=production
        AUTH__JWT_SECRET=...
        STOREFRONT__RESET_PASSWORD_NOTIFICATION_GATEWAY=Phone
        PLATFORM__BASE_URL=https://platform.example.com
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows AUTH__JWT_SECRET syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    port: int = 8000

    storefront: StorefrontSettings = StorefrontSettings()
    auth: AuthSettings = AuthSettings()
    platform: PlatformSettings = PlatformSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @model_validator(mode="after")
    def load_git_sha(self) -> "Settings":
        """Load the deployed commit SHA."""
        self.git_sha = self._load_git_sha()

        return self

    @model_validator(mode="after")
    def check_default_store(self) -> "Settings":
        """The default store must be one of the configured stores."""
        store_ids = {store.id for store in self.storefront.stores}
        if self.storefront.default_store_id not in store_ids:
            raise ValueError(
                f"Default store '{self.storefront.default_store_id}' is not configured"
            )
        return self

    @staticmethod
    def _load_git_sha() -> str:
        """Load git SHA from version file.

        Returns:
            Git SHA if version file exists, otherwise "unknown"
        """
        version_file = Path("/app/version.txt")
        if version_file.exists():
            try:
                return version_file.read_text().strip()
            except OSError:
                return "unknown"
        # In development, version file may not exist
        return "unknown"

    @property
    def is_production(self) -> bool:
        """Whether cookies must be marked secure."""
        return self.environment == "production"
