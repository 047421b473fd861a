"""In-memory repository implementations for testing."""

from .credential_store import InMemoryCredentialStore, PasswordPolicy

__all__ = ["InMemoryCredentialStore", "PasswordPolicy"]
