"""Repository interfaces for storefront identity.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the adapter and persistence layers.
"""

from storefront.domain.repository.credential_store import CredentialStore

__all__ = ["CredentialStore"]
