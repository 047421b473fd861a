"""Domain specifications."""

from .user import CanLoginToStoreSpecification, IsUserSuspendedSpecification

__all__ = ["CanLoginToStoreSpecification", "IsUserSuspendedSpecification"]
