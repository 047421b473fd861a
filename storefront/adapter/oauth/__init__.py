"""OAuth adapter."""

from .client import MockOAuthClient, RealOAuthClient

__all__ = ["MockOAuthClient", "RealOAuthClient"]
