"""JWT session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from storefront.config import AuthSettings


class TokenPayload(BaseModel):
    """Session token payload."""

    user_id: str
    user_name: str
    store_id: str | None = None
    persistent: bool = False
    operator_user_id: str | None = None
    operator_user_name: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def session_lifetime(persistent: bool, settings: AuthSettings) -> timedelta:
    """Lifetime of a session token.

    Args:
        persistent: Whether the session survives browser restarts
        settings: Authentication settings

    Returns:
        How long the token stays valid
    """
    if persistent:
        return timedelta(days=settings.persistent_session_days)
    return timedelta(hours=settings.session_hours)


def create_token(
    user_id: str,
    user_name: str,
    settings: AuthSettings,
    store_id: str | None = None,
    persistent: bool = False,
    operator_user_id: str | None = None,
    operator_user_name: str | None = None,
) -> str:
    """Create a session JWT for the user.

    Args:
        user_id: User ID
        user_name: User name
        settings: Authentication settings
        store_id: Store the user belongs to
        persistent: Whether the session is persistent ("remember me")
        operator_user_id: Impersonating operator ID, if any
        operator_user_name: Impersonating operator name, if any

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + session_lifetime(persistent, settings)

    payload = {
        "user_id": user_id,
        "user_name": user_name,
        "store_id": store_id,
        "persistent": persistent,
        "operator_user_id": operator_user_id,
        "operator_user_name": operator_user_name,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session JWT.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
