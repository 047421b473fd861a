"""Purpose-scoped user tokens.

Link tokens are short JWTs binding (user, purpose, security stamp).
Phone codes are 6-digit HMAC time-step codes over the same triple.
Rotating the user's security stamp invalidates every outstanding token.
"""

import hashlib
import hmac
import time
from datetime import datetime, timedelta, timezone

import jwt

from storefront.util.error import TokenError

_ALGORITHM = "HS256"
_CODE_DIGITS = 6
# Accepted clock drift, in steps, on either side of the current step
_CODE_WINDOW = 2


def _stamp_digest(security_stamp: str) -> str:
    return hashlib.sha256(security_stamp.encode()).hexdigest()


def create_link_token(
    user_id: str,
    purpose: str,
    security_stamp: str,
    secret: str,
    lifespan: timedelta,
) -> str:
    """Issue a link token for one user and purpose.

    Raises:
        TokenError: If the token cannot be encoded
    """
    payload = {
        "sub": user_id,
        "purpose": purpose,
        "stamp": _stamp_digest(security_stamp),
        "exp": datetime.now(timezone.utc) + lifespan,
    }
    try:
        return jwt.encode(payload, secret, algorithm=_ALGORITHM)
    except (TypeError, ValueError) as e:
        raise TokenError(f"Cannot issue {purpose} token: {e}") from e


def verify_link_token(
    token: str,
    user_id: str,
    purpose: str,
    security_stamp: str,
    secret: str,
) -> bool:
    """Check a link token against the user, purpose and current stamp."""
    try:
        payload = jwt.decode(token, secret, algorithms=[_ALGORITHM])
    except jwt.InvalidTokenError:
        return False

    return (
        payload.get("sub") == user_id
        and payload.get("purpose") == purpose
        and hmac.compare_digest(
            str(payload.get("stamp", "")), _stamp_digest(security_stamp)
        )
    )


def _code_for_step(
    step: int, user_id: str, purpose: str, security_stamp: str, secret: str
) -> str:
    key = f"{secret}:{security_stamp}".encode()
    message = f"{user_id}:{purpose}:{step}".encode()
    digest = hmac.new(key, message, hashlib.sha256).digest()
    offset = digest[-1] & 0x0F
    code_int = (int.from_bytes(digest[offset : offset + 4], "big") & 0x7FFFFFFF) % (
        10**_CODE_DIGITS
    )
    return str(code_int).zfill(_CODE_DIGITS)


def create_numeric_code(
    user_id: str,
    purpose: str,
    security_stamp: str,
    secret: str,
    step_seconds: int,
    timestamp: float | None = None,
) -> str:
    """Issue a numeric one-time code for the current time step."""
    now = time.time() if timestamp is None else timestamp
    return _code_for_step(
        int(now // step_seconds), user_id, purpose, security_stamp, secret
    )


def verify_numeric_code(
    code: str,
    user_id: str,
    purpose: str,
    security_stamp: str,
    secret: str,
    step_seconds: int,
    timestamp: float | None = None,
) -> bool:
    """Check a numeric code within the accepted step window."""
    code = code.strip()
    if len(code) != _CODE_DIGITS or not code.isdigit():
        return False

    now = time.time() if timestamp is None else timestamp
    current_step = int(now // step_seconds)
    for offset in range(-_CODE_WINDOW, _CODE_WINDOW + 1):
        expected = _code_for_step(
            current_step + offset, user_id, purpose, security_stamp, secret
        )
        if hmac.compare_digest(expected, code):
            return True
    return False
