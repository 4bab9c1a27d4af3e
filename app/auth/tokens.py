# =============================================================================
# app/auth/tokens.py - Token Signing and Verification
# =============================================================================
# Auth and password-reset tokens are HS256 JWTs signed with SECRET_KEY.
# The `purpose` claim keeps a reset token from being used as an auth token.
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import TokenPayload
from app.config import settings
from app.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

AUTH_PURPOSE = "auth"
RESET_PURPOSE = "password-reset"


def create_token(
    user_id: int,
    purpose: str = AUTH_PURPOSE,
    username: str | None = None,
    scope: list[str] | None = None,
    expires_minutes: int | None = None,
) -> tuple[str, int]:
    """
    Sign a token for a user.

    Args:
        user_id: Subject of the token
        purpose: AUTH_PURPOSE or RESET_PURPOSE
        username: Included in auth tokens for display
        scope: Role names granted to the bearer
        expires_minutes: Lifetime, defaults to TOKEN_EXPIRES_MINUTES

    Returns:
        Tuple of (encoded token, lifetime in seconds)
    """
    lifetime = timedelta(minutes=expires_minutes or settings.TOKEN_EXPIRES_MINUTES)
    now = datetime.now(timezone.utc)

    claims = {
        "sub": str(user_id),
        "purpose": purpose,
        "scope": scope or [],
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    if username:
        claims["username"] = username

    token = jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, int(lifetime.total_seconds())


def decode_token(token: str, purpose: str = AUTH_PURPOSE) -> TokenPayload:
    """
    Verify a token's signature, expiry and purpose.

    Raises:
        InvalidTokenError: If the token is expired, tampered with or
            issued for another purpose
    """
    try:
        claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        payload = TokenPayload(**claims)

    except ExpiredSignatureError:
        logger.warning("Token has expired")
        raise InvalidTokenError("Token has expired")

    except (JWTError, ValidationError) as e:
        logger.warning(f"Token validation failed: {e}")
        raise InvalidTokenError(f"Invalid token: {e}")

    if payload.purpose != purpose:
        logger.warning(f"Token issued for '{payload.purpose}' used for '{purpose}'")
        raise InvalidTokenError("Invalid token: wrong purpose")

    return payload
