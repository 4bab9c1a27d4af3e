# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The token is read from the Authorization header (API clients) or, failing
# that, from the auth cookie set at login (browser pages).
#
# Usage:
#   from app.auth import get_current_user, require_scope, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
#
#   @router.get("/admin-only", dependencies=[Depends(require_scope("admin"))])
#   async def admin_only():
#       ...
# =============================================================================

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.auth.tokens import AUTH_PURPOSE, decode_token
from app.config import settings
from app.exceptions import ForbiddenError, InvalidTokenError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers fall back to the cookie
security_optional = HTTPBearer(auto_error=False)


def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> Optional[str]:
    """Raw token from the Authorization header or the auth cookie."""
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME)


async def get_current_user(token: Optional[str] = Depends(get_token)) -> AuthUser:
    """
    Extract and validate user from a signed token.

    This dependency:
    1. Reads the token from the Bearer header or the auth cookie
    2. Verifies the JWT signature, expiry and purpose
    3. Returns an AuthUser with the user's ID, username and scope

    Raises:
        InvalidTokenError: 401 if token is missing, invalid or expired
    """
    if not token:
        raise InvalidTokenError("Missing authentication token")

    payload = decode_token(token, purpose=AUTH_PURPOSE)

    try:
        user_id = int(payload.sub)
    except ValueError:
        logger.warning(f"Invalid user id in token: {payload.sub}")
        raise InvalidTokenError("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_id, username=payload.username or "", scope=tuple(payload.scope))


async def get_current_user_optional(
    token: Optional[str] = Depends(get_token),
) -> Optional[AuthUser]:
    """
    Optionally get the current user.

    Returns None if no token is provided or the token is invalid,
    instead of raising an error. Used by pages that work for guests too.
    """
    if not token:
        return None

    try:
        return await get_current_user(token)
    except InvalidTokenError:
        return None


def require_scope(scope: str) -> Callable:
    """
    Build a dependency that only lets users holding `scope` through.

    Raises (from the returned dependency):
        InvalidTokenError: 401 if not authenticated
        ForbiddenError: 403 if authenticated without the scope
    """
    async def dependency(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if not user.has_scope(scope):
            logger.info(f"User {user.id} denied, missing scope '{scope}'")
            raise ForbiddenError(scope)
        return user

    return dependency
