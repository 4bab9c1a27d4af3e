# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication with role names as token scope.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import (
    get_current_user,
    get_current_user_optional,
    require_scope,
)
from app.auth.models import AuthUser, TokenPayload
from app.auth.tokens import AUTH_PURPOSE, RESET_PURPOSE, create_token, decode_token

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "require_scope",
    "AuthUser",
    "TokenPayload",
    "AUTH_PURPOSE",
    "RESET_PURPOSE",
    "create_token",
    "decode_token",
]
