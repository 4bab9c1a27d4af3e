# =============================================================================
# app/routers/api/login.py - Authentication Endpoints
# =============================================================================
# Login, logout, token renewal and password reset.
#
# The token is returned in the body for API clients and also set as an
# HTTP-only cookie so the server-rendered pages can use it.
# =============================================================================

import logging

from fastapi import Depends, Request, Response

from app.auth import AuthUser, get_current_user
from app.config import settings
from app.routers.api.endpoint import EndpointConfig
from app.server import request_log
from core.models.auth import (
    LoginRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
    TokenResponse,
)
from core.models.common import MessageResponse
from core.services import AuthService

logger = logging.getLogger(__name__)

RESET_MESSAGE = "If the email is registered, a password reset has been issued"


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=expires_in,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


async def login(request: Request, body: LoginRequest, response: Response):
    """
    Exchange username and password for a signed token.

    Raises 401 when the credentials don't match.
    """
    user = AuthService.authenticate(body.username, body.password)
    token, expires_in = AuthService.issue_token(user)

    _set_auth_cookie(response, token, expires_in)
    request_log(request, ["auth", "login"], {"user": user["id"]})

    return TokenResponse(token=token, expires_in=expires_in)


async def logout(request: Request, response: Response):
    """Clear the auth cookie."""
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    request_log(request, ["auth", "logout"])
    return MessageResponse(message="Logged out")


async def renew(request: Request, response: Response, user: AuthUser = Depends(get_current_user)):
    """Issue a fresh token for the authenticated user."""
    token, expires_in = AuthService.renew(user.id)

    _set_auth_cookie(response, token, expires_in)
    request_log(request, ["auth", "renew"], {"user": user.id})

    return TokenResponse(token=token, expires_in=expires_in)


async def password_reset(request: Request, body: PasswordResetRequest):
    """
    Issue a password reset token for an email address.

    Always answers 200 so the endpoint can't be used to probe for accounts.
    """
    token = AuthService.request_password_reset(body.email)
    request_log(request, ["auth", "password-reset"], {"issued": token is not None})
    return MessageResponse(message=RESET_MESSAGE)


async def password_update(request: Request, body: PasswordUpdateRequest):
    """Set a new password with a reset token."""
    AuthService.reset_password(body.token, body.password)
    request_log(request, ["auth", "password-update"])
    return MessageResponse(message="Password updated")


LOGIN = EndpointConfig(
    handler=login,
    summary="Log in",
    tags=["Auth"],
    response_model=TokenResponse,
)
LOGOUT = EndpointConfig(
    handler=logout,
    summary="Log out",
    tags=["Auth"],
    response_model=MessageResponse,
)
RENEW = EndpointConfig(
    handler=renew,
    summary="Renew token",
    tags=["Auth"],
    response_model=TokenResponse,
    auth="user",
)
PASSWORD_RESET = EndpointConfig(
    handler=password_reset,
    summary="Request password reset",
    tags=["Auth"],
    response_model=MessageResponse,
)
PASSWORD_UPDATE = EndpointConfig(
    handler=password_update,
    summary="Update password with reset token",
    tags=["Auth"],
    response_model=MessageResponse,
)
