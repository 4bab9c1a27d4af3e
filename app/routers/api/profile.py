# =============================================================================
# app/routers/api/profile.py - Own Profile Endpoints
# =============================================================================
# Read and update the authenticated user's own account.
# =============================================================================

from fastapi import Depends, Request

from app.auth import AuthUser, get_current_user
from app.routers.api.endpoint import EndpointConfig
from app.server import request_log
from core.models.user import UserResponse, UserUpdate
from core.services import UserService


async def get_profile(user: AuthUser = Depends(get_current_user)):
    """Current user's account."""
    return UserService.get(user.id)


async def update_profile(
    request: Request,
    body: UserUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Update the current user's username, email or password."""
    updated = UserService.update(user.id, body)
    request_log(request, ["profile", "update"], {"user": user.id})
    return updated


GET = EndpointConfig(
    handler=get_profile,
    summary="Get own profile",
    tags=["Profile"],
    response_model=UserResponse,
    auth="user",
)
UPDATE = EndpointConfig(
    handler=update_profile,
    summary="Update own profile",
    tags=["Profile"],
    response_model=UserResponse,
    auth="user",
)
