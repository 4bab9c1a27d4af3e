# =============================================================================
# app/routers/api/user.py - User Management Endpoints
# =============================================================================
# Admin-only CRUD over user accounts.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Path, Request

from app.routers.api.endpoint import EndpointConfig, list_query, page_of
from app.server import request_log
from core.models.common import ListQuery
from core.models.user import UserCreate, UserResponse, UserUpdate
from core.services import UserService

UserId = Annotated[int, Path(ge=1, description="User ID")]


async def list_users(query: ListQuery = Depends(list_query)):
    """One page of users, with their role names."""
    return page_of(UserService.list(query), UserService.count(query.search), query)


async def get_user(user_id: UserId):
    return UserService.get(user_id)


async def create_user(request: Request, body: UserCreate):
    """
    Create a user without roles.

    Use PUT /role/{role_id}/users to grant roles.
    """
    user = UserService.create(body)
    request_log(request, ["user", "create"], {"user": user["id"]})
    return user


async def update_user(request: Request, user_id: UserId, body: UserUpdate):
    user = UserService.update(user_id, body)
    request_log(request, ["user", "update"], {"user": user_id})
    return user


async def delete_user(request: Request, user_id: UserId):
    UserService.delete(user_id)
    request_log(request, ["user", "delete"], {"user": user_id})


LIST = EndpointConfig(handler=list_users, summary="List users", tags=["Users"], auth="admin")
GET = EndpointConfig(
    handler=get_user,
    summary="Get user",
    tags=["Users"],
    response_model=UserResponse,
    auth="admin",
)
CREATE = EndpointConfig(
    handler=create_user,
    summary="Create user",
    tags=["Users"],
    status_code=201,
    response_model=UserResponse,
    auth="admin",
)
UPDATE = EndpointConfig(
    handler=update_user,
    summary="Update user",
    tags=["Users"],
    response_model=UserResponse,
    auth="admin",
)
DELETE = EndpointConfig(
    handler=delete_user,
    summary="Delete user",
    tags=["Users"],
    status_code=204,
    auth="admin",
)
