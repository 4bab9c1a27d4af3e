# =============================================================================
# app/routers/api/role.py - Role and Permission Endpoints
# =============================================================================
# Admin-only role CRUD, role membership and role permissions.
#
# Membership:
#   PUT    /role/{role_id}/users   {"ids": [...]}   add users
#   DELETE /role/{role_id}/users   {"ids": [...]}   remove users
#
# Permissions:
#   POST   /role/{role_id}/permissions   add one (resource, action) grant
#   PUT    /role/{role_id}/permissions   replace every grant of the role
# =============================================================================

from typing import Annotated

from fastapi import Depends, Path, Query, Request

from app.routers.api.endpoint import EndpointConfig, list_query, page_of
from app.server import request_log
from core.models.common import ListQuery
from core.models.role import (
    PermissionRequest,
    PermissionResponse,
    PermissionsUpdate,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
    RoleUsersRequest,
)
from core.services import RoleService

RoleId = Annotated[int, Path(ge=1, description="Role ID")]


async def list_roles(query: ListQuery = Depends(list_query)):
    """One page of roles."""
    return page_of(RoleService.list(query), RoleService.count(query.search), query)


async def get_role(role_id: RoleId):
    """Role with the ids of its users."""
    return RoleService.get(role_id)


async def create_role(request: Request, body: RoleCreate):
    role = RoleService.create(body)
    request_log(request, ["role", "create"], {"role": role["id"]})
    return role


async def update_role(request: Request, role_id: RoleId, body: RoleUpdate):
    role = RoleService.update(role_id, body)
    request_log(request, ["role", "update"], {"role": role_id})
    return role


async def delete_role(request: Request, role_id: RoleId):
    RoleService.delete(role_id)
    request_log(request, ["role", "delete"], {"role": role_id})


async def add_users(request: Request, role_id: RoleId, body: RoleUsersRequest):
    """Grant the role to users. Users already holding it are skipped."""
    role = RoleService.add_users(role_id, body.ids)
    request_log(request, ["role", "users"], {"role": role_id, "added": body.ids})
    return role


async def remove_users(
    request: Request,
    role_id: RoleId,
    body: RoleUsersRequest,
):
    """Revoke the role from users."""
    role = RoleService.remove_users(role_id, body.ids)
    request_log(request, ["role", "users"], {"role": role_id, "removed": body.ids})
    return role


async def list_permissions(
    role_id: Annotated[int | None, Query(ge=1, description="Only this role's grants")] = None,
):
    """Every (role, resource, action) grant."""
    return RoleService.list_permissions(role_id)


async def add_permission(request: Request, role_id: RoleId, body: PermissionRequest):
    """
    Grant one action on one resource.

    Raises 404 for an unknown role or resource and 409 for an existing grant.
    """
    permission = RoleService.add_permission(role_id, body)
    request_log(request, ["role", "permissions"], {"role": role_id, "permission": permission["id"]})
    return permission


async def update_permissions(request: Request, role_id: RoleId, body: PermissionsUpdate):
    """Replace the role's grants with the given list."""
    permissions = RoleService.update_permissions(role_id, body)
    request_log(request, ["role", "permissions"], {"role": role_id, "count": len(permissions)})
    return permissions


LIST = EndpointConfig(handler=list_roles, summary="List roles", tags=["Roles"], auth="admin")
GET = EndpointConfig(
    handler=get_role,
    summary="Get role",
    tags=["Roles"],
    response_model=RoleResponse,
    auth="admin",
)
CREATE = EndpointConfig(
    handler=create_role,
    summary="Create role",
    tags=["Roles"],
    status_code=201,
    response_model=RoleResponse,
    auth="admin",
)
UPDATE = EndpointConfig(
    handler=update_role,
    summary="Update role",
    tags=["Roles"],
    response_model=RoleResponse,
    auth="admin",
)
DELETE = EndpointConfig(
    handler=delete_role,
    summary="Delete role",
    tags=["Roles"],
    status_code=204,
    auth="admin",
)
ADD_USERS = EndpointConfig(
    handler=add_users,
    summary="Add users to role",
    tags=["Roles"],
    response_model=RoleResponse,
    auth="admin",
)
REMOVE_USERS = EndpointConfig(
    handler=remove_users,
    summary="Remove users from role",
    tags=["Roles"],
    response_model=RoleResponse,
    auth="admin",
)
LIST_PERMISSIONS = EndpointConfig(
    handler=list_permissions,
    summary="List permissions",
    tags=["Permissions"],
    response_model=list[PermissionResponse],
    auth="admin",
)
ADD_PERMISSION = EndpointConfig(
    handler=add_permission,
    summary="Add permission to role",
    tags=["Permissions"],
    status_code=201,
    response_model=PermissionResponse,
    auth="admin",
)
UPDATE_PERMISSIONS = EndpointConfig(
    handler=update_permissions,
    summary="Replace role permissions",
    tags=["Permissions"],
    response_model=list[PermissionResponse],
    auth="admin",
)
