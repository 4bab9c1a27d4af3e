# =============================================================================
# core/models/role.py - Role and Permission Schemas
# =============================================================================
# A role groups users; a permission grants a role one action on a resource.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PermissionAction(str, Enum):
    """Actions a permission can grant on a resource."""
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class RoleCreate(BaseModel):
    """
    Schema for creating a role.

    Example:
        {"name": "editor", "description": "Can edit content"}
    """

    name: str = Field(
        ...,
        min_length=2,
        max_length=30,
        description="Unique role name, also used as token scope"
    )

    description: str | None = Field(
        default=None,
        max_length=255,
    )


class RoleUpdate(BaseModel):
    """Partial update of a role."""
    name: str | None = Field(default=None, min_length=2, max_length=30)
    description: str | None = Field(default=None, max_length=255)


class RoleResponse(BaseModel):
    """Role returned to clients, with its member ids when requested."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    users: list[int] = Field(default_factory=list)


class RoleUsersRequest(BaseModel):
    """
    Users to add to or remove from a role.

    Example:
        {"ids": [1, 2, 3]}
    """
    ids: list[int] = Field(..., min_length=1)


class PermissionRequest(BaseModel):
    """
    A single permission grant.

    Example:
        {"resource_id": 2, "action": "read"}
    """
    resource_id: int
    action: PermissionAction


class PermissionsUpdate(BaseModel):
    """Replacement set of permissions for a role."""
    permissions: list[PermissionRequest] = Field(default_factory=list)


class PermissionResponse(BaseModel):
    """Permission returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    role_id: int
    resource_id: int
    action: PermissionAction
