# =============================================================================
# core/services/role_service.py - Role Business Logic
# =============================================================================
# Handles role CRUD, role membership and the permissions granted to a role.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from core.models.common import ListQuery
from core.models.role import (
    PermissionRequest,
    PermissionsUpdate,
    RoleCreate,
    RoleUpdate,
)
from core.services.resource_service import ResourceService
from app.exceptions import RecordConflictError, RecordNotFoundError

logger = logging.getLogger(__name__)

TABLE = "roles"
USER_TABLE = "users"
MEMBERSHIP_TABLE = "user_roles"
PERMISSION_TABLE = "permissions"

# Role columns plus member ids through the user_roles join table
DETAIL_COLUMNS = "id, name, description, user_roles(user_id)"
SORTABLE_COLUMNS = {"id", "name", "description"}


def _to_public(row: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": row["id"],
        "name": row["name"],
        "description": row.get("description"),
        "users": [member["user_id"] for member in row.get("user_roles") or []],
    }


class RoleService:
    """
    Service for role and permission management.
    """

    @staticmethod
    def count(search: str | None = None) -> int:
        """Number of roles, optionally matching a name search."""
        return SupabaseClient.count_rows(TABLE, search=search, search_column="name")

    @staticmethod
    def list(query: ListQuery | None = None) -> list[dict[str, Any]]:
        """List one page of roles with their member ids."""
        query = query or ListQuery()
        sort = query.sort if query.sort in SORTABLE_COLUMNS else "id"

        rows = SupabaseClient.fetch_page(
            TABLE,
            columns=DETAIL_COLUMNS,
            limit=query.limit,
            page=query.page,
            sort=sort,
            descending=query.descending,
            search=query.search,
            search_column="name",
        )
        return [_to_public(row) for row in rows]

    @staticmethod
    def get(role_id: int) -> dict[str, Any]:
        """
        Get a role by ID.

        Raises:
            RecordNotFoundError: If role doesn't exist
        """
        row = SupabaseClient.fetch_by_id(TABLE, role_id, columns=DETAIL_COLUMNS)
        if not row:
            raise RecordNotFoundError("role", role_id)
        return _to_public(row)

    @staticmethod
    def create(data: RoleCreate) -> dict[str, Any]:
        """
        Create a role.

        Raises:
            RecordConflictError: If the name is taken
        """
        if SupabaseClient.fetch_one(TABLE, "name", data.name, columns="id"):
            raise RecordConflictError("role", "name", data.name)

        row = SupabaseClient.insert_rows(TABLE, data.model_dump())[0]
        logger.info(f"Created role: {row['id']} ({data.name})")
        return _to_public(row)

    @staticmethod
    def update(role_id: int, data: RoleUpdate) -> dict[str, Any]:
        """
        Update a role.

        Raises:
            RecordNotFoundError: If role doesn't exist
            RecordConflictError: If the new name is taken
        """
        if data.name:
            existing = SupabaseClient.fetch_one(TABLE, "name", data.name, columns="id")
            if existing and existing["id"] != role_id:
                raise RecordConflictError("role", "name", data.name)

        update_data = data.model_dump(exclude_none=True)
        if not update_data:
            return RoleService.get(role_id)

        if SupabaseClient.update_row(TABLE, role_id, update_data) is None:
            raise RecordNotFoundError("role", role_id)
        return RoleService.get(role_id)

    @staticmethod
    def delete(role_id: int) -> None:
        """
        Delete a role along with its memberships and permissions.

        Raises:
            RecordNotFoundError: If role doesn't exist
        """
        SupabaseClient.delete_rows(MEMBERSHIP_TABLE, {"role_id": role_id})
        SupabaseClient.delete_rows(PERMISSION_TABLE, {"role_id": role_id})
        if not SupabaseClient.delete_rows(TABLE, {"id": role_id}):
            raise RecordNotFoundError("role", role_id)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    @staticmethod
    def add_users(role_id: int, user_ids: list[int]) -> dict[str, Any]:
        """
        Add users to a role. Users already in the role are skipped.

        Returns:
            The role with its updated member ids

        Raises:
            RecordNotFoundError: If the role or one of the users doesn't exist
        """
        role = RoleService.get(role_id)
        new_ids = [user_id for user_id in dict.fromkeys(user_ids) if user_id not in role["users"]]

        if new_ids:
            found = SupabaseClient.fetch_all(USER_TABLE, columns="id", in_filter=("id", new_ids))
            found_ids = {row["id"] for row in found}
            for user_id in new_ids:
                if user_id not in found_ids:
                    raise RecordNotFoundError("user", user_id)

            SupabaseClient.insert_rows(
                MEMBERSHIP_TABLE,
                [{"role_id": role_id, "user_id": user_id} for user_id in new_ids],
            )
            logger.info(f"Added users {new_ids} to role {role_id}")

        return RoleService.get(role_id)

    @staticmethod
    def remove_users(role_id: int, user_ids: list[int]) -> dict[str, Any]:
        """Remove users from a role and return the role."""
        RoleService.get(role_id)
        SupabaseClient.delete_rows(
            MEMBERSHIP_TABLE,
            {"role_id": role_id},
            in_filter=("user_id", list(user_ids)),
        )
        return RoleService.get(role_id)

    # -------------------------------------------------------------------------
    # Permissions
    # -------------------------------------------------------------------------

    @staticmethod
    def list_permissions(role_id: int | None = None) -> list[dict[str, Any]]:
        """Every permission, or only those of one role."""
        filters = {"role_id": role_id} if role_id is not None else None
        return SupabaseClient.fetch_all(PERMISSION_TABLE, filters=filters)

    @staticmethod
    def add_permission(role_id: int, data: PermissionRequest) -> dict[str, Any]:
        """
        Grant a role one action on a resource.

        Raises:
            RecordNotFoundError: If the role or resource doesn't exist
            RecordConflictError: If the permission already exists
        """
        RoleService.get(role_id)
        ResourceService.get(data.resource_id)

        existing = SupabaseClient.fetch_all(PERMISSION_TABLE, filters={
            "role_id": role_id,
            "resource_id": data.resource_id,
            "action": data.action.value,
        })
        if existing:
            raise RecordConflictError("permission", "action", data.action.value)

        return SupabaseClient.insert_rows(PERMISSION_TABLE, {
            "role_id": role_id,
            "resource_id": data.resource_id,
            "action": data.action.value,
        })[0]

    @staticmethod
    def update_permissions(role_id: int, data: PermissionsUpdate) -> list[dict[str, Any]]:
        """
        Replace every permission of a role.

        Returns:
            The role's new permissions
        """
        RoleService.get(role_id)
        for permission in data.permissions:
            ResourceService.get(permission.resource_id)

        SupabaseClient.delete_rows(PERMISSION_TABLE, {"role_id": role_id})

        rows = list({
            (p.resource_id, p.action.value): {
                "role_id": role_id,
                "resource_id": p.resource_id,
                "action": p.action.value,
            }
            for p in data.permissions
        }.values())
        if not rows:
            return []

        logger.info(f"Replaced permissions of role {role_id} ({len(rows)} grants)")
        return SupabaseClient.insert_rows(PERMISSION_TABLE, rows)
