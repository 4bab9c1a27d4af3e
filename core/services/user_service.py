# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user CRUD operations, password storage and role lookups.
# Separates HTTP concerns from database/business logic.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from lib.passwords import hash_password
from lib.supabase_client import SupabaseClient
from core.models.common import ListQuery
from core.models.user import UserCreate, UserUpdate
from app.exceptions import RecordConflictError, RecordNotFoundError

logger = logging.getLogger(__name__)

TABLE = "users"
MEMBERSHIP_TABLE = "user_roles"

# Public columns plus role names through the user_roles join table
PUBLIC_COLUMNS = "id, username, email, created_at, roles(name)"
SORTABLE_COLUMNS = {"id", "username", "email", "created_at"}


def to_public(row: dict[str, Any]) -> dict[str, Any]:
    """Strip private columns and flatten embedded roles into a list of names."""
    return {
        "id": row["id"],
        "username": row["username"],
        "email": row["email"],
        "created_at": row.get("created_at"),
        "roles": [role["name"] for role in row.get("roles") or []],
    }


class UserService:
    """
    Service for user management operations.

    Provides a clean interface between API routes, admin pages and database.
    """

    @staticmethod
    def count(search: str | None = None) -> int:
        """Number of users, optionally matching a username search."""
        return SupabaseClient.count_rows(TABLE, search=search, search_column="username")

    @staticmethod
    def list(query: ListQuery | None = None) -> list[dict[str, Any]]:
        """
        List one page of users.

        Args:
            query: Paging, sorting and search parameters

        Returns:
            List of public user dicts
        """
        query = query or ListQuery()
        sort = query.sort if query.sort in SORTABLE_COLUMNS else "id"

        rows = SupabaseClient.fetch_page(
            TABLE,
            columns=PUBLIC_COLUMNS,
            limit=query.limit,
            page=query.page,
            sort=sort,
            descending=query.descending,
            search=query.search,
            search_column="username",
        )
        return [to_public(row) for row in rows]

    @staticmethod
    def get(user_id: int) -> dict[str, Any]:
        """
        Get a user by ID.

        Raises:
            RecordNotFoundError: If user doesn't exist
        """
        row = SupabaseClient.fetch_by_id(TABLE, user_id, columns=PUBLIC_COLUMNS)
        if not row:
            raise RecordNotFoundError("user", user_id)
        return to_public(row)

    @staticmethod
    def find_by_username(username: str) -> dict[str, Any] | None:
        """Fetch the full user row, password hash included, for authentication."""
        return SupabaseClient.fetch_one(
            TABLE, "username", username, columns=f"{PUBLIC_COLUMNS}, password_hash"
        )

    @staticmethod
    def find_by_email(email: str) -> dict[str, Any] | None:
        """Fetch the full user row matching an email address."""
        return SupabaseClient.fetch_one(TABLE, "email", email.lower())

    @staticmethod
    def _ensure_unique(
        username: str | None,
        email: str | None,
        user_id: int | None = None,
    ) -> None:
        if username:
            existing = SupabaseClient.fetch_one(TABLE, "username", username, columns="id")
            if existing and existing["id"] != user_id:
                raise RecordConflictError("user", "username", username)
        if email:
            existing = SupabaseClient.fetch_one(TABLE, "email", email.lower(), columns="id")
            if existing and existing["id"] != user_id:
                raise RecordConflictError("user", "email", email)

    @staticmethod
    def create(data: UserCreate, roles: list[str] | None = None) -> dict[str, Any]:
        """
        Create a new user.

        Args:
            data: Username, email and plain-text password
            roles: Names of roles to grant immediately

        Returns:
            Created public user dict

        Raises:
            RecordConflictError: If username or email is taken
        """
        UserService._ensure_unique(data.username, data.email)

        row = SupabaseClient.insert_rows(TABLE, {
            "username": data.username,
            "email": data.email.lower(),
            "password_hash": hash_password(data.password),
        })[0]
        logger.info(f"Created user: {row['id']} ({data.username})")

        granted = []
        for name in roles or []:
            role = SupabaseClient.fetch_one("roles", "name", name, columns="id, name")
            if not role:
                logger.warning(f"Role '{name}' does not exist, not granted to user {row['id']}")
                continue
            SupabaseClient.insert_rows(MEMBERSHIP_TABLE, {"user_id": row["id"], "role_id": role["id"]})
            granted.append({"name": role["name"]})

        row["roles"] = granted
        return to_public(row)

    @staticmethod
    def update(user_id: int, data: UserUpdate) -> dict[str, Any]:
        """
        Update a user.

        Returns:
            Updated public user dict

        Raises:
            RecordNotFoundError: If user doesn't exist
            RecordConflictError: If the new username or email is taken
        """
        UserService._ensure_unique(data.username, data.email, user_id=user_id)

        update_data: dict[str, Any] = {}
        if data.username:
            update_data["username"] = data.username
        if data.email:
            update_data["email"] = data.email.lower()
        if data.password:
            update_data["password_hash"] = hash_password(data.password)

        if not update_data:
            return UserService.get(user_id)  # Nothing to update

        if SupabaseClient.update_row(TABLE, user_id, update_data) is None:
            raise RecordNotFoundError("user", user_id)

        return UserService.get(user_id)

    @staticmethod
    def set_password(user_id: int, password: str) -> None:
        """Replace the stored password hash."""
        if SupabaseClient.update_row(TABLE, user_id, {"password_hash": hash_password(password)}) is None:
            raise RecordNotFoundError("user", user_id)
        logger.info(f"Password updated for user: {user_id}")

    @staticmethod
    def delete(user_id: int) -> None:
        """
        Delete a user and its role memberships.

        Raises:
            RecordNotFoundError: If user doesn't exist
        """
        SupabaseClient.delete_rows(MEMBERSHIP_TABLE, {"user_id": user_id})
        if not SupabaseClient.delete_rows(TABLE, {"id": user_id}):
            raise RecordNotFoundError("user", user_id)
