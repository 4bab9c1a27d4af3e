# =============================================================================
# core/services/resource_service.py - Resource Lookups
# =============================================================================
# Resources are seeded by migrations; the application only reads them.
# =============================================================================

from __future__ import annotations

from typing import Any

from lib.supabase_client import SupabaseClient
from core.models.common import ListQuery
from app.exceptions import RecordNotFoundError

TABLE = "resources"
SORTABLE_COLUMNS = {"id", "name", "description"}


class ResourceService:
    """Read-only access to protected resources."""

    @staticmethod
    def count(search: str | None = None) -> int:
        return SupabaseClient.count_rows(TABLE, search=search, search_column="name")

    @staticmethod
    def list(query: ListQuery | None = None) -> list[dict[str, Any]]:
        query = query or ListQuery()
        sort = query.sort if query.sort in SORTABLE_COLUMNS else "id"

        return SupabaseClient.fetch_page(
            TABLE,
            columns="id, name, description",
            limit=query.limit,
            page=query.page,
            sort=sort,
            descending=query.descending,
            search=query.search,
            search_column="name",
        )

    @staticmethod
    def get(resource_id: int) -> dict[str, Any]:
        """
        Get a resource by ID.

        Raises:
            RecordNotFoundError: If resource doesn't exist
        """
        row = SupabaseClient.fetch_by_id(TABLE, resource_id, columns="id, name, description")
        if not row:
            raise RecordNotFoundError("resource", resource_id)
        return row
