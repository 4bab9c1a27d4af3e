# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides table-generic helpers used by the service layer:
# - Counting and paging rows (admin list views, list endpoints)
# - Fetching a single row by id or by a unique column
# - Inserting, updating and deleting rows
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   users = SupabaseClient.fetch_page("users", limit=10, page=2, sort="username")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST error raised by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        total = SupabaseClient.count_rows("roles")
        roles = SupabaseClient.fetch_page("roles", limit=5, page=1, sort="name")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @classmethod
    def count_rows(
        cls,
        table: str,
        search: str | None = None,
        search_column: str | None = None,
    ) -> int:
        """
        Count rows in a table, optionally matching a case-insensitive search.

        Args:
            table: Table name
            search: Substring to look for
            search_column: Column the search applies to

        Returns:
            Number of matching rows

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select("id", count="exact", head=True)
            if search and search_column:
                query = query.ilike(search_column, f"%{search}%")

            response = query.execute()
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table, "search": search}
            )

    @classmethod
    def fetch_page(
        cls,
        table: str,
        columns: str = "*",
        limit: int = 10,
        page: int = 1,
        sort: str | None = None,
        descending: bool = False,
        search: str | None = None,
        search_column: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch one page of rows.

        Args:
            table: Table name
            columns: PostgREST select expression (may embed related tables)
            limit: Rows per page
            page: Page number (1-indexed)
            sort: Column to order by (defaults to id)
            descending: Reverse the ordering
            search: Substring to look for
            search_column: Column the search applies to

        Returns:
            List of row dicts

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        offset = (page - 1) * limit

        try:
            query = client.table(table).select(columns)
            if search and search_column:
                query = query.ilike(search_column, f"%{search}%")

            query = (
                query.order(sort or "id", desc=descending)
                .range(offset, offset + limit - 1)
            )

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table} (page {page}, limit {limit})")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list {table}: {e}",
                code="LIST_FAILED",
                suggestion=f"Check that '{sort}' is a valid column of {table}",
                details={"table": table, "page": page, "limit": limit}
            )

    @classmethod
    def fetch_all(
        cls,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        in_filter: tuple[str, list[Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch every row matching equality filters and an optional IN filter.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if in_filter:
                query = query.in_(*in_filter)

            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": filters or {}}
            )

    @classmethod
    def fetch_one(
        cls,
        table: str,
        column: str,
        value: Any,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch the row whose `column` equals `value`.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq(column, value)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                suggestion=f"Check that the {column} exists",
                details={"table": table, column: value}
            )

    @classmethod
    def fetch_by_id(
        cls,
        table: str,
        record_id: int,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """Fetch a row by primary key, or None if not found."""
        return cls.fetch_one(table, "id", record_id, columns=columns)

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @classmethod
    def insert_rows(
        cls,
        table: str,
        rows: dict[str, Any] | list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """
        Insert one or more rows.

        Returns:
            Inserted rows with generated id and timestamps

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(rows).execute()

            if response.data:
                logger.info(f"Inserted {len(response.data)} row(s) into {table}")
                return response.data
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def update_row(
        cls,
        table: str,
        record_id: int,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a row by primary key.

        Returns:
            Updated row, or None if no row has that id

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .update(data)
                .eq("id", record_id)
                .execute()
            )

            if response.data:
                logger.info(f"Updated {table} row {record_id}")
                return response.data[0]
            return None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": record_id}
            )

    @classmethod
    def delete_rows(
        cls,
        table: str,
        filters: dict[str, Any],
        in_filter: tuple[str, list[Any]] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Delete rows matching equality filters and an optional IN filter.

        Returns:
            The deleted rows

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).delete()
            for column, value in filters.items():
                query = query.eq(column, value)
            if in_filter:
                query = query.in_(*in_filter)

            response = query.execute()
            deleted = response.data or []

            logger.info(f"Deleted {len(deleted)} row(s) from {table}")
            return deleted

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": filters}
            )
