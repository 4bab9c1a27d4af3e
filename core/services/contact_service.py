# =============================================================================
# core/services/contact_service.py - Contact Business Logic
# =============================================================================
# Contacts are people who signed up through the public form and are waiting
# for an invitation. Admins list and delete them.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from core.models.common import ListQuery
from core.models.contact import ContactCreate
from app.exceptions import RecordConflictError, RecordNotFoundError

logger = logging.getLogger(__name__)

TABLE = "contacts"
SORTABLE_COLUMNS = {"id", "name", "email", "company", "created_at"}


class ContactService:
    """
    Service for contact signups.
    """

    @staticmethod
    def count(search: str | None = None) -> int:
        return SupabaseClient.count_rows(TABLE, search=search, search_column="email")

    @staticmethod
    def list(query: ListQuery | None = None) -> list[dict[str, Any]]:
        query = query or ListQuery()
        sort = query.sort if query.sort in SORTABLE_COLUMNS else "id"

        return SupabaseClient.fetch_page(
            TABLE,
            limit=query.limit,
            page=query.page,
            sort=sort,
            descending=query.descending,
            search=query.search,
            search_column="email",
        )

    @staticmethod
    def get(contact_id: int) -> dict[str, Any]:
        """
        Get a contact by ID.

        Raises:
            RecordNotFoundError: If contact doesn't exist
        """
        row = SupabaseClient.fetch_by_id(TABLE, contact_id)
        if not row:
            raise RecordNotFoundError("contact", contact_id)
        return row

    @staticmethod
    def signup(data: ContactCreate) -> dict[str, Any]:
        """
        Record a public signup.

        Raises:
            RecordConflictError: If the email already signed up
        """
        email = data.email.lower()
        if SupabaseClient.fetch_one(TABLE, "email", email, columns="id"):
            raise RecordConflictError("contact", "email", email)

        row = SupabaseClient.insert_rows(TABLE, {**data.model_dump(), "email": email})[0]
        logger.info(f"New contact signup: {row['id']}")
        return row

    @staticmethod
    def delete(contact_id: int) -> None:
        """
        Delete a contact.

        Raises:
            RecordNotFoundError: If contact doesn't exist
        """
        if not SupabaseClient.delete_rows(TABLE, {"id": contact_id}):
            raise RecordNotFoundError("contact", contact_id)
