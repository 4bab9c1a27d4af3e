# =============================================================================
# core/models/common.py - Shared Schemas
# =============================================================================
# Schemas shared by every list endpoint and admin list view:
# - ListQuery: paging, sorting and search parameters passed to services
# - MessageResponse: plain acknowledgement body
# =============================================================================

from pydantic import BaseModel, Field


class ListQuery(BaseModel):
    """
    Paging, sorting and search parameters for list operations.

    Built from the query string by the admin pages and list endpoints,
    then handed to `Service.list()`.

    Example:
        {"limit": 10, "page": 2, "sort": "username", "descending": true}
    """

    limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Rows per page"
    )

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-indexed)"
    )

    sort: str | None = Field(
        default=None,
        description="Column to sort by"
    )

    descending: bool = Field(
        default=False,
        description="Sort in descending order"
    )

    search: str | None = Field(
        default=None,
        description="Case-insensitive substring filter"
    )


class MessageResponse(BaseModel):
    """Acknowledgement returned by endpoints without a record to show."""
    message: str
