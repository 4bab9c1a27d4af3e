# =============================================================================
# app/routers/api/endpoint.py - Declarative Endpoint Types
# =============================================================================
# Each API module describes its endpoints as EndpointConfig objects. The
# route table in app/routers/api/__init__.py pairs them with a method and a
# path; register_endpoints() turns the pairs into FastAPI routes.
#
# Usage:
#   async def get_version():
#       return {"version": __version__}
#
#   GET = EndpointConfig(handler=get_version, summary="API version", tags=["Meta"])
# =============================================================================

from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Literal

from fastapi import Depends, Query

from app.auth import get_current_user, require_scope
from core.models.common import ListQuery

AuthRequirement = Literal["user", "admin"] | None


@dataclass(frozen=True)
class EndpointConfig:
    """How a handler is exposed: docs metadata, status code and auth."""
    handler: Callable[..., Any]
    summary: str
    tags: list[str] = field(default_factory=list)
    status_code: int = 200
    response_model: Any = None
    auth: AuthRequirement = None

    def dependencies(self) -> list[Any]:
        """Route-level dependencies enforcing the auth requirement."""
        if self.auth == "admin":
            return [Depends(require_scope("admin"))]
        if self.auth == "user":
            return [Depends(get_current_user)]
        return []


@dataclass(frozen=True)
class Endpoint:
    """One row of the route table."""
    method: str
    path: str
    config: EndpointConfig


async def list_query(
    limit: Annotated[int, Query(ge=1, le=100, description="Rows per page")] = 10,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    sort: Annotated[str | None, Query(description="Column to sort by")] = None,
    descending: Annotated[bool, Query(description="Sort in descending order")] = False,
    search: Annotated[str | None, Query(description="Substring filter")] = None,
) -> ListQuery:
    """Query-string parameters shared by every list endpoint."""
    return ListQuery(limit=limit, page=page, sort=sort, descending=descending, search=search)


def page_of(records: list[dict[str, Any]], count: int, query: ListQuery) -> dict[str, Any]:
    """Body returned by list endpoints."""
    return {
        "count": count,
        "page": query.page,
        "limit": query.limit,
        "results": records,
    }
