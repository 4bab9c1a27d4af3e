# =============================================================================
# app/admin/routes.py - Admin Pages
# =============================================================================
# Server-rendered admin dashboard and list pages.
#
#   GET /admin             dashboard with user, role and resource counts
#   GET /admin/{partial}   users | roles | resources list page
#
# Every page renders pages/admin.html with the partial chosen by
# app.admin.partial. All pages require the admin scope.
# =============================================================================

import logging
from typing import Any, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from app.admin import model_list
from app.admin.partial import MAIN_PARTIAL, get_partial
from app.auth import AuthUser, require_scope
from app.exceptions import InternalServerError
from app.server import request_log
from app.templating import templates
from core.services import ResourceService, RoleService, UserService

logger = logging.getLogger(__name__)

router = APIRouter()

PAGE_TEMPLATE = "pages/admin.html"

# partial -> (service name, context key, sort options); the service is
# resolved from module globals on each request
LISTS: dict[str, tuple[str, str, list[dict[str, str]]]] = {
    "admin/user-list": ("UserService", "users", [{"name": "Username"}, {"name": "Email"}]),
    "admin/role-list": ("RoleService", "roles", [{"name": "Name"}, {"name": "Description"}]),
    "admin/resource-list": ("ResourceService", "resources", [{"name": "Name"}, {"name": "Description"}]),
}


def _dashboard_context() -> dict[str, Any]:
    return {
        "count": {
            "users": UserService.count(),
            "roles": RoleService.count(),
            "resources": ResourceService.count(),
        }
    }


def _list_context(partial: str, query: dict[str, Any]) -> dict[str, Any]:
    service_name, key, sort_options = LISTS[partial]
    service = globals()[service_name]
    list_query = model_list.parse_list_query(query)

    count = service.count(search=list_query.search)
    records = service.list(list_query)

    # links and controls follow the limit actually applied
    if "limit" in query:
        query = {**query, "limit": list_query.limit}

    return {
        key: records,
        "count": count,
        "pagination": model_list.get_pagination(query, count),
        "sort_options": model_list.get_sort_attributes(sort_options, query),
        "limit_options": model_list.get_limit_attributes(query),
    }


def _render(request: Request, partial: str, user: AuthUser) -> HTMLResponse:
    query = dict(request.query_params)
    build: Callable[[], dict[str, Any]] = (
        _dashboard_context if partial == MAIN_PARTIAL
        else lambda: _list_context(partial, query)
    )

    try:
        context = build()
    except Exception as e:
        logger.exception(f"Failed to build admin page {partial}: {e}")
        request_log(request, ["admin", "error"], {"partial": partial, "error": str(e)})
        raise InternalServerError() from e

    request_log(request, ["admin", "debug"], {"partial": partial})

    context.update({
        "admin_partial": partial,
        "current_user": user,
        "query": query,
    })
    return templates.TemplateResponse(request, PAGE_TEMPLATE, context)


@router.get("", response_class=HTMLResponse, include_in_schema=False)
async def get_admin(
    request: Request,
    user: AuthUser = Depends(require_scope("admin")),
):
    """Admin dashboard."""
    return _render(request, MAIN_PARTIAL, user)


@router.get("/{partial}", response_class=HTMLResponse, include_in_schema=False)
async def get_admin_partial(
    request: Request,
    partial: str,
    user: AuthUser = Depends(require_scope("admin")),
):
    """Admin list page; unknown partials fall back to the dashboard."""
    return _render(request, get_partial(partial), user)
