# =============================================================================
# app/admin/model_list.py - Admin List View Helpers
# =============================================================================
# Pure functions that build the query strings used by the pagination,
# sort and limit controls of the admin list pages.
#
# A query is the mapping of the current query-string parameters
# (limit, page, sort, descending, search). Helpers never modify it; they
# return "?key=value&..." strings keeping the parameter order of the input,
# with `page` replaced in place or appended at the end.
#
# Usage:
#   get_next_page({"limit": 1, "page": 3}, count=5)   # "?limit=1&page=4"
#   get_last_page({"limit": 5}, count=201)            # "?limit=5&page=41"
# =============================================================================

import math
from typing import Any, Mapping
from urllib.parse import urlencode

from core.models.common import ListQuery
from lib.utils import parse_bool, parse_positive_int

DEFAULT_LIMIT = 10
LIMIT_OPTIONS = (5, 10, 25, 50, 100)


def _query_string(query: Mapping[str, Any], **overrides: Any) -> str:
    params = {**query, **overrides}
    return "?" + urlencode(params)


def _keep(query: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    return {key: query[key] for key in keys if query.get(key) not in (None, "")}


def _page(query: Mapping[str, Any]) -> int:
    return parse_positive_int(query.get("page"), 1)


def _limit(query: Mapping[str, Any]) -> int:
    return parse_positive_int(query.get("limit"), DEFAULT_LIMIT)


def get_page_count(query: Mapping[str, Any], count: int) -> int:
    """Number of pages needed for `count` records, at least 1."""
    return max(1, math.ceil(count / _limit(query)))


# =============================================================================
# Pagination
# =============================================================================

def get_next_page(query: Mapping[str, Any], count: int) -> str:
    """Query string of the next page, or of the current page if it is the last."""
    page = _page(query)
    if page * _limit(query) < count:
        page += 1
    return _query_string(query, page=page)


def get_previous_page(query: Mapping[str, Any]) -> str:
    """Query string of the previous page, never below page 1."""
    return _query_string(query, page=max(1, _page(query) - 1))


def get_first_page(query: Mapping[str, Any]) -> str:
    """Query string of the first page."""
    return _query_string(query, page=1)


def get_last_page(query: Mapping[str, Any], count: int) -> str:
    """Query string of the last page for `count` records."""
    return _query_string(query, page=get_page_count(query, count))


def get_pagination(query: Mapping[str, Any], count: int) -> dict[str, Any]:
    """Everything the pagination control of a list page needs."""
    return {
        "page": _page(query),
        "pages": get_page_count(query, count),
        "count": count,
        "first": get_first_page(query),
        "previous": get_previous_page(query),
        "next": get_next_page(query, count),
        "last": get_last_page(query, count),
    }


# =============================================================================
# Sort and Limit Controls
# =============================================================================

def get_sort_attributes(
    sort_options: list[Mapping[str, Any]],
    query: Mapping[str, Any],
) -> list[dict[str, Any]]:
    """
    One entry per sort option with the query string selecting it.

    Only `limit` survives from the current query: changing the sort goes
    back to the first page and drops the sort direction.

    Example:
        get_sort_attributes([{"name": "Name"}], {"limit": 10, "page": 5})
        # [{"name": "Name", "value": "?limit=10&sort=name", "selected": False}]
    """
    kept = _keep(query, "limit")
    current = query.get("sort")

    attributes = []
    for option in sort_options:
        sort = option["name"].lower()
        attributes.append({
            **option,
            "value": _query_string(kept, sort=sort),
            "selected": current == sort,
        })
    return attributes


def get_limit_attributes(query: Mapping[str, Any]) -> list[dict[str, Any]]:
    """
    A "Limit" placeholder followed by one entry per page size.

    Only `sort` survives from the current query.

    Example:
        get_limit_attributes({"sort": "email", "page": 2})[1]
        # {"name": "5", "value": "?sort=email&limit=5", "selected": False}
    """
    kept = _keep(query, "sort")
    current = str(query.get("limit", ""))

    attributes: list[dict[str, Any]] = [{"name": "Limit", "value": ""}]
    for limit in LIMIT_OPTIONS:
        attributes.append({
            "name": str(limit),
            "value": _query_string(kept, limit=limit),
            "selected": current == str(limit),
        })
    return attributes


# =============================================================================
# Service Query
# =============================================================================

def parse_list_query(query: Mapping[str, Any]) -> ListQuery:
    """Typed paging/sorting/search parameters for Service.list()."""
    limit = min(_limit(query), max(LIMIT_OPTIONS))

    return ListQuery(
        limit=limit,
        page=_page(query),
        sort=query.get("sort") or None,
        descending=parse_bool(query.get("descending")),
        search=query.get("search") or None,
    )
