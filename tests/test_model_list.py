# =============================================================================
# tests/test_model_list.py - Admin List Helper Tests
# =============================================================================
# Query-string building for the pagination, sort and limit controls.
# =============================================================================

from app.admin import model_list
from app.admin.model_list import (
    get_first_page,
    get_last_page,
    get_limit_attributes,
    get_next_page,
    get_page_count,
    get_pagination,
    get_previous_page,
    get_sort_attributes,
    parse_list_query,
)


# =============================================================================
# Pagination
# =============================================================================

class TestNextPage:
    """Tests for get_next_page."""

    def test_moves_forward_when_more_records(self):
        assert get_next_page({"limit": 1, "page": 3}, 5) == "?limit=1&page=4"

    def test_stays_on_last_page(self):
        assert get_next_page({"limit": 5, "page": 1}, 5) == "?limit=5&page=1"

    def test_appends_page_when_missing(self):
        """Without a page the first page is assumed."""
        assert get_next_page({"limit": 10}, 25) == "?limit=10&page=2"

    def test_uses_default_limit(self):
        assert get_next_page({"page": 1}, 11) == "?page=2"
        assert get_next_page({"page": 1}, 10) == "?page=1"

    def test_keeps_other_parameters_in_order(self):
        query = {"sort": "name", "page": 2, "limit": 5, "search": "ad"}
        assert get_next_page(query, 50) == "?sort=name&page=3&limit=5&search=ad"

    def test_does_not_modify_query(self):
        query = {"limit": 1, "page": 1}
        get_next_page(query, 5)
        assert query == {"limit": 1, "page": 1}


class TestPreviousPage:
    """Tests for get_previous_page."""

    def test_moves_back(self):
        assert get_previous_page({"limit": 1, "page": 3}) == "?limit=1&page=2"

    def test_never_below_first_page(self):
        assert get_previous_page({"limit": 1, "page": 1}) == "?limit=1&page=1"
        assert get_previous_page({"limit": 1}) == "?limit=1&page=1"


class TestFirstAndLastPage:
    """Tests for get_first_page, get_last_page and get_page_count."""

    def test_first_page(self):
        assert get_first_page({"limit": 5, "page": 7}) == "?limit=5&page=1"

    def test_last_page(self):
        assert get_last_page({"limit": 5}, 201) == "?limit=5&page=41"
        assert get_last_page({"limit": 5, "page": 2}, 200) == "?limit=5&page=40"

    def test_last_page_without_records(self):
        assert get_last_page({"limit": 5}, 0) == "?limit=5&page=1"

    def test_page_count(self):
        assert get_page_count({"limit": 10}, 0) == 1
        assert get_page_count({"limit": 10}, 10) == 1
        assert get_page_count({"limit": 10}, 11) == 2
        assert get_page_count({}, 95) == 10

    def test_string_values_from_query_string(self):
        """Query-string values arrive as strings."""
        assert get_next_page({"limit": "2", "page": "1"}, 5) == "?limit=2&page=2"

    def test_invalid_values_fall_back_to_defaults(self):
        assert get_previous_page({"page": "abc"}) == "?page=1"
        assert get_page_count({"limit": "0"}, 20) == 2


class TestGetPagination:
    """Tests for get_pagination."""

    def test_contains_all_links(self):
        pagination = get_pagination({"limit": 10, "page": 2}, 35)

        assert pagination == {
            "page": 2,
            "pages": 4,
            "count": 35,
            "first": "?limit=10&page=1",
            "previous": "?limit=10&page=1",
            "next": "?limit=10&page=3",
            "last": "?limit=10&page=4",
        }


# =============================================================================
# Sort and Limit Controls
# =============================================================================

class TestSortAttributes:
    """Tests for get_sort_attributes."""

    def test_keeps_only_limit(self):
        query = {"limit": 10, "page": 5, "search": "x", "descending": "true"}
        attributes = get_sort_attributes([{"name": "Name"}, {"name": "Email"}], query)

        assert attributes == [
            {"name": "Name", "value": "?limit=10&sort=name", "selected": False},
            {"name": "Email", "value": "?limit=10&sort=email", "selected": False},
        ]

    def test_marks_current_sort(self):
        attributes = get_sort_attributes([{"name": "Name"}, {"name": "Email"}], {"sort": "email"})

        assert [a["selected"] for a in attributes] == [False, True]
        assert attributes[1]["value"] == "?sort=email"

    def test_keeps_extra_option_keys(self):
        attributes = get_sort_attributes([{"name": "Name", "icon": "a-z"}], {})
        assert attributes[0]["icon"] == "a-z"


class TestLimitAttributes:
    """Tests for get_limit_attributes."""

    def test_placeholder_first(self):
        assert get_limit_attributes({})[0] == {"name": "Limit", "value": ""}

    def test_one_entry_per_page_size(self):
        attributes = get_limit_attributes({"sort": "email", "page": 2})

        assert [a["name"] for a in attributes[1:]] == [str(n) for n in model_list.LIMIT_OPTIONS]
        assert attributes[1] == {"name": "5", "value": "?sort=email&limit=5", "selected": False}

    def test_marks_current_limit(self):
        attributes = get_limit_attributes({"limit": "25"})
        selected = [a["name"] for a in attributes[1:] if a["selected"]]
        assert selected == ["25"]


# =============================================================================
# Service Query
# =============================================================================

class TestParseListQuery:
    """Tests for parse_list_query."""

    def test_defaults(self):
        query = parse_list_query({})

        assert query.limit == model_list.DEFAULT_LIMIT
        assert query.page == 1
        assert query.sort is None
        assert query.descending is False
        assert query.search is None

    def test_parses_strings(self):
        query = parse_list_query({
            "limit": "25", "page": "3", "sort": "email", "descending": "true", "search": "jo",
        })

        assert (query.limit, query.page, query.sort, query.descending, query.search) == (
            25, 3, "email", True, "jo",
        )

    def test_caps_limit(self):
        assert parse_list_query({"limit": "5000"}).limit == 100
