# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================
# Query building against a mocked supabase client.
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


@pytest.fixture
def client():
    """Mocked supabase Client; every builder method returns the same query."""
    mock = MagicMock()
    query = mock.table.return_value
    for method in ("select", "ilike", "order", "range", "eq", "in_", "single",
                   "insert", "update", "delete"):
        getattr(query, method).return_value = query

    with patch.object(SupabaseClient, "get_client", return_value=mock):
        yield mock


class TestCountRows:
    def test_exact_head_count(self, client):
        query = client.table.return_value
        query.execute.return_value = MagicMock(count=42)

        assert SupabaseClient.count_rows("users") == 42
        query.select.assert_called_once_with("id", count="exact", head=True)
        query.ilike.assert_not_called()

    def test_search(self, client):
        query = client.table.return_value
        query.execute.return_value = MagicMock(count=None)

        assert SupabaseClient.count_rows("users", search="jd", search_column="username") == 0
        query.ilike.assert_called_once_with("username", "%jd%")

    def test_failure_wrapped(self, client):
        client.table.return_value.execute.side_effect = RuntimeError("down")

        with pytest.raises(SupabaseClientError) as excinfo:
            SupabaseClient.count_rows("users")

        assert excinfo.value.code == "COUNT_FAILED"


class TestFetchPage:
    def test_range_and_order(self, client):
        query = client.table.return_value
        query.execute.return_value = MagicMock(data=[{"id": 11}])

        rows = SupabaseClient.fetch_page("roles", limit=10, page=2, sort="name", descending=True)

        assert rows == [{"id": 11}]
        query.order.assert_called_once_with("name", desc=True)
        query.range.assert_called_once_with(10, 19)

    def test_defaults_to_id_order(self, client):
        query = client.table.return_value
        query.execute.return_value = MagicMock(data=None)

        assert SupabaseClient.fetch_page("roles") == []
        query.order.assert_called_once_with("id", desc=False)
        query.range.assert_called_once_with(0, 9)


class TestFetchOne:
    def test_no_rows_is_none(self, client):
        client.table.return_value.execute.side_effect = Exception(
            "{'code': 'PGRST116', 'message': 'JSON object requested, multiple (or no) rows returned'}"
        )

        assert SupabaseClient.fetch_one("users", "username", "ghost") is None

    def test_other_errors_raise(self, client):
        client.table.return_value.execute.side_effect = Exception("permission denied")

        with pytest.raises(SupabaseClientError):
            SupabaseClient.fetch_by_id("users", 1)


class TestFetchAll:
    def test_equality_and_in_filters(self, client):
        query = client.table.return_value
        query.execute.return_value = MagicMock(data=[{"id": 1}, {"id": 2}])

        rows = SupabaseClient.fetch_all("users", columns="id", filters={"active": True},
                                        in_filter=("id", [1, 2, 3]))

        assert rows == [{"id": 1}, {"id": 2}]
        query.select.assert_called_once_with("id")
        query.eq.assert_called_once_with("active", True)
        query.in_.assert_called_once_with("id", [1, 2, 3])

    def test_no_in_filter(self, client):
        query = client.table.return_value
        query.execute.return_value = MagicMock(data=None)

        assert SupabaseClient.fetch_all("permissions") == []
        query.in_.assert_not_called()


class TestInsertRows:
    def test_returns_rows(self, client):
        client.table.return_value.execute.return_value = MagicMock(data=[{"id": 1}])

        assert SupabaseClient.insert_rows("roles", {"name": "editor"}) == [{"id": 1}]

    def test_no_data_raises(self, client):
        client.table.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(SupabaseClientError) as excinfo:
            SupabaseClient.insert_rows("roles", {"name": "editor"})

        assert excinfo.value.code == "INSERT_NO_DATA"
