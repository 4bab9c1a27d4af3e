# =============================================================================
# tests/test_services.py - Service Layer Tests
# =============================================================================
# Business logic with SupabaseClient patched in each service module.
# =============================================================================

from unittest.mock import MagicMock, call, patch

import pytest

from app.auth import RESET_PURPOSE, decode_token
from app.exceptions import (
    InvalidCredentialsError,
    InvalidTokenError,
    RecordConflictError,
    RecordNotFoundError,
)
from core.models.auth import RegisterRequest
from core.models.common import ListQuery
from core.models.contact import ContactCreate
from core.models.role import PermissionRequest, PermissionsUpdate, RoleCreate
from core.models.user import UserCreate, UserUpdate
from core.services import AuthService, ContactService, ResourceService, RoleService, UserService
from core.services.user_service import to_public
from lib.passwords import hash_password


USER_ROW = {
    "id": 2,
    "username": "jdoe",
    "email": "jdoe@example.com",
    "created_at": "2024-01-15T10:30:00+00:00",
    "roles": [{"name": "user"}, {"name": "editor"}],
}


@pytest.fixture
def db():
    """SupabaseClient as seen by every service module."""
    mock = MagicMock()
    with patch("core.services.user_service.SupabaseClient", mock), \
            patch("core.services.role_service.SupabaseClient", mock), \
            patch("core.services.resource_service.SupabaseClient", mock), \
            patch("core.services.contact_service.SupabaseClient", mock), \
            patch("core.services.auth_service.SupabaseClient", mock):
        yield mock


# =============================================================================
# Users
# =============================================================================

class TestUserService:
    """Tests for UserService."""

    def test_to_public_flattens_roles(self):
        public = to_public({**USER_ROW, "password_hash": "secret"})

        assert public["roles"] == ["user", "editor"]
        assert "password_hash" not in public

    def test_count(self, db):
        db.count_rows.return_value = 4

        assert UserService.count("jd") == 4
        db.count_rows.assert_called_once_with("users", search="jd", search_column="username")

    def test_list_passes_paging(self, db):
        db.fetch_page.return_value = [USER_ROW]

        users = UserService.list(ListQuery(limit=5, page=3, sort="email", descending=True))

        assert users[0]["roles"] == ["user", "editor"]
        kwargs = db.fetch_page.call_args.kwargs
        assert (kwargs["limit"], kwargs["page"], kwargs["sort"], kwargs["descending"]) == (5, 3, "email", True)

    def test_list_ignores_unknown_sort(self, db):
        db.fetch_page.return_value = []

        UserService.list(ListQuery(sort="password_hash"))

        assert db.fetch_page.call_args.kwargs["sort"] == "id"

    def test_get_missing(self, db):
        db.fetch_by_id.return_value = None

        with pytest.raises(RecordNotFoundError):
            UserService.get(99)

    def test_create_hashes_password_and_grants_roles(self, db):
        db.fetch_one.side_effect = [None, None, {"id": 1, "name": "user"}]
        db.insert_rows.side_effect = [
            [{"id": 2, "username": "jdoe", "email": "jdoe@example.com"}],
            [{"user_id": 2, "role_id": 1}],
        ]

        user = UserService.create(
            UserCreate(username="jdoe", email="JDoe@Example.com", password="secret"),
            roles=["user"],
        )

        assert user["roles"] == ["user"]
        inserted = db.insert_rows.call_args_list[0].args[1]
        assert inserted["email"] == "jdoe@example.com"
        assert inserted["password_hash"] != "secret"
        assert db.insert_rows.call_args_list[1] == call("user_roles", {"user_id": 2, "role_id": 1})

    def test_create_duplicate_username(self, db):
        db.fetch_one.return_value = {"id": 7}

        with pytest.raises(RecordConflictError):
            UserService.create(UserCreate(username="jdoe", email="j@example.com", password="secret"))

        db.insert_rows.assert_not_called()

    def test_update_same_user_keeps_email(self, db):
        db.fetch_one.return_value = {"id": 2}
        db.update_row.return_value = {"id": 2}
        db.fetch_by_id.return_value = USER_ROW

        UserService.update(2, UserUpdate(email="jdoe@example.com"))

        db.update_row.assert_called_once_with("users", 2, {"email": "jdoe@example.com"})

    def test_delete_missing(self, db):
        db.delete_rows.side_effect = [[], []]

        with pytest.raises(RecordNotFoundError):
            UserService.delete(99)


# =============================================================================
# Roles
# =============================================================================

class TestRoleService:
    """Tests for RoleService."""

    def test_get_lists_member_ids(self, db):
        db.fetch_by_id.return_value = {
            "id": 3, "name": "editor", "description": None,
            "user_roles": [{"user_id": 1}, {"user_id": 2}],
        }

        assert RoleService.get(3)["users"] == [1, 2]

    def test_create_duplicate(self, db):
        db.fetch_one.return_value = {"id": 3}

        with pytest.raises(RecordConflictError):
            RoleService.create(RoleCreate(name="editor"))

    def test_add_users_skips_members(self, db):
        db.fetch_by_id.return_value = {"id": 3, "name": "editor", "user_roles": [{"user_id": 1}]}
        db.fetch_all.return_value = [{"id": 2}]

        RoleService.add_users(3, [1, 2, 2])

        db.fetch_all.assert_called_once_with("users", columns="id", in_filter=("id", [2]))
        db.insert_rows.assert_called_once_with("user_roles", [{"role_id": 3, "user_id": 2}])

    def test_add_users_unknown_user(self, db):
        db.fetch_by_id.return_value = {"id": 3, "name": "editor", "user_roles": []}
        db.fetch_all.return_value = [{"id": 1}]

        with pytest.raises(RecordNotFoundError) as exc_info:
            RoleService.add_users(3, [1, 999])

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "USER_NOT_FOUND"
        db.insert_rows.assert_not_called()

    def test_remove_users(self, db):
        db.fetch_by_id.return_value = {"id": 3, "name": "editor", "user_roles": []}

        RoleService.remove_users(3, [1, 2])

        db.delete_rows.assert_called_once_with("user_roles", {"role_id": 3}, in_filter=("user_id", [1, 2]))

    def test_add_permission_duplicate(self, db):
        db.fetch_by_id.side_effect = [
            {"id": 3, "name": "editor"},
            {"id": 2, "name": "posts"},
        ]
        db.fetch_all.return_value = [{"id": 1}]

        with pytest.raises(RecordConflictError):
            RoleService.add_permission(3, PermissionRequest(resource_id=2, action="read"))

    def test_add_permission_unknown_resource(self, db):
        db.fetch_by_id.side_effect = [{"id": 3, "name": "editor"}, None]

        with pytest.raises(RecordNotFoundError):
            RoleService.add_permission(3, PermissionRequest(resource_id=9, action="read"))

    def test_update_permissions_replaces_and_dedupes(self, db):
        db.fetch_by_id.return_value = {"id": 3, "name": "x"}
        db.insert_rows.side_effect = lambda table, rows: rows

        permissions = RoleService.update_permissions(3, PermissionsUpdate(permissions=[
            PermissionRequest(resource_id=2, action="read"),
            PermissionRequest(resource_id=2, action="read"),
            PermissionRequest(resource_id=2, action="update"),
        ]))

        db.delete_rows.assert_called_once_with("permissions", {"role_id": 3})
        assert [p["action"] for p in permissions] == ["read", "update"]


# =============================================================================
# Resources and Contacts
# =============================================================================

class TestResourceService:
    def test_get_missing(self, db):
        db.fetch_by_id.return_value = None

        with pytest.raises(RecordNotFoundError):
            ResourceService.get(1)


class TestContactService:
    def test_signup_lowercases_email(self, db):
        db.fetch_one.return_value = None
        db.insert_rows.return_value = [{"id": 4}]

        ContactService.signup(ContactCreate(name="Jane", email="Jane@Example.com"))

        assert db.insert_rows.call_args.args[1]["email"] == "jane@example.com"

    def test_signup_twice(self, db):
        db.fetch_one.return_value = {"id": 4}

        with pytest.raises(RecordConflictError):
            ContactService.signup(ContactCreate(name="Jane", email="jane@example.com"))


# =============================================================================
# Authentication
# =============================================================================

class TestAuthService:
    """Tests for AuthService."""

    def test_authenticate(self, db):
        db.fetch_one.return_value = {**USER_ROW, "password_hash": hash_password("secret")}

        user = AuthService.authenticate("jdoe", "secret")

        assert user["id"] == 2
        assert "password_hash" not in user

    @pytest.mark.parametrize("row", [None, {**USER_ROW, "password_hash": None}])
    def test_authenticate_failures(self, db, row):
        db.fetch_one.return_value = row

        with pytest.raises(InvalidCredentialsError):
            AuthService.authenticate("jdoe", "secret")

    def test_wrong_password(self, db):
        db.fetch_one.return_value = {**USER_ROW, "password_hash": hash_password("secret")}

        with pytest.raises(InvalidCredentialsError):
            AuthService.authenticate("jdoe", "wrong")

    def test_issue_token_scope_is_roles(self):
        token, _ = AuthService.issue_token({"id": 2, "username": "jdoe", "roles": ["user", "admin"]})

        assert decode_token(token).scope == ["user", "admin"]

    def test_register_grants_default_role(self):
        with patch("core.services.auth_service.UserService") as users:
            AuthService.register(RegisterRequest(username="jdoe", email="j@example.com", password="secret"))

        assert users.create.call_args.kwargs["roles"] == ["user"]

    def test_password_reset_unknown_email(self, db):
        db.fetch_one.return_value = None

        assert AuthService.request_password_reset("nobody@example.com") is None

    def test_password_reset_flow(self, db):
        stored = hash_password("old")
        db.fetch_one.return_value = {**USER_ROW, "password_hash": stored}
        db.fetch_by_id.return_value = {"id": 2, "password_hash": stored}
        db.update_row.return_value = {"id": 2}

        token = AuthService.request_password_reset("jdoe@example.com")
        assert decode_token(token, purpose=RESET_PURPOSE).sub == "2"

        AuthService.reset_password(token, "new-password")

        assert db.update_row.call_args.args[:2] == ("users", 2)

    def test_reset_token_single_use(self, db):
        db.fetch_one.return_value = {**USER_ROW, "password_hash": hash_password("old")}
        token = AuthService.request_password_reset("jdoe@example.com")

        # Password already changed since the token was issued
        db.fetch_by_id.return_value = {"id": 2, "password_hash": hash_password("changed")}

        with pytest.raises(InvalidTokenError):
            AuthService.reset_password(token, "new-password")
