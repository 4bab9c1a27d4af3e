# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds a fresh server per test (no Supabase access; services are patched)
# - Provides signed tokens for admin and regular users
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-signing-tokens")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("MONITOR_DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from app import manager
from app.auth import AUTH_PURPOSE, create_token


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def server():
    """A freshly composed server with every default plugin."""
    server = manager.create_server()
    yield server
    server.stop()


@pytest.fixture
def app(server):
    return server.app


@pytest.fixture
def client(app):
    """Test client that returns 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)


def _auth_headers(user_id: int, username: str, roles: list[str]) -> dict[str, str]:
    token, _ = create_token(user_id, purpose=AUTH_PURPOSE, username=username, scope=roles)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    """Authorization header of a user holding the admin role."""
    return _auth_headers(1, "admin", ["admin", "user"])


@pytest.fixture
def user_headers():
    """Authorization header of a user without the admin role."""
    return _auth_headers(2, "jdoe", ["user"])


@pytest.fixture
def sample_user():
    return {
        "id": 2,
        "username": "jdoe",
        "email": "jdoe@example.com",
        "roles": ["user"],
        "created_at": "2024-01-15T10:30:00+00:00",
    }


@pytest.fixture
def sample_role():
    return {"id": 3, "name": "editor", "description": "Can edit content", "users": [1, 2]}
