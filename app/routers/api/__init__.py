# =============================================================================
# app/routers/api/ - REST API Route Table
# =============================================================================
# The whole REST API as one static table of (method, path, config) rows.
# Handlers and their configs live in the per-feature modules:
# - version.py: API version
# - login.py: Login, logout, renew and password reset
# - profile.py: Own profile
# - contacts.py: Public signup and contact management
# - register.py: Self-service registration
# - user.py, role.py, resource.py: Admin management endpoints
#
# The table is registered as the "api" plugin, under settings.API_PREFIX.
# =============================================================================

import logging
from typing import Any, Iterable

from app.config import settings
from app.routers.api import contacts, login, profile, register, resource, role, user, version
from app.routers.api.endpoint import Endpoint, EndpointConfig

logger = logging.getLogger(__name__)

name = "api"

prefixes = settings.prefixes

ENDPOINTS: list[Endpoint] = [
    Endpoint("GET", "/version", version.GET),
    Endpoint("POST", prefixes.login, login.LOGIN),
    Endpoint("GET", prefixes.logout, login.LOGOUT),
    Endpoint("GET", prefixes.renew, login.RENEW),
    Endpoint("POST", prefixes.signup, contacts.SIGNUP),
    Endpoint("POST", prefixes.register_path, register.REGISTER),
    Endpoint("POST", prefixes.password_reset, login.PASSWORD_RESET),
    Endpoint("POST", prefixes.password_update, login.PASSWORD_UPDATE),
    Endpoint("GET", "/profile", profile.GET),
    Endpoint("PUT", "/profile", profile.UPDATE),
    Endpoint("GET", "/user", user.LIST),
    Endpoint("GET", "/user/{user_id}", user.GET),
    Endpoint("POST", "/user", user.CREATE),
    Endpoint("PUT", "/user/{user_id}", user.UPDATE),
    Endpoint("DELETE", "/user/{user_id}", user.DELETE),
    Endpoint("GET", "/role", role.LIST),
    Endpoint("GET", "/resource", resource.LIST),
    Endpoint("GET", "/permission", role.LIST_PERMISSIONS),
    Endpoint("GET", "/role/{role_id}", role.GET),
    Endpoint("POST", "/role", role.CREATE),
    Endpoint("PUT", "/role/{role_id}", role.UPDATE),
    Endpoint("DELETE", "/role/{role_id}", role.DELETE),
    Endpoint("PUT", "/role/{role_id}/users", role.ADD_USERS),
    Endpoint("DELETE", "/role/{role_id}/users", role.REMOVE_USERS),
    Endpoint("POST", "/role/{role_id}/permissions", role.ADD_PERMISSION),
    Endpoint("PUT", "/role/{role_id}/permissions", role.UPDATE_PERMISSIONS),
    Endpoint("GET", "/contact", contacts.LIST),
    Endpoint("GET", "/contact/{contact_id}", contacts.GET),
    Endpoint("DELETE", "/contact/{contact_id}", contacts.DELETE),
]


def register_endpoints(server: Any, endpoints: Iterable[Endpoint], prefix: str = "") -> None:
    """Add every endpoint to the server; each one emits a `route` event."""
    for endpoint in endpoints:
        config: EndpointConfig = endpoint.config
        server.route(
            endpoint.method,
            f"{prefix}{endpoint.path}",
            config.handler,
            summary=config.summary,
            tags=config.tags,
            status_code=config.status_code,
            response_model=config.response_model,
            dependencies=config.dependencies(),
        )


def register(server: Any, options: dict[str, Any] | None = None) -> None:
    """Plugin registration function."""
    prefix = (options or {}).get("prefix", settings.API_PREFIX)
    register_endpoints(server, ENDPOINTS, prefix)
    logger.debug(f"Registered {len(ENDPOINTS)} API endpoints under {prefix}")
