# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .role_service import RoleService
from .resource_service import ResourceService
from .contact_service import ContactService
from .auth_service import AuthService

__all__ = [
    "UserService",
    "RoleService",
    "ResourceService",
    "ContactService",
    "AuthService",
]
