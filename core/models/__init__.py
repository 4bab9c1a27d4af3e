# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: List query and acknowledgement schemas
# - user.py: User CRUD schemas
# - role.py: Role, role membership and permission schemas
# - resource.py: Resource schemas
# - contact.py: Contact (signup) schemas
# - auth.py: Login, registration and password schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import ListQuery, MessageResponse
from .user import UserCreate, UserResponse, UserUpdate
from .role import (
    PermissionAction,
    PermissionRequest,
    PermissionResponse,
    PermissionsUpdate,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
    RoleUsersRequest,
)
from .resource import ResourceResponse
from .contact import ContactCreate, ContactResponse
from .auth import (
    LoginRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
    RegisterRequest,
    TokenResponse,
)

__all__ = [
    # Common
    "ListQuery",
    "MessageResponse",
    # User
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    # Role
    "PermissionAction",
    "PermissionRequest",
    "PermissionResponse",
    "PermissionsUpdate",
    "RoleCreate",
    "RoleResponse",
    "RoleUpdate",
    "RoleUsersRequest",
    # Resource
    "ResourceResponse",
    # Contact
    "ContactCreate",
    "ContactResponse",
    # Auth
    "LoginRequest",
    "PasswordResetRequest",
    "PasswordUpdateRequest",
    "RegisterRequest",
    "TokenResponse",
]
