# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Input for creating a user (admin or registration)
# - UserUpdate: Partial update of a user (admin or own profile)
# - UserResponse: Output when returning user data to clients
#
# Password hashes never leave the service layer.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
USERNAME_PATTERN = r"^[a-zA-Z0-9_.-]+$"


class UserCreate(BaseModel):
    """
    Schema for creating a new user.

    Example:
        {
            "username": "jdoe",
            "email": "jdoe@example.com",
            "password": "s3cret!"
        }
    """

    username: str = Field(
        ...,
        min_length=3,
        max_length=30,
        pattern=USERNAME_PATTERN,
        description="Unique login name"
    )

    email: str = Field(
        ...,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Unique email address"
    )

    password: str = Field(
        ...,
        min_length=3,
        max_length=200,
        description="Plain-text password, hashed before storage"
    )


class UserUpdate(BaseModel):
    """
    Schema for updating a user. Every field is optional.

    Example:
        {"email": "new@example.com"}
    """

    username: str | None = Field(
        default=None,
        min_length=3,
        max_length=30,
        pattern=USERNAME_PATTERN,
    )

    email: str | None = Field(
        default=None,
        max_length=255,
        pattern=EMAIL_PATTERN,
    )

    password: str | None = Field(
        default=None,
        min_length=3,
        max_length=200,
    )


class UserResponse(BaseModel):
    """
    Schema for returning user data to clients.

    Example:
        {
            "id": 1,
            "username": "admin",
            "email": "admin@example.com",
            "roles": ["admin"]
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    roles: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
