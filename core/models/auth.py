# =============================================================================
# core/models/auth.py - Authentication Schemas
# =============================================================================
# Request/response bodies for the login, registration and password endpoints.
# =============================================================================

from pydantic import BaseModel, Field

from .user import EMAIL_PATTERN, USERNAME_PATTERN


class LoginRequest(BaseModel):
    """
    Credentials posted to the login endpoint.

    Example:
        {"username": "admin", "password": "admin"}
    """
    username: str = Field(..., min_length=1, max_length=30)
    password: str = Field(..., min_length=1, max_length=200)


class TokenResponse(BaseModel):
    """
    Signed token returned by login and renew.

    Example:
        {"token": "eyJhbGciOi...", "token_type": "bearer", "expires_in": 86400}
    """
    token: str
    token_type: str = "bearer"
    expires_in: int


class RegisterRequest(BaseModel):
    """Self-service registration body."""
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=3, max_length=200)


class PasswordResetRequest(BaseModel):
    """Email of the account whose password should be reset."""
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)


class PasswordUpdateRequest(BaseModel):
    """Reset token exchanged for a new password."""
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=3, max_length=200)
