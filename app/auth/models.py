# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a signed token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    scope: tuple[str, ...] = ()

    def has_scope(self, scope: str) -> bool:
        return scope in self.scope


class TokenPayload(BaseModel):
    """
    Decoded token payload.

    Tokens carry standard JWT claims plus the user's role names as scope.
    """
    sub: str  # User ID
    username: str | None = None
    scope: list[str] = Field(default_factory=list)
    purpose: str  # "auth" or "password-reset"
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
