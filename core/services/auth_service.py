# =============================================================================
# core/services/auth_service.py - Authentication Business Logic
# =============================================================================
# Credential checks, token issuing and the password reset flow.
#
# Reset tokens are signed, short-lived and bound to the user's current
# password hash, so a token stops working once the password changes.
# =============================================================================

from __future__ import annotations

import hashlib
import logging
from typing import Any

from lib.passwords import verify_password
from lib.supabase_client import SupabaseClient
from core.models.auth import RegisterRequest
from core.models.user import UserCreate
from core.services.user_service import UserService, to_public
from app.auth.tokens import AUTH_PURPOSE, RESET_PURPOSE, create_token, decode_token
from app.config import settings
from app.exceptions import InvalidCredentialsError, InvalidTokenError

logger = logging.getLogger(__name__)


def _hash_fingerprint(password_hash: str | None) -> str:
    """Short digest of a password hash, embedded in reset tokens."""
    return hashlib.sha256((password_hash or "").encode()).hexdigest()[:16]


class AuthService:
    """
    Service for login, registration and password management.
    """

    @staticmethod
    def authenticate(username: str, password: str) -> dict[str, Any]:
        """
        Check a username/password pair.

        Returns:
            Public user dict, roles included

        Raises:
            InvalidCredentialsError: If the user doesn't exist or the password is wrong
        """
        row = UserService.find_by_username(username)

        if not row or not verify_password(row.get("password_hash"), password):
            logger.info(f"Failed login attempt for username: {username}")
            raise InvalidCredentialsError()

        logger.info(f"User logged in: {row['id']}")
        return to_public(row)

    @staticmethod
    def issue_token(user: dict[str, Any]) -> tuple[str, int]:
        """
        Sign an auth token whose scope is the user's role names.

        Returns:
            Tuple of (token, lifetime in seconds)
        """
        return create_token(
            user["id"],
            purpose=AUTH_PURPOSE,
            username=user["username"],
            scope=list(user.get("roles") or []),
        )

    @staticmethod
    def renew(user_id: int) -> tuple[str, int]:
        """Issue a fresh token reflecting the user's current roles."""
        return AuthService.issue_token(UserService.get(user_id))

    @staticmethod
    def register(data: RegisterRequest) -> dict[str, Any]:
        """Create a user with the default role."""
        return UserService.create(
            UserCreate(username=data.username, email=data.email, password=data.password),
            roles=[settings.DEFAULT_ROLE],
        )

    @staticmethod
    def request_password_reset(email: str) -> str | None:
        """
        Issue a password reset token for the account owning `email`.

        Returns:
            The reset token, or None when no account matches
        """
        row = UserService.find_by_email(email)
        if not row:
            logger.info("Password reset requested for unknown email")
            return None

        token, _ = create_token(
            row["id"],
            purpose=RESET_PURPOSE,
            scope=[_hash_fingerprint(row.get("password_hash"))],
            expires_minutes=settings.RESET_TOKEN_EXPIRES_MINUTES,
        )
        logger.info(f"Password reset token issued for user: {row['id']}")
        return token

    @staticmethod
    def reset_password(token: str, password: str) -> None:
        """
        Set a new password using a reset token.

        Raises:
            InvalidTokenError: If the token is invalid, expired or already used
        """
        payload = decode_token(token, purpose=RESET_PURPOSE)
        user_id = int(payload.sub)

        row = SupabaseClient.fetch_by_id("users", user_id, columns="id, password_hash")
        if not row or payload.scope != [_hash_fingerprint(row.get("password_hash"))]:
            raise InvalidTokenError("Reset token is no longer valid")

        UserService.set_password(user_id, password)
