# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Thin wrapper around argon2-cffi so services never touch raw hashes.
# =============================================================================

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plain-text password with Argon2id."""
    return _hasher.hash(password)


def verify_password(password_hash: str | None, password: str) -> bool:
    """
    Check a plain-text password against a stored hash.

    Returns False for missing or malformed hashes instead of raising.
    """
    if not password_hash:
        return False
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
