# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - passwords.py: Password hashing and verification
# - utils.py: Shared utilities (query-string coercion)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.passwords import hash_password, verify_password
from lib.utils import parse_bool, parse_positive_int

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Passwords
    "hash_password",
    "verify_password",
    # Utils
    "parse_bool",
    "parse_positive_int",
]
