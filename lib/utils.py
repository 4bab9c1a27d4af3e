# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any


# =============================================================================
# Query-String Coercion
# =============================================================================

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def parse_bool(value: Any) -> bool:
    """
    Interpret a query-string value as a boolean.

    Example:
        parse_bool("true")   # True
        parse_bool("0")      # False
        parse_bool(None)     # False
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_VALUES


def parse_positive_int(value: Any, default: int) -> int:
    """
    Interpret a query-string value as an integer >= 1.

    Falls back to `default` for missing, malformed or non-positive values.

    Example:
        parse_positive_int("3", 1)    # 3
        parse_positive_int("abc", 1)  # 1
        parse_positive_int("-2", 1)   # 1
    """
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default
