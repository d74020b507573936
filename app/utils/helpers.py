"""
Utility helper functions for safe data handling.
"""
from typing import Any


def safe_str(value: Any, default: str = "") -> str:
    """
    Safely convert value to string, handling None.

    Args:
        value: Any value to convert
        default: Default string if value is None

    Returns:
        String representation or default
    """
    if value is None:
        return default
    return str(value)


def safe_strip(value: Any) -> str:
    """
    Safely strip whitespace from a value, handling None.

    Args:
        value: Any value to strip

    Returns:
        Stripped string or empty string if None
    """
    if value is None:
        return ""
    return str(value).strip()


def safe_count(value: Any) -> int:
    """
    Convert a win/draw/loss count to a non-negative int.

    Booleans, None and unparseable values become 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        return max(int(value), 0)
    except (ValueError, TypeError, OverflowError):
        return 0
