"""
Utility helper functions for safe data handling.
"""
import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


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


def strip_prefix(value: Any, prefix: str) -> Optional[str]:
    """
    Drop an OpenLibrary key prefix such as "/works/".

    Search results carry bare ids ("OL23919A") while records carry
    prefixed keys ("/authors/OL23919A"); both map to the bare id.

    Returns:
        Bare id, or None if value is empty
    """
    if not value:
        return None
    return str(value).replace(prefix, "", 1) or None


def parse_leading_int(value: Any, default: int = 0) -> int:
    """
    Read the integer a string starts with, e.g. "10abc" -> 10, "12.5" -> 12.

    Args:
        value: Any value to parse
        default: Default int if no leading digits are found

    Returns:
        Integer or default
    """
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    return int(match.group(1))
