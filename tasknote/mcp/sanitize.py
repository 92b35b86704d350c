"""Shared input validation for the MCP layer.

Task ids and notes are passed through unchanged: notes are arbitrary text
and an unknown id must come back verbatim in the not-found message.
"""

from typing import Any, Optional

# Page inputs are unsigned 32-bit integers on the wire
UINT32_MAX = 2**32 - 1


def validate_text(value: Any, field_name: str, required: bool = True) -> str:
    """Validate a string input without rewriting it.

    Raises:
        ValueError: If the value is missing or not a string
    """
    if value is None:
        if required:
            raise ValueError(f"{field_name} is required")
        return ""

    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string, got {type(value).__name__}")

    return value


def validate_uint(value: Any, field_name: str, default: Optional[int] = None) -> int:
    """Validate an unsigned 32-bit integer input.

    Args:
        value: The value to validate
        field_name: Name of the field for error messages
        default: Value used when the input is None

    Raises:
        ValueError: If validation fails
    """
    if value is None:
        if default is not None:
            return default
        raise ValueError(f"{field_name} is required")

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {type(value).__name__}")

    if value < 0 or value > UINT32_MAX:
        raise ValueError(f"{field_name} must be between 0 and {UINT32_MAX}, got {value}")

    return value
