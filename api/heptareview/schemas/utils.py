"""
Utility functions for schema validation.
"""
from typing import Optional


def normalize_required_text(v: str, field_name: str) -> str:
    """
    Strip surrounding whitespace from a required text field.

    Args:
        v: Raw value from the request body
        field_name: Field name used in the error message

    Returns:
        Stripped value

    Raises:
        ValueError: If the value is empty after stripping
    """
    if v is None or not v.strip():
        raise ValueError(f"{field_name} cannot be missing or empty")
    return v.strip()


def normalize_optional_text(v: Optional[str]) -> Optional[str]:
    """
    Strip an optional text field, converting blank strings to None.

    Args:
        v: Raw value (can be None)

    Returns:
        Stripped value, or None when missing or blank
    """
    if v is None:
        return None
    v_normalized = v.strip()
    return v_normalized or None
