"""
core/validators.py

Input normalisation helpers shared by schemas and services:
- Tag/skill lists given as a list or a comma-separated string
- Optional free text where blank means "not provided"
- Required free text that must not be blank
"""

from collections.abc import Iterable

from gladiator.core.exceptions import EmptyField


def parse_tags(value: str | Iterable[str] | None) -> list[str]:
    """
    Normalise tags to a list of trimmed, non-empty strings, preserving order.

    Accepts either a list of strings or a single comma-separated string.
    """
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else value
    return [part.strip() for part in parts if part and part.strip()]


def optional_text(value: str | None) -> str | None:
    """Trim text; blank becomes None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def required_text(value: str | None, field: str) -> str:
    """
    Trim text and require it to be non-blank.

    Raises:
        EmptyField: If the value is missing or only whitespace.
    """
    cleaned = optional_text(value)
    if cleaned is None:
        raise EmptyField(field)
    return cleaned
