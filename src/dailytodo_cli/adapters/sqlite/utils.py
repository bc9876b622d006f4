"""Utility functions for SQLite adapter."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any


def generate_uuid() -> str:
    """Generate a new UUID as string.

    Returns:
        UUID string (e.g., "123e4567-e89b-12d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current local timestamp in ISO format."""
    return datetime.now().isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary."""
    if row is None:
        return {}
    return dict(row)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse datetime from various formats.

    Args:
        value: String, datetime object, or None

    Returns:
        datetime object or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))

    return None


def format_datetime(value: datetime | None) -> str | None:
    """Serialize a datetime for storage (ISO 8601)."""
    if value is None:
        return None
    return value.isoformat()


def encode_int_list(values: list[int] | None) -> str | None:
    """Store a list of ints as a comma-separated string ("1,5")."""
    if values is None:
        return None
    return ",".join(str(int(v)) for v in values)


def decode_int_list(value: str | None) -> list[int]:
    """Inverse of :func:`encode_int_list`; empty or NULL gives []."""
    if not value:
        return []
    return [int(part) for part in value.split(",") if part.strip()]
