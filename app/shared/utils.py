"""Shared utility functions."""

from __future__ import annotations

from datetime import datetime, timezone

from app.shared.exceptions import ValidationException


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def require_aware_utc(dt: datetime, field_name: str) -> datetime:
    """Reject naive datetimes and convert aware ones to UTC."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValidationException(f"{field_name} must include a timezone offset")
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValidationException(f"{field_name} is out of bounds") from exc
