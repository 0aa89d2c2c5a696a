from __future__ import annotations

from ..core.exceptions import ValidationError
from .datetime_utils import is_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value.strip()


def require_iso_date(value: str, field_name: str = "Date") -> str:
    if not is_iso_date(value):
        raise ValidationError(f"{field_name} must be a valid YYYY-MM-DD date")
    return value


def optional_text(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None
