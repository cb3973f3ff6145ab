from __future__ import annotations

from datetime import datetime

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_timestamp(value: object, field_name: str = "timestamp") -> datetime:
    if not isinstance(value, datetime):
        raise ValidationError(f"{field_name} must be a datetime, got {type(value).__name__}")
    return value


def require_positive_int(value: object, field_name: str, *, maximum: int | None = None) -> int:
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if n <= 0:
        raise ValidationError(f"{field_name} must be positive")
    if maximum is not None and n > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum}")
    return n
