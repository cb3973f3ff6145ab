from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Any, Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import load_timezone, parse_time_of_day
from .constants import (
    DEFAULT_LATE_BEFORE,
    DEFAULT_LOOKUP_TIMEOUT_SECONDS,
    DEFAULT_PRESENT_BEFORE,
    DEFAULT_STORE_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
)
from .enums import AbsencePolicy, StoreBackend
from .exceptions import ValidationError


def _optional_seconds(value: Any, name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number of seconds")
    if seconds <= 0:
        raise ValidationError(f"{name} must be positive")
    return seconds


@dataclass(frozen=True)
class ScannerSettings:
    """Typed view over a ``config.*`` settings module."""

    store_backend: StoreBackend = StoreBackend.MYSQL
    db_config: dict = field(default_factory=dict)
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo(DEFAULT_TIMEZONE))
    present_before: time = DEFAULT_PRESENT_BEFORE
    late_before: time = DEFAULT_LATE_BEFORE
    absence_policy: AbsencePolicy = AbsencePolicy.EXPLICIT
    lookup_timeout: Optional[float] = DEFAULT_LOOKUP_TIMEOUT_SECONDS
    store_timeout: Optional[float] = DEFAULT_STORE_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @classmethod
    def from_module(cls, settings: Any) -> "ScannerSettings":
        def get(name: str, default: Any) -> Any:
            return getattr(settings, name, default)

        try:
            backend = StoreBackend(str(get("STORE_BACKEND", StoreBackend.MYSQL.value)).lower())
        except ValueError:
            raise ValidationError(f"Unsupported STORE_BACKEND: {get('STORE_BACKEND', None)!r}")

        try:
            absence_policy = AbsencePolicy(str(get("ABSENCE_POLICY", AbsencePolicy.EXPLICIT.value)).lower())
        except ValueError:
            raise ValidationError(f"Unsupported ABSENCE_POLICY: {get('ABSENCE_POLICY', None)!r}")

        return cls(
            store_backend=backend,
            db_config=dict(get("DB_CONFIG", {}) or {}),
            timezone=load_timezone(str(get("TIMEZONE", DEFAULT_TIMEZONE))),
            present_before=parse_time_of_day(get("PRESENT_BEFORE", DEFAULT_PRESENT_BEFORE)),
            late_before=parse_time_of_day(get("LATE_BEFORE", DEFAULT_LATE_BEFORE)),
            absence_policy=absence_policy,
            lookup_timeout=_optional_seconds(get("LOOKUP_TIMEOUT_SECONDS", DEFAULT_LOOKUP_TIMEOUT_SECONDS), "LOOKUP_TIMEOUT_SECONDS"),
            store_timeout=_optional_seconds(get("STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS), "STORE_TIMEOUT_SECONDS"),
            log_level=str(get("LOG_LEVEL", "INFO")),
        )
