"""Attendance policy engine.

Pure functions: the caller supplies a timestamp already normalized to local
civil time; nothing here reads the clock or converts timezones.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.validators import require_timestamp
from ..core.enums import AttendanceStatus
from .factory import AttendanceStrategyFactory
from .model import AttendancePolicy
from .strategies.base import StatusDecision

_default_factory = AttendanceStrategyFactory()


def decide(
    timestamp: datetime,
    policy: AttendancePolicy,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> StatusDecision:
    timestamp = require_timestamp(timestamp)
    strategy = (factory or _default_factory).for_scan(scanned_at=timestamp, policy=policy)
    return strategy.decide(scanned_at=timestamp, policy=policy)


def classify(timestamp: datetime, policy: AttendancePolicy) -> AttendanceStatus:
    return decide(timestamp, policy).status
