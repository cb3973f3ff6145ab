from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..model import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """Scan at or after the late cutoff counts as an explicit absence."""

    def decide(self, *, scanned_at: datetime, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ABSENT,
            note=f"Scanned after {policy.late_before.strftime('%H:%M')}",
        )
