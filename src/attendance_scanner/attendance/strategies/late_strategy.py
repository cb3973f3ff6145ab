from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..model import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision, minutes_after


class LateStrategy(AttendanceStrategy):
    """Scan between the presence cutoff and the late cutoff."""

    def decide(self, *, scanned_at: datetime, policy: AttendancePolicy) -> StatusDecision:
        late_by = minutes_after(scanned_at, policy.present_before)
        return StatusDecision(
            status=AttendanceStatus.LATE,
            note=f"Late by {late_by} min (cutoff {policy.present_before.strftime('%H:%M')})",
        )
