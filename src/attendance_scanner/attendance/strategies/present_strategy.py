from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from ..model import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Scan before the presence cutoff."""

    def decide(self, *, scanned_at: datetime, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
