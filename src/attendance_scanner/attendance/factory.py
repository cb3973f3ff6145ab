from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .model import AttendancePolicy
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Each cutoff is the inclusive lower bound of the next bucket.
    """

    def for_scan(self, *, scanned_at: datetime, policy: AttendancePolicy) -> AttendanceStrategy:
        t = scanned_at.time()
        if t < policy.present_before:
            return PresentStrategy()
        if t < policy.late_before:
            return LateStrategy()
        return AbsentStrategy()
