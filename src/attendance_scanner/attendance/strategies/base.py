from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ..model import AttendancePolicy


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(self, *, scanned_at: datetime, policy: AttendancePolicy) -> StatusDecision:
        raise NotImplementedError


def minutes_after(scanned_at: datetime, cutoff) -> int:
    delta = datetime.combine(scanned_at.date(), scanned_at.time()) - datetime.combine(scanned_at.date(), cutoff)
    return max(int(delta.total_seconds() // 60), 0)
