from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import DEFAULT_LATE_BEFORE, DEFAULT_PRESENT_BEFORE
from ..core.enums import AttendanceStatus, CreateOutcome
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendancePolicy:
    """Time-of-day cutoffs used to classify a scan.

    [00:00, present_before) -> present, [present_before, late_before) -> late,
    [late_before, 24:00) -> absent.
    """

    present_before: time = DEFAULT_PRESENT_BEFORE
    late_before: time = DEFAULT_LATE_BEFORE

    def __post_init__(self):
        if not isinstance(self.present_before, time) or not isinstance(self.late_before, time):
            raise ValidationError("Policy cutoffs must be times of day")
        if self.present_before >= self.late_before:
            raise ValidationError("present_before must be earlier than late_before")


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one immutable attendance fact per person and day."""

    attendance_id: int
    person_id: str
    work_date: date
    status: AttendanceStatus
    operator_id: str
    recorded_at: datetime
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "person_id": self.person_id,
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "operator_id": self.operator_id,
            "recorded_at": self.recorded_at.isoformat(timespec="seconds"),
            "note": self.note,
        }


@dataclass(frozen=True)
class NewAttendanceRecord:
    """A classified scan waiting to be persisted."""

    person_id: str
    work_date: date
    status: AttendanceStatus
    operator_id: str
    recorded_at: datetime
    note: Optional[str] = None


@dataclass(frozen=True)
class CreateResult:
    """Outcome of the store's atomic create-if-absent."""

    outcome: CreateOutcome
    record: Optional[AttendanceRecord] = None

    @property
    def created(self) -> bool:
        return self.outcome == CreateOutcome.CREATED


@dataclass(frozen=True)
class AttendanceRecordRow:
    """Read-model for dashboards: a record joined with the person's profile."""

    attendance_id: int
    person_id: str
    full_name: Optional[str]
    department: Optional[str]
    work_date: date
    status: AttendanceStatus
    operator_id: str
    recorded_at: datetime
