from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import AbsencePolicy


@dataclass(frozen=True)
class DailyAggregate:
    """Counts for one calendar day, derived from stored records on read.

    ``absent`` follows ``absence_policy``; ``recorded_absent`` and
    ``unrecorded`` are always reported so both readings stay visible.
    """

    work_date: date
    present: int
    late: int
    absent: int
    recorded_absent: int
    unrecorded: int
    total_persons: int
    absence_policy: AbsencePolicy

    @property
    def recorded(self) -> int:
        return self.present + self.late + self.recorded_absent

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.strftime("%Y-%m-%d"),
            "label": self.work_date.strftime("%d/%m"),
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "recorded_absent": self.recorded_absent,
            "unrecorded": self.unrecorded,
            "recorded": self.recorded,
            "total_persons": self.total_persons,
            "absence_policy": self.absence_policy.value,
        }


@dataclass(frozen=True)
class TrendSeries:
    """Consecutive daily aggregates, oldest first."""

    days: tuple[DailyAggregate, ...]

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self):
        return iter(self.days)

    def to_list(self) -> list[dict]:
        return [d.to_dict() for d in self.days]


@dataclass(frozen=True)
class PersonSummary:
    person_id: str
    present: int
    late: int
    absent: int

    @property
    def total(self) -> int:
        return self.present + self.late + self.absent

    def to_dict(self) -> dict:
        return {
            "person_id": self.person_id,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "total": self.total,
        }
