from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceRecordRow, CreateResult


class AttendanceRepository(Protocol):
    """Durable attendance store.

    There is no update or delete: records are write-once. Implementations raise
    ``StoreUnavailableError`` when the store cannot be reached.
    """

    def create_if_absent(
        self,
        *,
        person_id: str,
        work_date: date,
        status: AttendanceStatus,
        operator_id: str,
        recorded_at: datetime,
        note: Optional[str] = None,
    ) -> CreateResult:
        """Atomically insert unless a record exists for (person_id, work_date)."""

        raise NotImplementedError

    def query_by_day(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def query_by_person(self, person_id: str, limit: int) -> Sequence[AttendanceRecord]:
        """Newest first."""

        raise NotImplementedError

    def recent_rows(self, work_date: date, limit: int) -> Sequence[AttendanceRecordRow]:
        """Records of one day joined with person details, newest first."""

        raise NotImplementedError
