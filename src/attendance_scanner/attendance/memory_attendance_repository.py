from __future__ import annotations

import itertools
import threading
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, CreateOutcome
from ..persons.repository import PersonRepository
from .model import AttendanceRecord, AttendanceRecordRow, CreateResult
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    """Attendance store kept in process memory.

    A single lock makes every create-if-absent one indivisible step, which is
    the in-process equivalent of the MySQL unique key.
    """

    def __init__(self, persons: Optional[PersonRepository] = None):
        self._persons = persons
        self._lock = threading.Lock()
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._ids = itertools.count(1)

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
        key = (person_id, work_date)
        with self._lock:
            if key in self._by_key:
                return CreateResult(outcome=CreateOutcome.ALREADY_EXISTS)
            record = AttendanceRecord(
                attendance_id=next(self._ids),
                person_id=person_id,
                work_date=work_date,
                status=status,
                operator_id=operator_id,
                recorded_at=recorded_at,
                note=note,
            )
            self._by_key[key] = record
        return CreateResult(outcome=CreateOutcome.CREATED, record=record)

    def _snapshot(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._by_key.values())

    def query_by_day(self, work_date: date) -> Sequence[AttendanceRecord]:
        items = [r for r in self._snapshot() if r.work_date == work_date]
        items.sort(key=lambda r: (r.recorded_at, r.attendance_id))
        return items

    def query_by_person(self, person_id: str, limit: int) -> Sequence[AttendanceRecord]:
        items = [r for r in self._snapshot() if r.person_id == person_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[: int(limit)]

    def recent_rows(self, work_date: date, limit: int) -> Sequence[AttendanceRecordRow]:
        items = list(self.query_by_day(work_date))
        items.sort(key=lambda r: (r.recorded_at, r.attendance_id), reverse=True)

        rows = []
        for r in items[: int(limit)]:
            person = self._persons.get_by_token(r.person_id) if self._persons else None
            rows.append(
                AttendanceRecordRow(
                    attendance_id=r.attendance_id,
                    person_id=r.person_id,
                    full_name=person.full_name if person else None,
                    department=person.department if person else None,
                    work_date=r.work_date,
                    status=r.status,
                    operator_id=r.operator_id,
                    recorded_at=r.recorded_at,
                )
            )
        return rows
