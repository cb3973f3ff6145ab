from __future__ import annotations

import logging
from datetime import date

from ..core.exceptions import DuplicateScanError
from .model import AttendanceRecord, NewAttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class DuplicateGuard:
    """At most one record per (person, calendar day).

    The guard never checks for an existing record before inserting; it relies
    entirely on the store's atomic create-if-absent, so of N concurrent
    attempts exactly one returns a record and the rest raise
    ``DuplicateScanError`` without writing anything.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def create_once(self, new: NewAttendanceRecord) -> AttendanceRecord:
        result = self._attendance.create_if_absent(
            person_id=new.person_id,
            work_date=new.work_date,
            status=new.status,
            operator_id=new.operator_id,
            recorded_at=new.recorded_at,
            note=new.note,
        )
        if not result.created or result.record is None:
            logger.info("Duplicate scan for person=%s on %s (operator=%s)", new.person_id, new.work_date, new.operator_id)
            raise DuplicateScanError(f"Attendance already recorded for {new.person_id} on {new.work_date:%Y-%m-%d}")
        return result.record

    def has_record(self, person_id: str, work_date: date) -> bool:
        """Advisory read: does ``person_id`` already have a record on ``work_date``?

        Only a hint for the operator; ``create_once`` stays the arbiter.
        """
        latest = self._attendance.query_by_person(person_id, 1)
        return bool(latest) and latest[0].work_date == work_date
