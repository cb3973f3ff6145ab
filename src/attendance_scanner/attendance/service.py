from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional

from ..common.timeouts import call_with_timeout, make_executor
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_RECENT_LIMIT
from ..core.enums import AttendanceStatus
from .repository import AttendanceRepository

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.LATE: "Late",
    AttendanceStatus.ABSENT: "Absent",
}

STATUS_CSS = {
    AttendanceStatus.PRESENT: "bg-success",
    AttendanceStatus.LATE: "bg-warning text-dark",
    AttendanceStatus.ABSENT: "bg-danger",
}


class AttendanceService:
    """Read-side views over stored records (person history, today's activity)."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        timeout: Optional[float] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._attendance = attendance
        self._timeout = timeout
        self._executor = executor or make_executor("attendance-store")

    def get_history(self, person_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        limit = require_positive_int(limit, "limit", maximum=365)
        rows = call_with_timeout(
            lambda: self._attendance.query_by_person(person_id, limit),
            timeout=self._timeout,
            operation="Attendance history query",
            executor=self._executor,
        )
        return [self._to_ui(r) for r in rows]

    def recent_for_day(self, work_date: date, *, limit: int = DEFAULT_RECENT_LIMIT) -> list[dict]:
        limit = require_positive_int(limit, "limit", maximum=500)
        rows = call_with_timeout(
            lambda: self._attendance.recent_rows(work_date, limit),
            timeout=self._timeout,
            operation="Recent attendance query",
            executor=self._executor,
        )
        return [
            {
                "attendance_id": r.attendance_id,
                "person_id": r.person_id,
                "full_name": r.full_name or "-",
                "department": r.department or "-",
                "time": r.recorded_at.strftime("%H:%M:%S"),
                "status": r.status.value,
                "label": STATUS_LABELS.get(r.status, r.status.value),
                "operator_id": r.operator_id,
            }
            for r in rows
        ]

    def _to_ui(self, r) -> dict:
        return {
            "date": r.work_date.strftime("%Y-%m-%d"),
            "time": r.recorded_at.strftime("%H:%M:%S"),
            "status": r.status.value,
            "label": STATUS_LABELS.get(r.status, r.status.value),
            "css_class": STATUS_CSS.get(r.status, "bg-secondary"),
            "note": r.note or "",
        }
