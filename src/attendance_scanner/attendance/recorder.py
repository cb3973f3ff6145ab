from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Optional

from ..common.timeouts import call_with_timeout, make_executor
from ..common.validators import require_non_empty, require_timestamp
from ..core.enums import AttendanceStatus
from ..core.exceptions import CollaboratorTimeoutError, CollaboratorUnavailableError, ValidationError
from .guard import DuplicateGuard
from .model import AttendanceRecord, NewAttendanceRecord

logger = logging.getLogger(__name__)


class AttendanceRecorder:
    """Use case: persist a classified scan as an immutable record.

    ``create`` is the only mutating operation of the package. It returns the new
    record or raises ``DuplicateScanError``, ``StoreUnavailableError`` or
    ``CollaboratorTimeoutError``; it never leaves a partial write.
    """

    def __init__(
        self,
        guard: DuplicateGuard,
        *,
        timeout: Optional[float] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._guard = guard
        self._timeout = timeout
        self._executor = executor or make_executor("attendance-store")

    def create(self, new: NewAttendanceRecord) -> AttendanceRecord:
        require_non_empty(new.person_id, "person_id")
        require_non_empty(new.operator_id, "operator_id")
        require_timestamp(new.recorded_at, "recorded_at")
        if not isinstance(new.status, AttendanceStatus):
            raise ValidationError(f"Unknown attendance status: {new.status!r}")
        if new.recorded_at.date() != new.work_date:
            raise ValidationError("recorded_at must fall on work_date")

        record = call_with_timeout(
            lambda: self._guard.create_once(new),
            timeout=self._timeout,
            operation="Attendance store write",
            executor=self._executor,
        )
        logger.info(
            "Recorded %s for person=%s on %s by operator=%s",
            record.status.value,
            record.person_id,
            record.work_date,
            record.operator_id,
        )
        return record

    def already_recorded(self, person_id: str, work_date: date) -> Optional[bool]:
        """Whether a record already exists, or ``None`` when the store can't say."""
        try:
            return call_with_timeout(
                lambda: self._guard.has_record(person_id, work_date),
                timeout=self._timeout,
                operation="Attendance existence check",
                executor=self._executor,
            )
        except (CollaboratorUnavailableError, CollaboratorTimeoutError) as e:
            logger.warning("Existence check for person=%s on %s skipped: %s", person_id, work_date, e)
            return None
