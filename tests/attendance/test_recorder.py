from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from attendance_scanner.attendance.guard import DuplicateGuard
from attendance_scanner.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from attendance_scanner.attendance.model import NewAttendanceRecord
from attendance_scanner.attendance.recorder import AttendanceRecorder
from attendance_scanner.core.enums import AttendanceStatus
from attendance_scanner.core.exceptions import (
    CollaboratorTimeoutError,
    DuplicateScanError,
    StoreUnavailableError,
    ValidationError,
)


class DownAttendanceRepository(InMemoryAttendanceRepository):
    def create_if_absent(self, **kwargs):
        raise StoreUnavailableError("Database unavailable: connection refused")


class SlowAttendanceRepository(InMemoryAttendanceRepository):
    def __init__(self):
        super().__init__()
        self.release = threading.Event()

    def create_if_absent(self, **kwargs):
        self.release.wait(timeout=5)
        return super().create_if_absent(**kwargs)


def new_record(**overrides) -> NewAttendanceRecord:
    data = dict(
        person_id="P-001",
        work_date=date(2026, 3, 2),
        status=AttendanceStatus.LATE,
        operator_id="op-1",
        recorded_at=datetime(2026, 3, 2, 8, 20),
        note="Late by 5 min (cutoff 08:15)",
    )
    data.update(overrides)
    return NewAttendanceRecord(**data)


def test_create_persists_all_fields():
    repo = InMemoryAttendanceRepository()
    recorder = AttendanceRecorder(DuplicateGuard(repo), timeout=2.0)

    record = recorder.create(new_record())

    assert record.attendance_id == 1
    assert record.operator_id == "op-1"
    assert record.recorded_at == datetime(2026, 3, 2, 8, 20)
    assert record.note == "Late by 5 min (cutoff 08:15)"


def test_duplicate_propagates_through_timeout_wrapper():
    repo = InMemoryAttendanceRepository()
    recorder = AttendanceRecorder(DuplicateGuard(repo), timeout=2.0)
    recorder.create(new_record())

    with pytest.raises(DuplicateScanError):
        recorder.create(new_record(operator_id="op-2"))


def test_store_unavailable_is_retryable():
    recorder = AttendanceRecorder(DuplicateGuard(DownAttendanceRepository()))

    with pytest.raises(StoreUnavailableError) as exc:
        recorder.create(new_record())

    assert exc.value.retryable
    assert exc.value.reason == "store_unavailable"


def test_slow_store_times_out():
    repo = SlowAttendanceRepository()
    recorder = AttendanceRecorder(DuplicateGuard(repo), timeout=0.05)

    try:
        with pytest.raises(CollaboratorTimeoutError) as exc:
            recorder.create(new_record())
    finally:
        repo.release.set()

    assert exc.value.retryable
    assert exc.value.reason == "timeout"


@pytest.mark.parametrize(
    "overrides",
    [
        {"person_id": ""},
        {"operator_id": "  "},
        {"recorded_at": "2026-03-02T08:20:00"},
        {"status": "late"},
        {"recorded_at": datetime(2026, 3, 3, 8, 20)},
    ],
)
def test_invalid_records_are_rejected_before_write(overrides):
    repo = InMemoryAttendanceRepository()
    recorder = AttendanceRecorder(DuplicateGuard(repo))

    with pytest.raises(ValidationError):
        recorder.create(new_record(**overrides))

    assert repo.query_by_day(date(2026, 3, 2)) == []
