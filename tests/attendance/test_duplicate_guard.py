from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from attendance_scanner.attendance.guard import DuplicateGuard
from attendance_scanner.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from attendance_scanner.attendance.model import NewAttendanceRecord
from attendance_scanner.core.enums import AttendanceStatus
from attendance_scanner.core.exceptions import DuplicateScanError


def new_record(person_id: str = "P-001", operator_id: str = "op-1", hour: int = 8) -> NewAttendanceRecord:
    return NewAttendanceRecord(
        person_id=person_id,
        work_date=date(2026, 3, 2),
        status=AttendanceStatus.PRESENT,
        operator_id=operator_id,
        recorded_at=datetime(2026, 3, 2, hour, 0),
    )


def test_first_create_returns_record():
    repo = InMemoryAttendanceRepository()
    guard = DuplicateGuard(repo)

    record = guard.create_once(new_record())

    assert record.person_id == "P-001"
    assert record.status == AttendanceStatus.PRESENT
    assert repo.query_by_day(date(2026, 3, 2)) == [record]


def test_second_create_same_day_raises_and_keeps_first():
    repo = InMemoryAttendanceRepository()
    guard = DuplicateGuard(repo)
    first = guard.create_once(new_record(operator_id="op-1", hour=8))

    with pytest.raises(DuplicateScanError) as exc:
        guard.create_once(new_record(operator_id="op-2", hour=9))

    assert exc.value.reason == "duplicate_scan"
    assert not exc.value.retryable
    assert repo.query_by_day(date(2026, 3, 2)) == [first]


def test_other_person_same_day_is_allowed():
    repo = InMemoryAttendanceRepository()
    guard = DuplicateGuard(repo)

    guard.create_once(new_record("P-001"))
    guard.create_once(new_record("Q-002"))

    assert len(repo.query_by_day(date(2026, 3, 2))) == 2


def test_same_person_next_day_is_allowed():
    repo = InMemoryAttendanceRepository()
    guard = DuplicateGuard(repo)
    guard.create_once(new_record())

    guard.create_once(
        NewAttendanceRecord(
            person_id="P-001",
            work_date=date(2026, 3, 3),
            status=AttendanceStatus.LATE,
            operator_id="op-1",
            recorded_at=datetime(2026, 3, 3, 9, 0),
        )
    )

    assert len(repo.query_by_person("P-001", 10)) == 2


def test_concurrent_creates_exactly_one_wins():
    repo = InMemoryAttendanceRepository()
    guard = DuplicateGuard(repo)
    workers = 16
    barrier = threading.Barrier(workers)

    def attempt(i: int):
        barrier.wait()
        try:
            return guard.create_once(new_record(operator_id=f"op-{i}"))
        except DuplicateScanError:
            return None

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1
    assert repo.query_by_day(date(2026, 3, 2)) == winners
