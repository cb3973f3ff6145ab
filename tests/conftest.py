from __future__ import annotations

from datetime import datetime

import pytest

from attendance_scanner.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from attendance_scanner.container import build_container
from attendance_scanner.core.enums import StoreBackend
from attendance_scanner.core.settings import ScannerSettings
from attendance_scanner.persons.memory_person_repository import InMemoryPersonRepository
from attendance_scanner.persons.model import Person


class FakeClock:
    """Mutable clock returning naive local time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, hour: int, minute: int = 0, second: int = 0) -> None:
        self.now = self.now.replace(hour=hour, minute=minute, second=second, microsecond=0)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 8, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def persons_repo() -> InMemoryPersonRepository:
    return InMemoryPersonRepository(
        [
            Person(person_id="P-001", full_name="Paul Atta", department="Sciences", email="paul@example.org"),
            Person(person_id="Q-002", full_name="Quentin Bamba", department="Sciences"),
            Person(person_id="R-003", full_name="Rokia Coulibaly", department="Lettres", email="rokia@example.org"),
        ]
    )


@pytest.fixture
def attendance_repo(persons_repo) -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository(persons_repo)


@pytest.fixture
def settings() -> ScannerSettings:
    return ScannerSettings(store_backend=StoreBackend.MEMORY, lookup_timeout=2.0, store_timeout=2.0)


@pytest.fixture
def container(settings, persons_repo, attendance_repo, clock):
    c = build_container(settings=settings, persons_repo=persons_repo, attendance_repo=attendance_repo, clock=clock)
    yield c
    c.sessions.close_all()
