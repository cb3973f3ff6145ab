from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from .attendance.guard import DuplicateGuard
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.model import AttendancePolicy
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.recorder import AttendanceRecorder
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_local
from .common.timeouts import make_executor
from .core.enums import StoreBackend
from .core.settings import ScannerSettings
from .database.connection import DatabaseConnection
from .persons.demo import DEMO_PERSONS
from .persons.memory_person_repository import InMemoryPersonRepository
from .persons.mysql_person_repository import MySQLPersonRepository
from .persons.repository import PersonRepository
from .persons.service import IdentityResolver, PersonDirectory
from .stats.service import StatisticsAggregator
from .workflow.session import ScanSession, ScanSessionRegistry


@dataclass(frozen=True)
class Container:
    settings: ScannerSettings
    clock: Callable[[], datetime]
    policy: AttendancePolicy

    persons_repo: PersonRepository
    attendance_repo: AttendanceRepository

    identity_executor: ThreadPoolExecutor
    store_executor: ThreadPoolExecutor

    resolver: IdentityResolver
    directory: PersonDirectory
    recorder: AttendanceRecorder
    attendance_service: AttendanceService
    stats: StatisticsAggregator
    sessions: ScanSessionRegistry

    def today(self) -> date:
        return self.clock().date()


def _build_repositories(settings: ScannerSettings) -> tuple[PersonRepository, AttendanceRepository]:
    if settings.store_backend == StoreBackend.MEMORY:
        persons = InMemoryPersonRepository(DEMO_PERSONS)
        return persons, InMemoryAttendanceRepository(persons)

    conn = DatabaseConnection.from_dict(settings.db_config)
    return MySQLPersonRepository(conn), MySQLAttendanceRepository(conn)


def build_container(
    *,
    settings: ScannerSettings,
    persons_repo: Optional[PersonRepository] = None,
    attendance_repo: Optional[AttendanceRepository] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    if persons_repo is None or attendance_repo is None:
        default_persons, default_attendance = _build_repositories(settings)
        persons_repo = persons_repo or default_persons
        attendance_repo = attendance_repo or default_attendance

    clock = clock or (lambda: now_local(settings.timezone))
    policy = AttendancePolicy(present_before=settings.present_before, late_before=settings.late_before)

    # Separate pools: a hung store must not starve identity lookups.
    identity_executor = make_executor("identity-lookup")
    store_executor = make_executor("attendance-store")

    resolver = IdentityResolver(persons_repo, timeout=settings.lookup_timeout, executor=identity_executor)
    directory = PersonDirectory(persons_repo)
    recorder = AttendanceRecorder(
        DuplicateGuard(attendance_repo),
        timeout=settings.store_timeout,
        executor=store_executor,
    )
    attendance_service = AttendanceService(attendance_repo, timeout=settings.store_timeout, executor=store_executor)
    stats = StatisticsAggregator(
        attendance_repo,
        persons_repo,
        absence_policy=settings.absence_policy,
        timeout=settings.store_timeout,
        store_executor=store_executor,
        identity_executor=identity_executor,
    )

    def new_session(operator_id: str) -> ScanSession:
        return ScanSession(operator_id, resolver=resolver, recorder=recorder, policy=policy, clock=clock)

    return Container(
        settings=settings,
        clock=clock,
        policy=policy,
        persons_repo=persons_repo,
        attendance_repo=attendance_repo,
        identity_executor=identity_executor,
        store_executor=store_executor,
        resolver=resolver,
        directory=directory,
        recorder=recorder,
        attendance_service=attendance_service,
        stats=stats,
        sessions=ScanSessionRegistry(new_session),
    )
