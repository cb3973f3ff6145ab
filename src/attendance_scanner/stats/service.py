from __future__ import annotations

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import days_ending
from ..common.timeouts import call_with_timeout, make_executor
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TREND_DAYS, MAX_TREND_DAYS
from ..core.enums import AbsencePolicy, AttendanceStatus
from ..persons.repository import PersonRepository
from .model import DailyAggregate, PersonSummary, TrendSeries


def _count_by_status(records: Iterable[AttendanceRecord]) -> Counter:
    return Counter(r.status for r in records)


class StatisticsAggregator:
    """Stateless read side: every figure is re-derived from the record store.

    Nothing is cached, so an aggregate can never disagree with
    ``query_by_day`` for the same day.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        persons: PersonRepository,
        *,
        absence_policy: AbsencePolicy = AbsencePolicy.EXPLICIT,
        timeout: Optional[float] = None,
        store_executor: Optional[ThreadPoolExecutor] = None,
        identity_executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._attendance = attendance
        self._persons = persons
        self._absence_policy = absence_policy
        self._timeout = timeout
        self._store_executor = store_executor or make_executor("attendance-store")
        self._identity_executor = identity_executor or make_executor("identity-lookup")

    @property
    def absence_policy(self) -> AbsencePolicy:
        return self._absence_policy

    def get_daily_stats(self, work_date: date) -> DailyAggregate:
        records = call_with_timeout(
            lambda: self._attendance.query_by_day(work_date),
            timeout=self._timeout,
            operation="Daily attendance query",
            executor=self._store_executor,
        )
        total_persons = call_with_timeout(
            self._persons.count_all,
            timeout=self._timeout,
            operation="Person count",
            executor=self._identity_executor,
        )

        counts = _count_by_status(records)
        present = counts.get(AttendanceStatus.PRESENT, 0)
        late = counts.get(AttendanceStatus.LATE, 0)
        recorded_absent = counts.get(AttendanceStatus.ABSENT, 0)

        # Records may reference persons removed from the profile store since.
        unrecorded = max(int(total_persons) - (present + late + recorded_absent), 0)

        if self._absence_policy == AbsencePolicy.UNRECORDED:
            absent = recorded_absent + unrecorded
        else:
            absent = recorded_absent

        return DailyAggregate(
            work_date=work_date,
            present=present,
            late=late,
            absent=absent,
            recorded_absent=recorded_absent,
            unrecorded=unrecorded,
            total_persons=int(total_persons),
            absence_policy=self._absence_policy,
        )

    def get_trend(self, n: int = DEFAULT_TREND_DAYS, *, end: date) -> TrendSeries:
        n = require_positive_int(n, "days", maximum=MAX_TREND_DAYS)
        return TrendSeries(days=tuple(self.get_daily_stats(d) for d in days_ending(end, n)))

    def get_person_stats(self, person_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> PersonSummary:
        limit = require_positive_int(limit, "limit", maximum=MAX_TREND_DAYS)
        records = call_with_timeout(
            lambda: self._attendance.query_by_person(person_id, limit),
            timeout=self._timeout,
            operation="Person attendance query",
            executor=self._store_executor,
        )
        counts = _count_by_status(records)
        return PersonSummary(
            person_id=person_id,
            present=counts.get(AttendanceStatus.PRESENT, 0),
            late=counts.get(AttendanceStatus.LATE, 0),
            absent=counts.get(AttendanceStatus.ABSENT, 0),
        )
