from __future__ import annotations

from datetime import date, datetime

import pytest

from attendance_scanner.attendance.service import AttendanceService
from attendance_scanner.core.enums import AbsencePolicy, AttendanceStatus
from attendance_scanner.core.exceptions import ValidationError
from attendance_scanner.stats.service import StatisticsAggregator

DAY = date(2026, 3, 2)


def seed(repo, person_id, day, status, hour=8, minute=0):
    return repo.create_if_absent(
        person_id=person_id,
        work_date=day,
        status=status,
        operator_id="op-1",
        recorded_at=datetime(day.year, day.month, day.day, hour, minute),
    ).record


@pytest.fixture
def seeded(attendance_repo):
    seed(attendance_repo, "P-001", DAY, AttendanceStatus.PRESENT, 8, 0)
    seed(attendance_repo, "Q-002", DAY, AttendanceStatus.LATE, 9, 30)
    seed(attendance_repo, "P-001", date(2026, 3, 1), AttendanceStatus.ABSENT, 17, 0)
    return attendance_repo


def test_daily_counts_match_stored_records(seeded, persons_repo):
    stats = StatisticsAggregator(seeded, persons_repo)

    agg = stats.get_daily_stats(DAY)
    records = seeded.query_by_day(DAY)

    assert agg.present == sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    assert agg.late == sum(1 for r in records if r.status == AttendanceStatus.LATE)
    assert agg.absent == sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
    assert (agg.present, agg.late, agg.absent) == (1, 1, 0)
    assert agg.recorded == len(records)
    assert agg.total_persons == 3
    assert agg.unrecorded == 1


def test_daily_stats_are_idempotent(seeded, persons_repo):
    stats = StatisticsAggregator(seeded, persons_repo)

    assert stats.get_daily_stats(DAY) == stats.get_daily_stats(DAY)


def test_unrecorded_policy_counts_missing_persons_as_absent(seeded, persons_repo):
    stats = StatisticsAggregator(seeded, persons_repo, absence_policy=AbsencePolicy.UNRECORDED)

    agg = stats.get_daily_stats(DAY)

    assert agg.absent == 1
    assert agg.recorded_absent == 0
    assert agg.absence_policy == AbsencePolicy.UNRECORDED
    assert agg.to_dict()["absence_policy"] == "unrecorded"


def test_empty_day_under_both_policies(attendance_repo, persons_repo):
    explicit = StatisticsAggregator(attendance_repo, persons_repo).get_daily_stats(DAY)
    unrecorded = StatisticsAggregator(
        attendance_repo, persons_repo, absence_policy=AbsencePolicy.UNRECORDED
    ).get_daily_stats(DAY)

    assert (explicit.present, explicit.late, explicit.absent) == (0, 0, 0)
    assert unrecorded.absent == 3


def test_stats_reflect_new_records_immediately(attendance_repo, persons_repo):
    stats = StatisticsAggregator(attendance_repo, persons_repo)
    assert stats.get_daily_stats(DAY).present == 0

    seed(attendance_repo, "R-003", DAY, AttendanceStatus.PRESENT)

    assert stats.get_daily_stats(DAY).present == 1


def test_trend_is_oldest_first_and_sized(seeded, persons_repo):
    stats = StatisticsAggregator(seeded, persons_repo)

    trend = stats.get_trend(7, end=DAY)

    assert len(trend) == 7
    assert [d.work_date for d in trend][0] == date(2026, 2, 24)
    assert [d.work_date for d in trend][-1] == DAY
    assert trend.days[-2].absent == 1
    assert trend.days[-1] == stats.get_daily_stats(DAY)
    assert trend.to_list()[-1]["label"] == "02/03"


@pytest.mark.parametrize("n", [0, -1, "x", 10_000])
def test_trend_rejects_bad_length(attendance_repo, persons_repo, n):
    with pytest.raises(ValidationError):
        StatisticsAggregator(attendance_repo, persons_repo).get_trend(n, end=DAY)


def test_person_stats(seeded, persons_repo):
    summary = StatisticsAggregator(seeded, persons_repo).get_person_stats("P-001")

    assert (summary.present, summary.late, summary.absent) == (1, 0, 1)
    assert summary.to_dict()["total"] == 2


def test_history_is_newest_first(seeded):
    history = AttendanceService(seeded).get_history("P-001")

    assert [h["date"] for h in history] == ["2026-03-02", "2026-03-01"]
    assert history[1]["label"] == "Absent"


def test_recent_for_day_joins_person_profile(seeded):
    rows = AttendanceService(seeded).recent_for_day(DAY)

    assert [r["person_id"] for r in rows] == ["Q-002", "P-001"]
    assert rows[0]["full_name"] == "Quentin Bamba"
    assert rows[0]["time"] == "09:30:00"
