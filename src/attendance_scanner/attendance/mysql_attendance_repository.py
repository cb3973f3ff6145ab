from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, CreateOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import AttendanceRecord, AttendanceRecordRow, CreateResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        person_id=str(r["person_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        operator_id=str(r["operator_id"]),
        recorded_at=r["recorded_at"],
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """Attendance store on MySQL.

    ``uq_attendance_person_day`` (UNIQUE person_id, work_date) arbitrates
    concurrent inserts: the losing INSERT fails with ER_DUP_ENTRY.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(person_id, work_date, status, operator_id, recorded_at, note)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (person_id, work_date, status.value, operator_id, recorded_at, note),
                )
                attendance_id = int(cur.lastrowid)
        except mysql.connector.errors.IntegrityError as e:
            if is_duplicate_key(e):
                logger.info("Duplicate insert rejected for person=%s day=%s", person_id, work_date)
                return CreateResult(outcome=CreateOutcome.ALREADY_EXISTS)
            raise

        return CreateResult(
            outcome=CreateOutcome.CREATED,
            record=AttendanceRecord(
                attendance_id=attendance_id,
                person_id=person_id,
                work_date=work_date,
                status=status,
                operator_id=operator_id,
                recorded_at=recorded_at,
                note=note,
            ),
        )

    def query_by_day(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, person_id, work_date, status, operator_id, recorded_at, note
                FROM attendance_records
                WHERE work_date=%s
                ORDER BY recorded_at ASC, attendance_id ASC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def query_by_person(self, person_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, person_id, work_date, status, operator_id, recorded_at, note
                FROM attendance_records
                WHERE person_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (person_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def recent_rows(self, work_date: date, limit: int) -> Sequence[AttendanceRecordRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.attendance_id, ar.person_id, p.full_name, p.department,
                    ar.work_date, ar.status, ar.operator_id, ar.recorded_at
                FROM attendance_records ar
                LEFT JOIN persons p ON p.person_id = ar.person_id
                WHERE ar.work_date=%s
                ORDER BY ar.recorded_at DESC, ar.attendance_id DESC
                LIMIT %s
                """,
                (work_date, int(limit)),
            )
            return [
                AttendanceRecordRow(
                    attendance_id=int(r["attendance_id"]),
                    person_id=str(r["person_id"]),
                    full_name=r.get("full_name"),
                    department=r.get("department"),
                    work_date=r["work_date"],
                    status=AttendanceStatus(r["status"]),
                    operator_id=str(r["operator_id"]),
                    recorded_at=r["recorded_at"],
                )
                for r in fetchall(cur)
            ]
