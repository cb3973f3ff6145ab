from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import IdentityUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import PersonRepository


def _to_person(row: dict) -> Person:
    return Person(
        person_id=str(row["person_id"]),
        full_name=row["full_name"],
        department=row.get("department"),
        email=row.get("email"),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_token(self, token: str) -> Optional[Person]:
        with db_cursor(self._conn_factory, unavailable=IdentityUnavailableError) as (_, cur):
            # BINARY keeps the match exact (no case or trailing-space folding).
            cur.execute(
                """
                SELECT person_id, full_name, department, email
                FROM persons
                WHERE person_id = BINARY %s
                """,
                (token,),
            )
            row = fetchone(cur)
            return _to_person(row) if row else None

    def count_all(self) -> int:
        with db_cursor(self._conn_factory, unavailable=IdentityUnavailableError) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM persons")
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def search(self, *, term: Optional[str] = None, department: Optional[str] = None, limit: int = 50) -> Sequence[Person]:
        clauses = ["1=1"]
        params: list[object] = []

        if term:
            like = f"%{term.lower()}%"
            clauses.append("(LOWER(full_name) LIKE %s OR LOWER(COALESCE(email, '')) LIKE %s OR LOWER(person_id) LIKE %s)")
            params.extend([like, like, like])
        if department:
            clauses.append("department=%s")
            params.append(department)

        params.append(int(limit))
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory, unavailable=IdentityUnavailableError) as (_, cur):
            cur.execute(
                f"""
                SELECT person_id, full_name, department, email
                FROM persons
                WHERE {where}
                ORDER BY full_name ASC
                LIMIT %s
                """,
                tuple(params),
            )
            return [_to_person(r) for r in fetchall(cur)]
