from __future__ import annotations

import threading
from typing import Iterable, Optional, Sequence

from .model import Person
from .repository import PersonRepository


class InMemoryPersonRepository(PersonRepository):
    """Identity store kept in a dict; used by the ``memory`` backend and tests."""

    def __init__(self, persons: Iterable[Person] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, Person] = {p.person_id: p for p in persons}

    def add(self, person: Person) -> None:
        with self._lock:
            self._by_id[person.person_id] = person

    def get_by_token(self, token: str) -> Optional[Person]:
        with self._lock:
            return self._by_id.get(token)

    def count_all(self) -> int:
        with self._lock:
            return len(self._by_id)

    def search(self, *, term: Optional[str] = None, department: Optional[str] = None, limit: int = 50) -> Sequence[Person]:
        with self._lock:
            items = list(self._by_id.values())

        if term:
            t = term.lower()
            items = [
                p
                for p in items
                if t in p.full_name.lower() or t in (p.email or "").lower() or t in p.person_id.lower()
            ]
        if department:
            items = [p for p in items if p.department == department]

        items.sort(key=lambda p: p.full_name)
        return items[: int(limit)]
