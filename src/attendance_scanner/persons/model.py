from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Person:
    """Domain entity: a person who can be scanned.

    Owned by the external profile system; this package only reads it. The
    ``person_id`` is the token encoded on the person's badge.
    """

    person_id: str
    full_name: str
    department: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "person_id": self.person_id,
            "full_name": self.full_name,
            "department": self.department,
            "email": self.email,
        }
