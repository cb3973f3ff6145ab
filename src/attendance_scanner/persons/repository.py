from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person


class PersonRepository(Protocol):
    """Read-only interface over the identity store.

    Implementations raise ``IdentityUnavailableError`` when the store cannot be
    reached, and return ``None`` for unknown tokens.
    """

    def get_by_token(self, token: str) -> Optional[Person]:
        """Exact match of ``token`` against the stable person identifier."""

        raise NotImplementedError

    def count_all(self) -> int:
        raise NotImplementedError

    def search(self, *, term: Optional[str] = None, department: Optional[str] = None, limit: int = 50) -> Sequence[Person]:
        raise NotImplementedError
