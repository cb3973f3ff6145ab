from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from ..common.timeouts import call_with_timeout, make_executor
from ..common.validators import require_max_length, require_non_empty, require_positive_int
from ..core.constants import DEFAULT_SEARCH_LIMIT
from ..core.exceptions import NotFoundError
from .model import Person
from .repository import PersonRepository

logger = logging.getLogger(__name__)

MAX_TOKEN_LENGTH = 64


class IdentityResolver:
    """Use case: map a scanned token to a known person.

    Exact match only. Raises ``NotFoundError`` for an unknown token,
    ``IdentityUnavailableError`` when the store is down and
    ``CollaboratorTimeoutError`` when the lookup exceeds ``timeout`` seconds.
    """

    def __init__(
        self,
        persons: PersonRepository,
        *,
        timeout: Optional[float] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ):
        self._persons = persons
        self._timeout = timeout
        self._executor = executor or make_executor("identity-lookup")

    def resolve(self, token: str) -> Person:
        require_non_empty(token, "Token")
        require_max_length(token, "Token", MAX_TOKEN_LENGTH)

        person = call_with_timeout(
            lambda: self._persons.get_by_token(token),
            timeout=self._timeout,
            operation="Identity lookup",
            executor=self._executor,
        )
        if person is None:
            logger.info("Token %r did not match any person", token)
            raise NotFoundError(f"No person matches token {token!r}")
        return person

    def count_all(self) -> int:
        return call_with_timeout(
            self._persons.count_all,
            timeout=self._timeout,
            operation="Person count",
            executor=self._executor,
        )


class PersonDirectory:
    """Directory browsing for dashboards (substring filter, not used for scans)."""

    def __init__(self, persons: PersonRepository):
        self._persons = persons

    def search(
        self,
        *,
        term: Optional[str] = None,
        department: Optional[str] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> Sequence[Person]:
        term = (term or "").strip() or None
        department = (department or "").strip() or None
        limit = require_positive_int(limit, "limit", maximum=500)
        return self._persons.search(term=term, department=department, limit=limit)
