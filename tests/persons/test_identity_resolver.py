from __future__ import annotations

import threading

import pytest

from attendance_scanner.core.exceptions import (
    CollaboratorTimeoutError,
    IdentityUnavailableError,
    NotFoundError,
    ValidationError,
)
from attendance_scanner.persons.memory_person_repository import InMemoryPersonRepository
from attendance_scanner.persons.service import IdentityResolver, PersonDirectory


class DownPersonRepository(InMemoryPersonRepository):
    def get_by_token(self, token):
        raise IdentityUnavailableError("Database unavailable: connection refused")


class SlowPersonRepository(InMemoryPersonRepository):
    def __init__(self, persons=()):
        super().__init__(persons)
        self.release = threading.Event()

    def get_by_token(self, token):
        self.release.wait(timeout=5)
        return super().get_by_token(token)


def test_resolve_known_token(persons_repo):
    resolver = IdentityResolver(persons_repo, timeout=1.0)

    person = resolver.resolve("P-001")

    assert person.full_name == "Paul Atta"
    assert person.department == "Sciences"


@pytest.mark.parametrize("token", ["X-999", "p-001", "P-00", "P-0011", " P-001"])
def test_resolve_requires_exact_match(persons_repo, token):
    resolver = IdentityResolver(persons_repo)

    with pytest.raises(NotFoundError) as exc:
        resolver.resolve(token)

    assert exc.value.reason == "not_found"
    assert not exc.value.retryable


@pytest.mark.parametrize("token", ["", "   ", None, "x" * 65])
def test_resolve_rejects_malformed_token(persons_repo, token):
    with pytest.raises(ValidationError):
        IdentityResolver(persons_repo).resolve(token)


def test_unavailable_store_is_distinct_from_not_found(persons_repo):
    resolver = IdentityResolver(DownPersonRepository())

    with pytest.raises(IdentityUnavailableError) as exc:
        resolver.resolve("P-001")

    assert exc.value.retryable
    assert exc.value.reason == "identity_unavailable"


def test_slow_lookup_times_out(persons_repo):
    repo = SlowPersonRepository()
    resolver = IdentityResolver(repo, timeout=0.05)

    try:
        with pytest.raises(CollaboratorTimeoutError):
            resolver.resolve("P-001")
    finally:
        repo.release.set()


def test_count_all(persons_repo):
    assert IdentityResolver(persons_repo, timeout=1.0).count_all() == 3


def test_directory_search_by_name_email_or_id(persons_repo):
    directory = PersonDirectory(persons_repo)

    assert [p.person_id for p in directory.search(term="bamba")] == ["Q-002"]
    assert [p.person_id for p in directory.search(term="rokia@")] == ["R-003"]
    assert [p.person_id for p in directory.search(term="p-001")] == ["P-001"]


def test_directory_filters_department_and_sorts_by_name(persons_repo):
    directory = PersonDirectory(persons_repo)

    found = directory.search(department="Sciences")

    assert [p.full_name for p in found] == ["Paul Atta", "Quentin Bamba"]


def test_directory_blank_filters_return_everyone(persons_repo):
    assert len(PersonDirectory(persons_repo).search(term="  ", department="")) == 3


def test_directory_rejects_bad_limit(persons_repo):
    with pytest.raises(ValidationError):
        PersonDirectory(persons_repo).search(limit=0)
