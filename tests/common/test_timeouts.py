from __future__ import annotations

import threading

import pytest

from attendance_scanner.common.timeouts import call_with_timeout, make_executor
from attendance_scanner.core.constants import COLLABORATOR_WORKERS
from attendance_scanner.core.exceptions import CollaboratorTimeoutError
from attendance_scanner.persons.service import IdentityResolver


def fill(executor, release: threading.Event, workers: int = COLLABORATOR_WORKERS):
    return [executor.submit(release.wait, 5) for _ in range(workers)]


def test_no_timeout_runs_inline():
    caller = threading.current_thread()
    seen = []

    call_with_timeout(lambda: seen.append(threading.current_thread()), timeout=None, operation="x", executor=make_executor("test"))

    assert seen == [caller]


def test_exceptions_propagate_unchanged():
    executor = make_executor("test")

    def boom():
        raise KeyError("nope")

    with pytest.raises(KeyError):
        call_with_timeout(boom, timeout=1.0, operation="boom", executor=executor)


def test_saturated_pool_times_out_its_own_callers():
    executor = make_executor("test", max_workers=2)
    release = threading.Event()
    fill(executor, release, workers=2)

    try:
        with pytest.raises(CollaboratorTimeoutError):
            call_with_timeout(lambda: 1, timeout=0.05, operation="Queued call", executor=executor)
    finally:
        release.set()


def test_lookup_succeeds_while_store_pool_is_saturated(container):
    release = threading.Event()
    stuck = fill(container.store_executor, release)

    try:
        person = container.resolver.resolve("P-001")
        assert person.person_id == "P-001"
        assert container.resolver.count_all() == 3
    finally:
        release.set()

    assert all(f.result(timeout=2) for f in stuck)


def test_resolvers_without_shared_pool_are_independent(persons_repo):
    busy = make_executor("busy", max_workers=1)
    release = threading.Event()
    fill(busy, release, workers=1)

    try:
        assert IdentityResolver(persons_repo, timeout=0.5).resolve("Q-002").person_id == "Q-002"
    finally:
        release.set()
