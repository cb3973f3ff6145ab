"""Bounded calls to external collaborators.

Each collaborator (identity lookup, attendance store) gets its own worker
pool, so a hung store cannot starve identity lookups. A call that times out
keeps running in its worker; the caller only stops waiting for it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional, TypeVar

from ..core.constants import COLLABORATOR_WORKERS
from ..core.exceptions import CollaboratorTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_executor(name: str, max_workers: int = COLLABORATOR_WORKERS) -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)


def call_with_timeout(
    fn: Callable[[], T],
    *,
    timeout: Optional[float],
    operation: str,
    executor: ThreadPoolExecutor,
) -> T:
    """Run ``fn`` on ``executor`` and wait at most ``timeout`` seconds.

    ``timeout=None`` calls ``fn`` inline. Exceptions raised by ``fn`` propagate
    unchanged.
    """
    if timeout is None:
        return fn()

    future = executor.submit(fn)
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.warning("%s timed out after %.2fs", operation, timeout)
        raise CollaboratorTimeoutError(f"{operation} timed out after {timeout:g}s")
