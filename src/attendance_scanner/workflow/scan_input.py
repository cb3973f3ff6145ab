from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

from ..core.exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)


class ScanInput(Protocol):
    """The scan-input resource (camera / reader channel) of one operator.

    A session opens it on ``start_scan`` and closes it on every exit from the
    active session.
    """

    @property
    def is_open(self) -> bool:
        raise NotImplementedError

    def open(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


ScanInputFactory = Callable[[str], ScanInput]


class ScanInputLease:
    """Server-side lease standing for a client's scanner.

    The physical camera runs in the operator's browser; the lease records
    that exactly one session currently owns the operator's scanner channel.
    """

    def __init__(self, operator_id: str):
        self.operator_id = operator_id
        self._open = False
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        with self._lock:
            if self._open:
                raise InvalidTransitionError(f"Scanner of operator {self.operator_id} is already open")
            self._open = True
        logger.debug("Scanner lease opened for operator=%s", self.operator_id)

    def close(self) -> None:
        with self._lock:
            was_open, self._open = self._open, False
        if was_open:
            logger.debug("Scanner lease closed for operator=%s", self.operator_id)
