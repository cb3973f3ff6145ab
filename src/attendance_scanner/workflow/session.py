from __future__ import annotations

import logging
import threading
from collections import deque
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from ..attendance.model import AttendancePolicy, AttendanceRecord, NewAttendanceRecord
from ..attendance.policy import decide
from ..attendance.recorder import AttendanceRecorder
from ..core.constants import EVENT_BUFFER_SIZE
from ..core.enums import WorkflowEventKind, WorkflowState
from ..core.exceptions import DomainError, InvalidTransitionError
from ..persons.service import IdentityResolver
from .model import Candidate, ScanEvent, WorkflowEvent
from .scan_input import ScanInput, ScanInputFactory, ScanInputLease

logger = logging.getLogger(__name__)

EventListener = Callable[[WorkflowEvent], None]

INTERNAL_ERROR = "internal_error"


class ScanSession:
    """Confirmation workflow of one operator.

    Idle -> Scanning -> PendingConfirmation -> Recording -> Recorded, with
    Cancelled and Error reachable from PendingConfirmation / Recording.
    Recorded, Cancelled and Error hand control straight back to Scanning; the
    scan input stays owned by this session until ``stop_scan`` or ``close``.

    Only one scan is in flight at a time: tokens arriving while another token
    is being resolved, or while a candidate is pending or being recorded, are
    ignored. The state lock is never held across a collaborator call.
    """

    def __init__(
        self,
        operator_id: str,
        *,
        resolver: IdentityResolver,
        recorder: AttendanceRecorder,
        policy: AttendancePolicy,
        clock: Callable[[], datetime],
        scan_input_factory: ScanInputFactory = ScanInputLease,
        listeners: Iterable[EventListener] = (),
        buffer_size: int = EVENT_BUFFER_SIZE,
    ):
        self.operator_id = operator_id
        self._resolver = resolver
        self._recorder = recorder
        self._policy = policy
        self._clock = clock
        self._scan_input_factory = scan_input_factory
        self._listeners = list(listeners)

        self._lock = threading.Lock()
        self._state = WorkflowState.IDLE
        self._input: Optional[ScanInput] = None
        self._candidate: Optional[Candidate] = None
        self._in_flight: Optional[int] = None
        self._attempts = 0

        self._events: deque[WorkflowEvent] = deque(maxlen=buffer_size)
        self._seq = 0
        self._last_error: Optional[dict] = None
        self._last_record: Optional[AttendanceRecord] = None

    # ----- queries -----

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def candidate(self) -> Optional[Candidate]:
        return self._candidate

    @property
    def scanner_open(self) -> bool:
        return self._input is not None and self._input.is_open

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "operator_id": self.operator_id,
                "state": self._state.value,
                "scanner_open": self.scanner_open,
                "busy": self._in_flight is not None,
                "candidate": self._candidate.to_dict() if self._candidate else None,
                "last_error": dict(self._last_error) if self._last_error else None,
                "last_record": self._last_record.to_dict() if self._last_record else None,
                "last_seq": self._seq,
            }

    def events_after(self, seq: int = 0) -> list[WorkflowEvent]:
        with self._lock:
            return [e for e in self._events if e.seq > seq]

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    # ----- commands -----

    def start_scan(self) -> None:
        with self._lock:
            self._require(WorkflowState.IDLE, "start scanning")
            scan_input = self._scan_input_factory(self.operator_id)
            scan_input.open()
            self._input = scan_input
            self._state = WorkflowState.SCANNING
            events = [self._emit(WorkflowEventKind.SCAN_STARTED)]
        logger.info("Operator %s started scanning", self.operator_id)
        self._notify(events)

    def stop_scan(self) -> None:
        with self._lock:
            if self._state == WorkflowState.RECORDING:
                raise InvalidTransitionError("Cannot stop while a record is being saved")
            if self._state == WorkflowState.IDLE:
                return

            events = []
            if self._state == WorkflowState.PENDING_CONFIRMATION:
                events.append(self._drop_candidate("scan stopped"))
            events.extend(self._shutdown())
        logger.info("Operator %s stopped scanning", self.operator_id)
        self._notify(events)

    def submit_token(self, token: str) -> Optional[Candidate]:
        """Handle a decoded token from the scan input.

        Returns the candidate now awaiting confirmation, or ``None`` when the
        token was ignored because another scan is in flight. Resolution errors
        are emitted as ``failed`` and re-raised; the session stays Scanning.
        The candidate also says whether the person already has a record that
        day; that flag is advisory, the duplicate is still decided on confirm.
        """
        with self._lock:
            if self._state == WorkflowState.IDLE:
                raise InvalidTransitionError("Scanner is not started")
            if self._state != WorkflowState.SCANNING or self._in_flight is not None:
                logger.debug("Operator %s: token ignored in state %s", self.operator_id, self._state.value)
                return None

            self._attempts += 1
            attempt = self._attempts
            self._in_flight = attempt
            scan = ScanEvent(token=token, scanned_at=self._clock(), operator_id=self.operator_id)

        try:
            person = self._resolver.resolve(token)
            decision = decide(scan.scanned_at, self._policy)
            already_recorded = self._recorder.already_recorded(person.person_id, scan.scanned_at.date())
        except Exception as e:
            with self._lock:
                current = self._in_flight == attempt
                if current:
                    self._in_flight = None
                events = [self._failure_event(e, stage="resolve")] if current else []
            self._notify(events)
            raise

        with self._lock:
            if self._in_flight != attempt or self._state != WorkflowState.SCANNING:
                logger.info("Operator %s: discarding scan of %s after stop", self.operator_id, person.person_id)
                return None
            self._in_flight = None
            self._candidate = Candidate(scan=scan, person=person, decision=decision, already_recorded=already_recorded)
            self._state = WorkflowState.PENDING_CONFIRMATION
            events = [self._emit(WorkflowEventKind.CANDIDATE_READY, **self._candidate.to_dict())]
            candidate = self._candidate
        self._notify(events)
        return candidate

    def confirm(self) -> AttendanceRecord:
        """Persist the pending candidate.

        Persistence errors move the session through Error back to Scanning and
        are re-raised to the caller.
        """
        with self._lock:
            self._require(WorkflowState.PENDING_CONFIRMATION, "confirm")
            candidate = self._candidate
            if candidate is None:
                raise InvalidTransitionError("No candidate awaiting confirmation")
            self._state = WorkflowState.RECORDING
            events = [self._emit(WorkflowEventKind.CONFIRMED, person_id=candidate.person.person_id)]
        self._notify(events)

        new = NewAttendanceRecord(
            person_id=candidate.person.person_id,
            work_date=candidate.work_date,
            status=candidate.decision.status,
            operator_id=self.operator_id,
            recorded_at=candidate.scan.scanned_at,
            note=candidate.decision.note,
        )
        try:
            record = self._recorder.create(new)
        except Exception as e:
            with self._lock:
                self._state = WorkflowState.ERROR
                self._candidate = None
                events = [self._failure_event(e, stage="record")]
                self._resume_scanning()
            self._notify(events)
            raise

        with self._lock:
            self._state = WorkflowState.RECORDED
            self._candidate = None
            self._last_record = record
            self._last_error = None
            events = [self._emit(WorkflowEventKind.RECORDED, record=record.to_dict())]
            self._resume_scanning()
        self._notify(events)
        return record

    def cancel(self) -> None:
        with self._lock:
            if self._state == WorkflowState.RECORDING:
                raise InvalidTransitionError("Cannot cancel once recording has started")
            self._require(WorkflowState.PENDING_CONFIRMATION, "cancel")
            events = [self._drop_candidate("operator cancelled")]
            self._resume_scanning()
        self._notify(events)

    def close(self) -> None:
        """Release the scan input whatever the state (session teardown)."""
        with self._lock:
            if self._state == WorkflowState.IDLE and self._input is None:
                return
            self._candidate = None
            self._in_flight = None
            events = self._shutdown()
        self._notify(events)

    def __enter__(self) -> "ScanSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ----- internals (call with self._lock held) -----

    def _require(self, expected: WorkflowState, action: str) -> None:
        if self._state != expected:
            raise InvalidTransitionError(f"Cannot {action} in state {self._state.value}")

    def _emit(self, kind: WorkflowEventKind, **payload: Any) -> WorkflowEvent:
        self._seq += 1
        event = WorkflowEvent(seq=self._seq, kind=kind, operator_id=self.operator_id, at=self._clock(), payload=payload)
        self._events.append(event)
        return event

    def _failure_event(self, error: BaseException, *, stage: str) -> WorkflowEvent:
        if isinstance(error, DomainError):
            reason, retryable = error.reason, error.retryable
            logger.warning("Operator %s: %s failed (%s): %s", self.operator_id, stage, reason, error)
        else:
            reason, retryable = INTERNAL_ERROR, False
            logger.exception("Operator %s: unexpected error during %s", self.operator_id, stage)

        self._last_error = {"reason": reason, "message": str(error), "retryable": retryable, "stage": stage}
        return self._emit(WorkflowEventKind.FAILED, **self._last_error)

    def _drop_candidate(self, why: str) -> WorkflowEvent:
        candidate = self._candidate
        self._candidate = None
        self._state = WorkflowState.CANCELLED
        return self._emit(
            WorkflowEventKind.CANCELLED,
            person_id=candidate.person.person_id if candidate else None,
            why=why,
        )

    def _resume_scanning(self) -> None:
        self._state = WorkflowState.SCANNING if self.scanner_open else WorkflowState.IDLE

    def _shutdown(self) -> list[WorkflowEvent]:
        scan_input, self._input = self._input, None
        self._in_flight = None
        self._state = WorkflowState.IDLE
        if scan_input is not None:
            scan_input.close()
        return [self._emit(WorkflowEventKind.SCAN_STOPPED)]

    def _notify(self, events: list[WorkflowEvent]) -> None:
        for event in events:
            for listener in list(self._listeners):
                listener(event)


SessionFactory = Callable[[str], ScanSession]


class ScanSessionRegistry:
    """One ScanSession per operator.

    Sessions are created only when an operator opens a scanner; lookups for an
    unknown operator never register anything.
    """

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory
        self._sessions: dict[str, ScanSession] = {}
        self._lock = threading.Lock()

    def find(self, operator_id: str) -> Optional[ScanSession]:
        with self._lock:
            return self._sessions.get(operator_id)

    def open(self, operator_id: str) -> ScanSession:
        with self._lock:
            session = self._sessions.get(operator_id)
            if session is None:
                session = self._session_factory(operator_id)
                self._sessions[operator_id] = session
            return session

    def operators(self) -> list[str]:
        with self._lock:
            return sorted(self._sessions)

    def close_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
        for session in sessions:
            session.close()


def idle_snapshot(operator_id: str) -> dict:
    """State of an operator that never opened a scanner."""
    return {
        "operator_id": operator_id,
        "state": WorkflowState.IDLE.value,
        "scanner_open": False,
        "busy": False,
        "candidate": None,
        "last_error": None,
        "last_record": None,
        "last_seq": 0,
    }
