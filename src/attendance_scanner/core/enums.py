from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Presence status stored on every attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class AbsencePolicy(str, Enum):
    """How daily statistics count absences.

    EXPLICIT: only records classified ``absent`` (scanned after the late cutoff).
    UNRECORDED: explicit absences plus every known person with no record that day.
    """

    EXPLICIT = "explicit"
    UNRECORDED = "unrecorded"


class StoreBackend(str, Enum):
    MYSQL = "mysql"
    MEMORY = "memory"


class CreateOutcome(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class WorkflowState(str, Enum):
    """States of an operator scan session."""

    IDLE = "idle"
    SCANNING = "scanning"
    PENDING_CONFIRMATION = "pending_confirmation"
    RECORDING = "recording"
    RECORDED = "recorded"
    CANCELLED = "cancelled"
    ERROR = "error"


class WorkflowEventKind(str, Enum):
    """Events emitted to the presentation layer."""

    SCAN_STARTED = "scan_started"
    SCAN_STOPPED = "scan_stopped"
    CANDIDATE_READY = "candidate_ready"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RECORDED = "recorded"
    FAILED = "failed"
