from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..attendance.strategies.base import StatusDecision
from ..core.enums import WorkflowEventKind
from ..persons.model import Person


@dataclass(frozen=True)
class ScanEvent:
    """One decoded scan. Lives only inside a single workflow run."""

    token: str
    scanned_at: datetime
    operator_id: str


@dataclass(frozen=True)
class Candidate:
    """A resolved and classified scan waiting for the operator's decision."""

    scan: ScanEvent
    person: Person
    decision: StatusDecision
    already_recorded: Optional[bool] = None

    @property
    def work_date(self) -> date:
        return self.scan.scanned_at.date()

    def to_dict(self) -> dict:
        return {
            "person": self.person.to_dict(),
            "status": self.decision.status.value,
            "note": self.decision.note,
            "scanned_at": self.scan.scanned_at.isoformat(timespec="seconds"),
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "already_recorded": self.already_recorded,
        }


@dataclass(frozen=True)
class WorkflowEvent:
    """Event emitted to the presentation layer; ``seq`` increases per session."""

    seq: int
    kind: WorkflowEventKind
    operator_id: str
    at: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "seq": self.seq,
            "kind": self.kind.value,
            "operator_id": self.operator_id,
            "at": self.at.isoformat(timespec="seconds"),
            "payload": dict(self.payload),
        }
