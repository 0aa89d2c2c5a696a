from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance on one calendar day.

    ``date`` stays an ISO ``YYYY-MM-DD`` string; matching is string-exact.
    The display fields are whatever the store chose to join in and may be stale or missing.
    """

    attendance_id: str
    student_id: str
    date: str
    status: AttendanceStatus
    name: Optional[str] = None
    roll_no: Optional[str] = None
    class_id: Optional[str] = None


@dataclass(frozen=True)
class EnrichedAttendanceRecord:
    """Read-model: a record with display fields re-derived from the roster."""

    attendance_id: str
    student_id: str
    date: str
    status: AttendanceStatus
    name: str
    roll_no: str
    class_id: str


@dataclass(frozen=True)
class AttendanceFilters:
    student_id: Optional[str] = None
    date: Optional[str] = None
    class_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.student_id or self.date or self.class_id)

    def as_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.student_id:
            params["studentId"] = self.student_id
        if self.date:
            params["date"] = self.date
        if self.class_id:
            params["classId"] = self.class_id
        return params


@dataclass(frozen=True)
class MarkOutcome:
    student_id: str
    ok: bool
    message: str = ""


@dataclass(frozen=True)
class BatchResult:
    """Per-student outcomes of one class-wide marking."""

    class_id: str
    date: str
    outcomes: tuple[MarkOutcome, ...]

    @property
    def succeeded(self) -> list[str]:
        return [o.student_id for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[str]:
        return [o.student_id for o in self.outcomes if not o.ok]

    @property
    def all_ok(self) -> bool:
        return not self.failed

    def summary(self) -> str:
        text = f"{len(self.succeeded)} succeeded, {len(self.failed)} failed"
        if self.failed:
            text += ": [" + ", ".join(self.failed) + "]"
        return text
