from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..students.model import Student


@dataclass(frozen=True)
class DashboardSnapshot:
    """A complete roster + record set loaded together; never half-populated."""

    students: tuple[Student, ...] = ()
    records: tuple[AttendanceRecord, ...] = ()
    loaded_at: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self.loaded_at is not None and self.error is None


@dataclass(frozen=True)
class LoadTicket:
    generation: int
