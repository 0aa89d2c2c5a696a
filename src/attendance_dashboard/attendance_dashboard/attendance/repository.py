from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceFilters, AttendanceRecord


class AttendanceRepository(Protocol):
    def list(self, filters: Optional[AttendanceFilters] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def mark(self, *, student_id: str, date: str, status: AttendanceStatus) -> None:
        raise NotImplementedError

    def delete(self, *, student_id: str, date: str) -> None:
        raise NotImplementedError
