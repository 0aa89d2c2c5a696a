from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..core.constants import REPORT_DISABLED_MESSAGE


@dataclass(frozen=True)
class ReportEntry:
    date: str
    status: str


@dataclass(frozen=True)
class StudentReportInput:
    name: str
    class_id: str
    attendance: tuple[ReportEntry, ...]

    def as_payload(self) -> dict:
        return {
            "student": {"name": self.name, "classId": self.class_id},
            "attendanceRecords": [{"date": e.date, "status": e.status} for e in self.attendance],
        }


class ReportGenerator(Protocol):
    """External narrative-report generator (text-generation service)."""

    def generate(self, report_input: StudentReportInput) -> str:
        raise NotImplementedError


class StaticReportGenerator:
    """Used when no text-generation endpoint is configured."""

    def __init__(self, message: str = REPORT_DISABLED_MESSAGE):
        self._message = message

    def generate(self, report_input: StudentReportInput) -> str:
        return self._message
