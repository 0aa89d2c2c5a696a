from __future__ import annotations

from dataclasses import dataclass

from ..attendance.model import AttendanceRecord


@dataclass(frozen=True)
class Stats:
    total_students: int
    total_records: int
    present_count: float
    overall_attendance_rate: float
    today_present: int
    today_absent: int

    @property
    def rate_display(self) -> str:
        return f"{self.overall_attendance_rate:.1f}%"


@dataclass(frozen=True)
class ClassStats:
    class_id: str
    total_students: int
    total_records: int
    overall_attendance_rate: float
    records: tuple[AttendanceRecord, ...]

    @property
    def rate_display(self) -> str:
        return f"{self.overall_attendance_rate:.1f}%"


@dataclass(frozen=True)
class DayBucket:
    date: str
    label: str
    present: int
    absent: int
    excused: int
    half_day: int = 0
