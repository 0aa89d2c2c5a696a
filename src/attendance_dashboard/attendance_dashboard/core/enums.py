from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status as exchanged with the Record Store."""

    PRESENT = "Present"
    ABSENT = "Absent"
    EXCUSED = "Excused"
    HALF_DAY = "Half Day"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        text = value.strip().lower() if isinstance(value, str) else None
        for status in cls:
            if status.value.lower() == text:
                return status
        raise ValueError(f"Unknown attendance status: {value!r}")
