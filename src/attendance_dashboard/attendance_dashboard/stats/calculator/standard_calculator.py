from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import RateCalculator


class StandardRateCalculator(RateCalculator):
    """Standard rule: Present = 1, Half Day = 0.5, Absent/Excused = 0 (still counted in the total)."""

    WEIGHTS = {
        AttendanceStatus.PRESENT: 1.0,
        AttendanceStatus.HALF_DAY: 0.5,
    }

    def present_weight(self, status: AttendanceStatus) -> float:
        return self.WEIGHTS.get(status, 0.0)
