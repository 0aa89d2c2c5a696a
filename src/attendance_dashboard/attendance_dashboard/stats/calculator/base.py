from __future__ import annotations

from abc import ABC, abstractmethod

from ...core.enums import AttendanceStatus


class RateCalculator(ABC):
    """Calculator interface (Strategy Pattern for attendance-rate weighting)."""

    @abstractmethod
    def present_weight(self, status: AttendanceStatus) -> float:
        """How much one record with ``status`` contributes to the present count."""
        raise NotImplementedError

    def counts_as_present_today(self, status: AttendanceStatus) -> bool:
        return self.present_weight(status) > 0
