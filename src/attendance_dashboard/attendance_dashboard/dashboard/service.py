from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.concurrency import submit_in_context
from ..common.datetime_utils import Clock, SystemClock, now_local
from ..core.constants import DEFAULT_SERIES_DAYS, UNKNOWN_ERROR_MESSAGE
from ..core.exceptions import DomainError, RecordStoreError
from ..stats import engine
from ..stats.calculator.base import RateCalculator
from ..stats.calculator.standard_calculator import StandardRateCalculator
from ..stats.model import ClassStats, DayBucket, Stats
from ..students.repository import StudentRepository
from .model import DashboardSnapshot
from .state import DashboardState

logger = logging.getLogger(__name__)


class DashboardService:
    """Use case: load the roster + record set and derive dashboard statistics."""

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        *,
        clock: Optional[Clock] = None,
        calculator: Optional[RateCalculator] = None,
        state: Optional[DashboardState] = None,
    ):
        self._students = students
        self._attendance = attendance
        self._clock = clock or SystemClock()
        self._calculator = calculator or StandardRateCalculator()
        self._state = state or DashboardState()

    def load(self) -> DashboardSnapshot:
        """Fetch roster and attendance in parallel; any failure fails the whole load."""
        with ThreadPoolExecutor(max_workers=2) as pool:
            students_f = submit_in_context(pool, self._students.list_all)
            records_f = submit_in_context(pool, self._attendance.list, None)
            students = tuple(students_f.result() or ())
            records = tuple(records_f.result() or ())
        return DashboardSnapshot(students=students, records=records, loaded_at=now_local())

    def refresh(self) -> DashboardSnapshot:
        """Reload and publish a snapshot.

        On failure both collections are reset to empty and the error is re-raised.
        A load that finished after a newer one started is not published, but the caller
        still gets its own complete result back, never the shared state in between.
        """
        ticket = self._state.begin()
        try:
            snapshot = self.load()
        except DomainError as e:
            message = e.message if isinstance(e, RecordStoreError) else (str(e) or UNKNOWN_ERROR_MESSAGE)
            logger.error("Failed to load data: %s", message)
            self._state.fail(ticket, message)
            raise
        except Exception:
            logger.exception("Failed to load data")
            self._state.fail(ticket, UNKNOWN_ERROR_MESSAGE)
            raise

        self._state.publish(ticket, snapshot)
        return snapshot

    def snapshot(self) -> DashboardSnapshot:
        current = self._state.snapshot
        if current.is_loaded:
            return current
        return self.refresh()

    def stats(self, snapshot: Optional[DashboardSnapshot] = None) -> Stats:
        snapshot = snapshot or self.snapshot()
        return engine.global_stats(
            snapshot.students,
            snapshot.records,
            today=self._clock.today(),
            calculator=self._calculator,
        )

    def class_stats(self, class_id: Optional[str], snapshot: Optional[DashboardSnapshot] = None) -> Optional[ClassStats]:
        snapshot = snapshot or self.snapshot()
        return engine.class_stats(snapshot.students, snapshot.records, class_id, calculator=self._calculator)

    def series(
        self,
        window_days: int = DEFAULT_SERIES_DAYS,
        snapshot: Optional[DashboardSnapshot] = None,
    ) -> list[DayBucket]:
        snapshot = snapshot or self.snapshot()
        return engine.daily_series(snapshot.records, today=self._clock.today(), window_days=window_days)

    def class_ids(self, snapshot: Optional[DashboardSnapshot] = None) -> list[str]:
        snapshot = snapshot or self.snapshot()
        return engine.unique_class_ids(snapshot.students)

    def try_refresh(self) -> Optional[str]:
        """Refresh after a successful write; returns the load error message instead of raising."""
        try:
            self.refresh()
        except DomainError as e:
            return e.message if isinstance(e, RecordStoreError) else str(e)
        return None
