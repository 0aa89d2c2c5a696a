from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping, Optional, Sequence

from ..common.concurrency import submit_in_context
from ..common.datetime_utils import Clock, SystemClock, parse_iso_date
from ..common.validators import require_iso_date, require_non_empty
from ..core.constants import DEFAULT_BATCH_WORKERS
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, DuplicateAttendanceError, ValidationError
from ..stats.engine import has_existing_record, students_in_class
from ..students.model import Student
from .model import AttendanceFilters, AttendanceRecord, BatchResult, MarkOutcome
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ALREADY_MARKED_MESSAGE = "Attendance for this student has already been marked on this day."


def _coerce_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus.parse(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        clock: Optional[Clock] = None,
        max_workers: int = DEFAULT_BATCH_WORKERS,
    ):
        self._attendance = attendance
        self._clock = clock or SystemClock()
        self._max_workers = max(int(max_workers), 1)

    def list_records(self, filters: Optional[AttendanceFilters] = None) -> Sequence[AttendanceRecord]:
        if filters and filters.date:
            require_iso_date(filters.date)
        return self._attendance.list(filters)

    def _validate_date(self, date: str) -> str:
        require_iso_date(date)
        if parse_iso_date(date) > self._clock.today():
            raise ValidationError("Attendance cannot be marked for a future date")
        return date

    def mark(
        self,
        *,
        student_id: str,
        date: str,
        status,
        known_records: Iterable[AttendanceRecord],
    ) -> None:
        """Mark one student, refusing pairs already present in ``known_records``.

        The duplicate check is best-effort: it only sees the caller's loaded snapshot.
        """
        student_id = require_non_empty(student_id, "Student")
        date = self._validate_date(date)
        status = _coerce_status(status)

        if has_existing_record(known_records, student_id, date):
            raise DuplicateAttendanceError(ALREADY_MARKED_MESSAGE)

        self._attendance.mark(student_id=student_id, date=date, status=status)
        logger.info("Marked %s %s on %s", student_id, status.value, date)

    def mark_class(
        self,
        *,
        class_id: str,
        date: str,
        students: Sequence[Student],
        known_records: Sequence[AttendanceRecord],
        statuses: Optional[Mapping[str, object]] = None,
        default_status: AttendanceStatus | str = AttendanceStatus.PRESENT,
    ) -> BatchResult:
        """Mark every student of ``class_id`` in one batch.

        Students without an explicit entry in ``statuses`` get ``default_status``.
        Writes run concurrently; each student gets its own outcome, nothing is rolled back.
        """
        class_id = require_non_empty(class_id, "Class")
        date = self._validate_date(date)
        statuses = dict(statuses or {})

        roster = students_in_class(students, class_id)
        roster_ids = {s.student_id for s in roster}

        outcomes: dict[str, MarkOutcome] = {}
        pending: list[tuple[str, AttendanceStatus]] = []

        for sid in statuses:
            if sid not in roster_ids:
                outcomes[sid] = MarkOutcome(sid, False, f"Student is not in class {class_id}")

        for s in roster:
            try:
                status = _coerce_status(statuses.get(s.student_id, default_status))
            except ValidationError as e:
                outcomes[s.student_id] = MarkOutcome(s.student_id, False, str(e))
                continue
            if has_existing_record(known_records, s.student_id, date):
                outcomes[s.student_id] = MarkOutcome(s.student_id, False, ALREADY_MARKED_MESSAGE)
                continue
            pending.append((s.student_id, status))

        if pending:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(pending))) as pool:
                futures = {
                    sid: submit_in_context(pool, self._attendance.mark, student_id=sid, date=date, status=status)
                    for sid, status in pending
                }
                for sid, future in futures.items():
                    try:
                        future.result()
                        outcomes[sid] = MarkOutcome(sid, True)
                    except DomainError as e:
                        outcomes[sid] = MarkOutcome(sid, False, str(e))

        ordered = [outcomes[s.student_id] for s in roster if s.student_id in outcomes]
        ordered += [o for sid, o in outcomes.items() if sid not in roster_ids]
        result = BatchResult(class_id=class_id, date=date, outcomes=tuple(ordered))

        if result.all_ok:
            logger.info("Class %s on %s: %s", class_id, date, result.summary())
        else:
            logger.warning("Class %s on %s: %s", class_id, date, result.summary())
        return result

    def delete(self, *, student_id: str, date: str) -> None:
        student_id = require_non_empty(student_id, "Student")
        require_iso_date(date)
        self._attendance.delete(student_id=student_id, date=date)
        logger.info("Deleted attendance of %s on %s", student_id, date)
