"""Aggregation engine.

Pure functions over a ``(students, records)`` snapshot. Nothing here performs I/O,
reads the wall clock, or mutates its inputs; "today" is always passed in.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord, EnrichedAttendanceRecord
from ..common.datetime_utils import format_iso_date, short_label
from ..core.constants import DEFAULT_SERIES_DAYS, MAX_SERIES_DAYS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.model import Student
from .calculator.base import RateCalculator
from .calculator.standard_calculator import StandardRateCalculator
from .model import ClassStats, DayBucket, Stats

_DEFAULT_CALCULATOR = StandardRateCalculator()


def _rate(records: Sequence[AttendanceRecord], calculator: RateCalculator) -> tuple[float, float]:
    present = sum(calculator.present_weight(r.status) for r in records)
    if not records:
        return present, 0.0
    return present, present / len(records) * 100


def global_stats(
    students: Sequence[Student],
    records: Sequence[AttendanceRecord],
    *,
    today: date,
    calculator: Optional[RateCalculator] = None,
) -> Stats:
    calculator = calculator or _DEFAULT_CALCULATOR
    present, rate = _rate(records, calculator)

    today_str = format_iso_date(today)
    todays = [r for r in records if r.date == today_str]

    return Stats(
        total_students=len(students),
        total_records=len(records),
        present_count=present,
        overall_attendance_rate=rate,
        today_present=sum(1 for r in todays if calculator.counts_as_present_today(r.status)),
        today_absent=sum(1 for r in todays if r.status == AttendanceStatus.ABSENT),
    )


def class_stats(
    students: Sequence[Student],
    records: Sequence[AttendanceRecord],
    class_id: Optional[str],
    *,
    calculator: Optional[RateCalculator] = None,
) -> Optional[ClassStats]:
    """Stats for one class, or ``None`` when no class is selected.

    Records are filtered by their own ``class_id`` field, not by the roster.
    """
    if not class_id:
        return None

    calculator = calculator or _DEFAULT_CALCULATOR
    in_class = [s for s in students if s.class_id == class_id]
    class_records = tuple(r for r in records if r.class_id == class_id)
    _, rate = _rate(class_records, calculator)

    return ClassStats(
        class_id=class_id,
        total_students=len(in_class),
        total_records=len(class_records),
        overall_attendance_rate=rate,
        records=class_records,
    )


def daily_series(
    records: Sequence[AttendanceRecord],
    *,
    today: date,
    window_days: int = DEFAULT_SERIES_DAYS,
) -> list[DayBucket]:
    """One bucket per day, oldest first, for the ``window_days`` days ending at ``today``."""
    if not 1 <= window_days <= MAX_SERIES_DAYS:
        raise ValidationError(f"window_days must be between 1 and {MAX_SERIES_DAYS}")

    by_date: dict[str, dict[AttendanceStatus, int]] = {}
    for r in records:
        counts = by_date.setdefault(r.date, {})
        counts[r.status] = counts.get(r.status, 0) + 1

    buckets: list[DayBucket] = []
    for offset in range(window_days - 1, -1, -1):
        day = today - timedelta(days=offset)
        counts = by_date.get(format_iso_date(day), {})
        buckets.append(
            DayBucket(
                date=format_iso_date(day),
                label=short_label(day),
                present=counts.get(AttendanceStatus.PRESENT, 0),
                absent=counts.get(AttendanceStatus.ABSENT, 0),
                excused=counts.get(AttendanceStatus.EXCUSED, 0),
                half_day=counts.get(AttendanceStatus.HALF_DAY, 0),
            )
        )
    return buckets


def unique_class_ids(students: Iterable[Student]) -> list[str]:
    # dict keeps first-appearance order
    return list(dict.fromkeys(s.class_id for s in students))


def filter_students(students: Sequence[Student], query: Optional[str]) -> list[Student]:
    if not query:
        return list(students)
    q = query.lower()
    return [s for s in students if q in s.name.lower() or q in s.roll_no.lower()]


def students_in_class(students: Sequence[Student], class_id: Optional[str]) -> list[Student]:
    if not class_id:
        return []
    return [s for s in students if s.class_id == class_id]


def has_existing_record(records: Iterable[AttendanceRecord], student_id: str, date: str) -> bool:
    """Whether ``(student_id, date)`` is already marked in the loaded record set.

    Advisory only: it sees the snapshot the caller loaded, so two writers racing
    on the same pair can both pass this check.
    """
    return any(r.student_id == student_id and r.date == date for r in records)


def student_records(records: Iterable[AttendanceRecord], student_id: str) -> list[AttendanceRecord]:
    return [r for r in records if r.student_id == student_id]


def enrich_records(
    students: Sequence[Student],
    records: Sequence[AttendanceRecord],
) -> list[EnrichedAttendanceRecord]:
    """Attach display fields from the roster; the store's copy is used only for unknown students."""
    by_id = {s.student_id: s for s in students}
    out: list[EnrichedAttendanceRecord] = []
    for r in records:
        s = by_id.get(r.student_id)
        out.append(
            EnrichedAttendanceRecord(
                attendance_id=r.attendance_id,
                student_id=r.student_id,
                date=r.date,
                status=r.status,
                name=s.name if s else (r.name or ""),
                roll_no=s.roll_no if s else (r.roll_no or ""),
                class_id=s.class_id if s else (r.class_id or ""),
            )
        )
    return out
