from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import is_iso_date
from ..core.enums import AttendanceStatus
from ..store.connection import StoreConnection
from ..store.http_base import api_call
from .model import AttendanceFilters, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_record(r: dict[str, Any]) -> Optional[AttendanceRecord]:
    """Map a wire record; records the engine cannot bucket are dropped here, with a warning."""
    if not isinstance(r, dict):
        logger.warning("Dropping attendance record: not an object: %r", r)
        return None

    student_id = r.get("studentId")
    if student_id in (None, ""):
        logger.warning("Dropping attendance record %s: missing student id", r.get("attendanceId"))
        return None

    date = r.get("date")
    if not is_iso_date(date):
        logger.warning("Dropping attendance record %s: malformed date %r", r.get("attendanceId"), date)
        return None
    try:
        status = AttendanceStatus.parse(r.get("status"))
    except ValueError:
        logger.warning("Dropping attendance record %s: unknown status %r", r.get("attendanceId"), r.get("status"))
        return None

    return AttendanceRecord(
        attendance_id=str(r.get("attendanceId") or ""),
        student_id=str(student_id),
        date=date,
        status=status,
        name=r.get("name") or None,
        roll_no=r.get("rollNo") or None,
        class_id=r.get("classId") or None,
    )


class HttpAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list(self, filters: Optional[AttendanceFilters] = None) -> Sequence[AttendanceRecord]:
        params = filters.as_params() if filters else {}
        rows = api_call(self._conn, "/get_attendance", params=params) or []
        records = (_to_record(r) for r in rows)
        return [r for r in records if r is not None]

    def mark(self, *, student_id: str, date: str, status: AttendanceStatus) -> None:
        api_call(
            self._conn,
            "/mark_attendance",
            "POST",
            {"studentId": student_id, "date": date, "status": status.value},
        )

    def delete(self, *, student_id: str, date: str) -> None:
        api_call(self._conn, "/delete_attendance", "POST", {"studentId": student_id, "date": date})
