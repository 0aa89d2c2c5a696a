from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..store.connection import StoreConnection
from ..store.http_base import api_call
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


def _to_student(r: dict[str, Any]) -> Optional[Student]:
    if not isinstance(r, dict) or r.get("studentId") in (None, ""):
        logger.warning("Dropping student without id: %r", r)
        return None
    return Student(
        student_id=str(r["studentId"]),
        name=str(r.get("name") or ""),
        roll_no=str(r.get("rollNo") or ""),
        class_id=str(r.get("classId") or ""),
        parent_name=r.get("parentName") or None,
        parent_phone=r.get("parentPhone") or None,
    )


class HttpStudentRepository(StudentRepository):
    def __init__(self, conn: StoreConnection):
        self._conn = conn

    def list_all(self) -> Sequence[Student]:
        rows = api_call(self._conn, "/get_students") or []
        students = (_to_student(r) for r in rows)
        return [s for s in students if s is not None]

    def create(self, student: NewStudent) -> None:
        payload = {
            "name": student.name,
            "rollNo": student.roll_no,
            "classId": student.class_id,
        }
        if student.parent_name:
            payload["parentName"] = student.parent_name
        if student.parent_phone:
            payload["parentPhone"] = student.parent_phone
        api_call(self._conn, "/add_student", "POST", payload)

    def delete(self, student_id: str) -> None:
        api_call(self._conn, "/delete_student", "POST", {"studentId": student_id})
