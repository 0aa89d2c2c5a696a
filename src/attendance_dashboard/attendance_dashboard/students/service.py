from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_STUDENT_NAME_LENGTH
from ..stats.engine import filter_students
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: manage the roster."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def search(self, query: Optional[str], *, students: Optional[Sequence[Student]] = None) -> list[Student]:
        """Filter ``students`` (or a fresh roster) by name or roll number."""
        if students is None:
            students = self._students.list_all()
        return filter_students(students, query)

    def add_student(
        self,
        *,
        name: str,
        roll_no: str,
        class_id: str,
        parent_name: Optional[str] = None,
        parent_phone: Optional[str] = None,
    ) -> NewStudent:
        student = NewStudent(
            name=require_min_length(name or "", "Name", MIN_STUDENT_NAME_LENGTH),
            roll_no=require_non_empty(roll_no, "Roll number"),
            class_id=require_non_empty(class_id, "Class"),
            parent_name=optional_text(parent_name),
            parent_phone=optional_text(parent_phone),
        )
        self._students.create(student)
        logger.info("Added student %s (roll %s, class %s)", student.name, student.roll_no, student.class_id)
        return student

    def delete_student(self, student_id: str) -> None:
        student_id = require_non_empty(student_id, "Student")
        # Attendance records are not cascaded here; the store owns that decision.
        self._students.delete(student_id)
        logger.info("Deleted student %s", student_id)
