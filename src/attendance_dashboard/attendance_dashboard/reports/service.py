from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import REPORT_FAILED_MESSAGE
from ..core.exceptions import ReportGenerationError, ValidationError
from ..stats.engine import student_records
from ..students.model import Student
from .generator import ReportEntry, ReportGenerator, StudentReportInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentReport:
    student_id: str
    student_name: str
    content: str


class StudentReportService:
    """Use case: narrative attendance report for one student."""

    def __init__(self, generator: ReportGenerator):
        self._generator = generator

    def generate(
        self,
        *,
        student_id: str,
        students: Sequence[Student],
        records: Sequence[AttendanceRecord],
    ) -> StudentReport:
        student = next((s for s in students if s.student_id == student_id), None)
        if not student:
            raise ValidationError("Student not found")

        history = sorted(student_records(records, student_id), key=lambda r: r.date)
        report_input = StudentReportInput(
            name=student.name,
            class_id=student.class_id,
            attendance=tuple(ReportEntry(date=r.date, status=r.status.value) for r in history),
        )

        try:
            content = self._generator.generate(report_input)
        except ReportGenerationError as e:
            raise ReportGenerationError(REPORT_FAILED_MESSAGE) from e
        except Exception as e:
            logger.exception("Report generation failed for %s", student_id)
            raise ReportGenerationError(REPORT_FAILED_MESSAGE) from e

        return StudentReport(student_id=student.student_id, student_name=student.name, content=content)
