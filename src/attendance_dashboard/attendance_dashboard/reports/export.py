from __future__ import annotations

import csv
import io
from typing import Sequence

import pandas as pd
from fpdf import FPDF

from ..attendance.model import EnrichedAttendanceRecord
from ..common.datetime_utils import long_label

HISTORY_COLUMNS = ["Date", "Student Name", "Roll No", "Class", "Status"]
HISTORY_WIDTHS = [35, 60, 30, 30, 35]


def _latin1(value) -> str:
    # Core PDF fonts only cover latin-1; other characters (e.g. Cyrillic, CJK names) print as "?".
    return str(value or "").encode("latin-1", "replace").decode("latin-1")


def _history_rows(records: Sequence[EnrichedAttendanceRecord]) -> list[list[str]]:
    return [[long_label(r.date), r.name, r.roll_no, r.class_id, r.status.value] for r in records]


def attendance_history_pdf(records: Sequence[EnrichedAttendanceRecord]) -> bytes:
    pdf = FPDF()
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, "Attendance History")
    pdf.ln(12)

    pdf.set_font("Helvetica", "B", 10)
    for title, width in zip(HISTORY_COLUMNS, HISTORY_WIDTHS):
        pdf.cell(width, 8, title, border=1, align="C")
    pdf.ln()

    pdf.set_font("Helvetica", size=9)
    for row in _history_rows(records):
        for item, width in zip(row, HISTORY_WIDTHS):
            pdf.cell(width, 7, _latin1(item)[:40], border=1)
        pdf.ln()

    return bytes(pdf.output())


def student_report_pdf(student_name: str, content: str) -> bytes:
    pdf = FPDF()
    pdf.add_page()

    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, _latin1(f"Attendance Report for {student_name}"))
    pdf.ln(14)

    pdf.set_font("Helvetica", size=11)
    pdf.multi_cell(0, 6, _latin1(content))

    return bytes(pdf.output())


def attendance_history_xlsx(records: Sequence[EnrichedAttendanceRecord]) -> bytes:
    df = pd.DataFrame(_history_rows(records), columns=HISTORY_COLUMNS)
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Attendance")
    return out.getvalue()


def attendance_history_csv(records: Sequence[EnrichedAttendanceRecord]) -> bytes:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(["date", "student_id", "name", "roll_no", "class_id", "status"])
    for r in records:
        writer.writerow([r.date, r.student_id, r.name, r.roll_no, r.class_id, r.status.value])
    return out.getvalue().encode("utf-8-sig")
