from __future__ import annotations

import pytest

from src.attendance_dashboard.attendance_dashboard.attendance.model import AttendanceFilters
from src.attendance_dashboard.attendance_dashboard.attendance.service import AttendanceService
from src.attendance_dashboard.attendance_dashboard.core.enums import AttendanceStatus
from src.attendance_dashboard.attendance_dashboard.core.exceptions import DuplicateAttendanceError, ValidationError
from src.attendance_dashboard.attendance_dashboard.students.model import Student
from tests.fakes import InMemoryAttendance, InMemoryStudents, make_record


def _service(clock, records=None, students=None):
    repo = InMemoryAttendance(records, students=InMemoryStudents(students) if students else None)
    return AttendanceService(repo, clock=clock, max_workers=4), repo


def test_mark_rejects_already_marked_pair_before_writing(clock):
    known = [make_record("S1", "2024-01-01")]
    svc, repo = _service(clock, known)

    with pytest.raises(DuplicateAttendanceError):
        svc.mark(student_id="S1", date="2024-01-01", status="Present", known_records=known)

    assert repo.marked == []


def test_mark_writes_new_pair(clock):
    svc, repo = _service(clock)

    svc.mark(student_id="S1", date="2024-03-14", status="absent", known_records=[])

    assert repo.marked == [("S1", "2024-03-14", AttendanceStatus.ABSENT)]


@pytest.mark.parametrize("bad_date", ["2024-3-1", "14/03/2024", "2024-02-30", ""])
def test_mark_rejects_malformed_dates(clock, bad_date):
    svc, _ = _service(clock)

    with pytest.raises(ValidationError):
        svc.mark(student_id="S1", date=bad_date, status="Present", known_records=[])


def test_mark_rejects_future_date_and_unknown_status(clock):
    svc, _ = _service(clock)

    with pytest.raises(ValidationError):
        svc.mark(student_id="S1", date="2024-03-16", status="Present", known_records=[])
    with pytest.raises(ValidationError):
        svc.mark(student_id="S1", date="2024-03-15", status="Late", known_records=[])


def test_mark_class_reports_partial_failures(clock, roster):
    known = [make_record("S2", "2024-03-15")]
    svc, repo = _service(clock, list(known), students=roster)
    extra = roster + [Student("S4", "Dana", "R-04", "10-A")]
    repo.fail_for = {"S4"}

    result = svc.mark_class(
        class_id="10-A",
        date="2024-03-15",
        students=extra,
        known_records=known,
        statuses={"S1": "Excused"},
    )

    assert result.succeeded == ["S1"]
    assert result.failed == ["S2", "S4"]
    assert result.summary() == "1 succeeded, 2 failed: [S2, S4]"
    assert ("S1", "2024-03-15", AttendanceStatus.EXCUSED) in repo.marked
    assert not result.all_ok


def test_mark_class_defaults_to_present_and_flags_outsiders(clock, roster):
    svc, repo = _service(clock, students=roster)

    result = svc.mark_class(
        class_id="10-A",
        date="2024-03-15",
        students=roster,
        known_records=[],
        statuses={"S3": "Absent"},
    )

    assert sorted(result.succeeded) == ["S1", "S2"]
    assert result.failed == ["S3"]
    assert {status for _, _, status in repo.marked} == {AttendanceStatus.PRESENT}


def test_list_records_validates_date_filter(clock):
    svc, repo = _service(clock, [make_record("S1", "2024-03-01")])

    with pytest.raises(ValidationError):
        svc.list_records(AttendanceFilters(date="March 1"))

    assert len(svc.list_records(AttendanceFilters(student_id="S1"))) == 1
    assert repo.last_filters.student_id == "S1"


def test_delete_removes_pair(clock):
    svc, repo = _service(clock, [make_record("S1", "2024-03-01"), make_record("S2", "2024-03-01")])

    svc.delete(student_id="S1", date="2024-03-01")

    assert [r.student_id for r in repo.records] == ["S2"]
