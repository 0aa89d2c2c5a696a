from __future__ import annotations

import pytest

from src.attendance_dashboard.attendance_dashboard.core.exceptions import ValidationError
from src.attendance_dashboard.attendance_dashboard.students.service import StudentService
from tests.fakes import InMemoryStudents


def test_add_student_trims_and_stores(roster):
    repo = InMemoryStudents(roster)
    svc = StudentService(repo)

    created = svc.add_student(name="  Eve Adams ", roll_no="R-09", class_id="10-B", parent_phone="  ")

    assert created.name == "Eve Adams"
    assert created.parent_phone is None
    assert repo.students[-1].name == "Eve Adams"
    assert repo.students[-1].student_id == "S4"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "E", "roll_no": "R-1", "class_id": "10-A"},
        {"name": "Eve", "roll_no": " ", "class_id": "10-A"},
        {"name": "Eve", "roll_no": "R-1", "class_id": ""},
    ],
)
def test_add_student_validation(kwargs):
    repo = InMemoryStudents()

    with pytest.raises(ValidationError):
        StudentService(repo).add_student(**kwargs)

    assert repo.students == []


def test_search_uses_given_snapshot_or_repository(roster):
    repo = InMemoryStudents(roster)
    svc = StudentService(repo)

    assert [s.student_id for s in svc.search("r-0")] == ["S1", "S2", "S3"]
    assert [s.student_id for s in svc.search("CHEN", students=roster[:2])] == []
    assert svc.search("", students=roster) == roster


def test_delete_student(roster):
    repo = InMemoryStudents(roster)

    StudentService(repo).delete_student("S2")

    assert [s.student_id for s in repo.students] == ["S1", "S3"]
