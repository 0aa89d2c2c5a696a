from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.attendance_dashboard.attendance_dashboard.common.datetime_utils import FixedClock
from src.attendance_dashboard.attendance_dashboard.students.model import Student
from tests.fakes import FIXED_TODAY


@pytest.fixture
def fixed_today():
    return FIXED_TODAY


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 15, 9, 0, 0)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_TODAY)


@pytest.fixture
def roster() -> list[Student]:
    return [
        Student("S1", "Ana Lima", "R-01", "10-A", "Maria Lima", "555-0101"),
        Student("S2", "Ben Okafor", "R-02", "10-A"),
        Student("S3", "Chen Wei", "R-03", "10-B"),
    ]


@pytest.fixture
def yesterday(fixed_today) -> str:
    return (fixed_today - timedelta(days=1)).isoformat()
