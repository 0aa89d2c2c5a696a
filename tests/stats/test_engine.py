from __future__ import annotations

from datetime import date

import pytest

from src.attendance_dashboard.attendance_dashboard.core.enums import AttendanceStatus
from src.attendance_dashboard.attendance_dashboard.core.exceptions import ValidationError
from src.attendance_dashboard.attendance_dashboard.stats import engine
from src.attendance_dashboard.attendance_dashboard.students.model import Student
from tests.fakes import make_record, make_student


def test_global_stats_empty_inputs_has_zero_rate(fixed_today):
    stats = engine.global_stats([], [], today=fixed_today)

    assert stats.total_students == 0
    assert stats.overall_attendance_rate == 0
    assert stats.today_present == 0
    assert stats.today_absent == 0


def test_global_stats_scenario_two_of_three_present():
    students = [make_student("S1"), make_student("S2"), make_student("S3")]
    records = [
        make_record("S1", "2024-01-01", AttendanceStatus.PRESENT),
        make_record("S2", "2024-01-01", AttendanceStatus.ABSENT),
        make_record("S3", "2024-01-01", AttendanceStatus.PRESENT),
    ]

    stats = engine.global_stats(students, records, today=date(2024, 3, 15))

    assert stats.total_students == 3
    assert stats.overall_attendance_rate == pytest.approx(66.7, abs=0.05)
    assert stats.rate_display == "66.7%"
    assert stats.today_present == 0
    assert stats.today_absent == 0


def test_global_stats_counts_today_and_half_day_weight(fixed_today):
    today = fixed_today.isoformat()
    records = [
        make_record("S1", today, AttendanceStatus.PRESENT),
        make_record("S2", today, AttendanceStatus.HALF_DAY),
        make_record("S3", today, AttendanceStatus.ABSENT),
        make_record("S4", today, AttendanceStatus.EXCUSED),
    ]

    stats = engine.global_stats([], records, today=fixed_today)

    assert stats.present_count == 1.5
    assert stats.overall_attendance_rate == pytest.approx(37.5)
    assert stats.today_present == 2
    assert stats.today_absent == 1


@pytest.mark.parametrize("statuses", [[], [AttendanceStatus.ABSENT] * 3, [AttendanceStatus.PRESENT] * 4])
def test_global_stats_rate_is_bounded(fixed_today, statuses):
    records = [make_record(f"S{i}", "2024-03-01", s) for i, s in enumerate(statuses)]

    stats = engine.global_stats([make_student("S0")], records, today=fixed_today)

    assert 0 <= stats.overall_attendance_rate <= 100
    assert stats.total_students == 1


def test_class_stats_none_when_no_class_selected(roster):
    assert engine.class_stats(roster, [], None) is None
    assert engine.class_stats(roster, [], "") is None


def test_class_stats_unknown_class_is_zero_not_error(roster):
    cs = engine.class_stats(roster, [make_record("S1", "2024-03-01")], "12-Z")

    assert cs.total_students == 0
    assert cs.overall_attendance_rate == 0


def test_class_stats_filters_records_by_their_own_class_field(roster):
    records = [
        make_record("S1", "2024-03-01", AttendanceStatus.PRESENT, class_id="10-A"),
        make_record("S2", "2024-03-01", AttendanceStatus.ABSENT, class_id="10-A"),
        # stale denormalized class on the record wins over the roster
        make_record("S3", "2024-03-01", AttendanceStatus.ABSENT, class_id="10-A"),
        make_record("S1", "2024-03-02", AttendanceStatus.PRESENT, class_id=None),
    ]

    cs = engine.class_stats(roster, records, "10-A")

    assert cs.total_students == 2
    assert cs.total_records == 3
    assert cs.overall_attendance_rate == pytest.approx(100 / 3)


def test_daily_series_window_and_order(fixed_today):
    records = [
        make_record("S1", "2024-03-15", AttendanceStatus.PRESENT),
        make_record("S2", "2024-03-15", AttendanceStatus.ABSENT),
        make_record("S1", "2024-03-09", AttendanceStatus.EXCUSED),
        make_record("S1", "2024-03-08", AttendanceStatus.PRESENT),  # outside window
    ]

    series = engine.daily_series(records, today=fixed_today)

    assert len(series) == 7
    assert [b.date for b in series][0] == "2024-03-09"
    assert series[-1].date == fixed_today.isoformat()
    assert series[-1].label == "Mar 15"
    assert (series[-1].present, series[-1].absent, series[-1].excused) == (1, 1, 0)
    assert series[0].excused == 1
    assert all(b.present >= 0 and b.absent >= 0 and b.excused >= 0 for b in series)
    assert sum(b.present + b.absent + b.excused for b in series[1:-1]) == 0


def test_daily_series_is_deterministic_for_same_day(fixed_today):
    records = [make_record("S1", "2024-03-14")]

    assert engine.daily_series(records, today=fixed_today, window_days=3) == engine.daily_series(
        records, today=fixed_today, window_days=3
    )


@pytest.mark.parametrize("window_days", [0, -3, 367, 800000])
def test_daily_series_rejects_out_of_range_window(fixed_today, window_days):
    with pytest.raises(ValidationError):
        engine.daily_series([], today=fixed_today, window_days=window_days)


def test_daily_series_accepts_a_full_year(fixed_today):
    buckets = engine.daily_series([], today=fixed_today, window_days=366)
    assert len(buckets) == 366
    assert buckets[0].date == "2023-03-15"


def test_unique_class_ids_first_appearance_order():
    students = [make_student("1", class_id="10-A"), make_student("2", class_id="10-B"), make_student("3", class_id="10-A")]

    assert engine.unique_class_ids(students) == ["10-A", "10-B"]
    assert engine.unique_class_ids(students) == ["10-A", "10-B"]


def test_filter_students_empty_query_returns_input(roster):
    assert engine.filter_students(roster, "") == roster
    assert engine.filter_students(roster, None) == roster


def test_filter_students_is_case_insensitive_on_name_and_roll():
    ana = Student("S1", "Ana", "R-77", "10-A")
    bob = Student("S2", "Bob", "X-01", "10-A")

    assert engine.filter_students([ana, bob], "ana") == [ana]
    assert engine.filter_students([ana, bob], "x-0") == [bob]
    assert engine.filter_students([ana, bob], "zzz") == []


def test_has_existing_record_exact_pair():
    records = [make_record("S1", "2024-01-01")]

    assert engine.has_existing_record(records, "S1", "2024-01-01") is True
    assert engine.has_existing_record(records, "S1", "2024-01-02") is False
    assert engine.has_existing_record(records, "S2", "2024-01-01") is False
    assert engine.has_existing_record([], "S1", "2024-01-01") is False


def test_enrich_records_prefers_roster_over_denormalized_copy(roster):
    stale = make_record("S1", "2024-03-01", class_id="9-C")
    orphan = make_record("S9", "2024-03-01", class_id="11-A")

    enriched = engine.enrich_records(roster, [stale, orphan])

    assert (enriched[0].name, enriched[0].roll_no, enriched[0].class_id) == ("Ana Lima", "R-01", "10-A")
    assert enriched[1].class_id == "11-A"
    assert enriched[1].name == ""


def test_engine_does_not_mutate_inputs(roster, fixed_today):
    records = [make_record("S1", "2024-03-15")]
    before = (list(roster), list(records))

    engine.global_stats(roster, records, today=fixed_today)
    engine.class_stats(roster, records, "10-A")
    engine.daily_series(records, today=fixed_today)
    engine.enrich_records(roster, records)

    assert (roster, records) == before
