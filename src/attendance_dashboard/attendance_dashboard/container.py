from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .attendance.http_attendance_repository import HttpAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.model import AuthConfig
from .auth.service import AuthService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_BATCH_WORKERS
from .dashboard.service import DashboardService
from .reports.generator import ReportGenerator, StaticReportGenerator
from .reports.http_report_generator import HttpReportGenerator, ReportConfig
from .reports.service import StudentReportService
from .stats.calculator.standard_calculator import StandardRateCalculator
from .store.connection import StoreConfig, StoreConnection
from .students.http_student_repository import HttpStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    clock: Clock

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    student_service: StudentService
    attendance_service: AttendanceService
    dashboard_service: DashboardService
    report_service: StudentReportService


def build_report_generator(report_config: dict, *, session: Optional[requests.Session] = None) -> ReportGenerator:
    endpoint = (report_config or {}).get("endpoint")
    if not endpoint:
        return StaticReportGenerator()
    return HttpReportGenerator(
        ReportConfig(
            endpoint=str(endpoint),
            api_key=report_config.get("api_key"),
            timeout=float(report_config.get("timeout", 30)),
        ),
        session=session,
    )


def build_services(
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    auth_service: AuthService,
    report_generator: ReportGenerator,
    clock: Optional[Clock] = None,
    batch_max_workers: int = DEFAULT_BATCH_WORKERS,
) -> Container:
    clock = clock or SystemClock()
    calculator = StandardRateCalculator()

    return Container(
        clock=clock,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        auth_service=auth_service,
        student_service=StudentService(students_repo),
        attendance_service=AttendanceService(attendance_repo, clock=clock, max_workers=batch_max_workers),
        dashboard_service=DashboardService(students_repo, attendance_repo, clock=clock, calculator=calculator),
        report_service=StudentReportService(report_generator),
    )


def build_container(
    *,
    store_config: dict,
    auth_config: dict,
    report_config: Optional[dict] = None,
    batch_max_workers: int = DEFAULT_BATCH_WORKERS,
    clock: Optional[Clock] = None,
) -> Container:
    conn = StoreConnection(
        StoreConfig(
            base_url=str(store_config["base_url"]),
            timeout=float(store_config.get("timeout", 15)),
        ),
    )

    auth_service = AuthService(
        AuthConfig(
            authorize_url=str(auth_config["authorize_url"]),
            token_url=str(auth_config["token_url"]),
            client_id=str(auth_config["client_id"]),
            redirect_uri=str(auth_config["redirect_uri"]),
            client_secret=auth_config.get("client_secret"),
        )
    )

    return build_services(
        students_repo=HttpStudentRepository(conn),
        attendance_repo=HttpAttendanceRepository(conn),
        auth_service=auth_service,
        report_generator=build_report_generator(report_config or {}),
        clock=clock,
        batch_max_workers=batch_max_workers,
    )
