from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.absences import AbsenceGenerator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_TOKEN_TTL_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .reports.exporters.csv_exporter import CsvRecordsExporter
from .reports.exporters.excel import AttendanceWorkbookExporter, SimpleWorkbookExporter
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    absence_generator: AbsenceGenerator
    report_service: AttendanceReportService

    workbook_exporter: AttendanceWorkbookExporter
    simple_workbook_exporter: SimpleWorkbookExporter
    csv_exporter: CsvRecordsExporter


def wire_services(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    token_secret: str,
    token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Assemble services over any repository implementation (MySQL or in-memory)."""
    tokens = TokenService(token_secret, ttl_hours=token_ttl_hours)

    return Container(
        conn=conn,
        users_repo=users_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(users_repo, tokens),
        employee_service=EmployeeService(employees_repo, attendance_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        absence_generator=AbsenceGenerator(attendance_repo, employees_repo),
        report_service=AttendanceReportService(attendance_repo, employees_repo),
        workbook_exporter=AttendanceWorkbookExporter(),
        simple_workbook_exporter=SimpleWorkbookExporter(),
        csv_exporter=CsvRecordsExporter(),
    )


def build_container(*, db_config: dict, token_secret: str, token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        token_secret=token_secret,
        token_ttl_hours=token_ttl_hours,
        conn=conn,
    )
