from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..schedules.model import is_scheduled, scheduled_dates


def rounded_percentage(part: int, total: int) -> int:
    """part/total as a whole percentage, rounded half up; 0 when nothing was scheduled."""
    if total <= 0:
        return 0
    return (part * 200 + total) // (2 * total)


@dataclass(frozen=True)
class EmployeeAttendanceSummary:
    employee: Employee
    total_days: int
    present: int
    absent: int
    extra_days: int
    records: list[AttendanceRecord] = field(default_factory=list)

    @property
    def present_percentage(self) -> int:
        return rounded_percentage(self.present, self.total_days)

    @property
    def absent_percentage(self) -> int:
        return rounded_percentage(self.absent, self.total_days)


@dataclass(frozen=True)
class AttendanceReport:
    start_date: date
    end_date: date
    generated_at: datetime
    items: list[EmployeeAttendanceSummary]


class AttendanceReportService:
    """Aggregate attendance per employee over an inclusive date range."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[int] = None,
    ) -> AttendanceReport:
        if start > end:
            raise ValidationError("Data inicial deve ser anterior à data final")

        if employee_id is not None:
            employee = self._employees.get_by_id(int(employee_id))
            if not employee:
                raise NotFoundError("Funcionário não encontrado")
            employees = [employee]
        else:
            employees = list(self._employees.list_all())

        records = self._attendance.list_records(employee_id=employee_id, start_date=start, end_date=end)
        by_employee: dict[int, list[AttendanceRecord]] = {}
        for r in records:
            by_employee.setdefault(r.employee_id, []).append(r)

        items = [self._summarize(e, by_employee.get(e.employee_id, []), start, end) for e in employees]
        return AttendanceReport(start_date=start, end_date=end, generated_at=now_local(), items=items)

    def _summarize(
        self,
        employee: Employee,
        records: list[AttendanceRecord],
        start: date,
        end: date,
    ) -> EmployeeAttendanceSummary:
        records = sorted(records, key=lambda r: r.work_date)
        present = absent = extra = 0

        for r in records:
            # A scheduled day without a record counts in neither tally.
            if not is_scheduled(employee.work_days, r.work_date):
                if r.status == AttendanceStatus.PRESENT:
                    extra += 1
                continue
            if r.status == AttendanceStatus.PRESENT:
                present += 1
            elif r.status == AttendanceStatus.ABSENT:
                absent += 1

        return EmployeeAttendanceSummary(
            employee=employee,
            total_days=len(scheduled_dates(employee.work_days, start, end)),
            present=present,
            absent=absent,
            extra_days=extra,
            records=records,
        )
