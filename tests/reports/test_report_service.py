from __future__ import annotations

from datetime import date, time

import pytest

from src.time_clock.time_clock.core.enums import AttendanceStatus
from src.time_clock.time_clock.core.exceptions import NotFoundError, ValidationError
from src.time_clock.time_clock.reports.service import AttendanceReportService, rounded_percentage
from src.time_clock.time_clock.schedules.model import WeekDay


def _present(repo, employee_id, day):
    repo.create_record(
        employee_id=employee_id, work_date=day, entry_time=time(8, 0), exit_time=time(17, 0),
        status=AttendanceStatus.PRESENT,
    )


def _absent(repo, employee_id, day):
    repo.create_record(
        employee_id=employee_id, work_date=day, entry_time=None, exit_time=None,
        status=AttendanceStatus.ABSENT,
    )


def test_monday_wednesday_week_with_one_presence(employees_repo, attendance_repo):
    ana = employees_repo.add(work_days={WeekDay.MONDAY, WeekDay.WEDNESDAY})
    _present(attendance_repo, ana.employee_id, date(2024, 1, 8))

    report = AttendanceReportService(attendance_repo, employees_repo).build_attendance_report(
        start=date(2024, 1, 8), end=date(2024, 1, 14),
    )

    item = report.items[0]
    assert item.total_days == 2
    assert item.present == 1
    assert item.absent == 0
    assert item.present_percentage == 50
    assert item.absent_percentage == 0


def test_unscheduled_presence_counts_as_extra_day(employees_repo, attendance_repo):
    ana = employees_repo.add(work_days={WeekDay.MONDAY})
    _present(attendance_repo, ana.employee_id, date(2024, 1, 8))
    _present(attendance_repo, ana.employee_id, date(2024, 1, 13))
    _absent(attendance_repo, ana.employee_id, date(2024, 1, 15))

    item = AttendanceReportService(attendance_repo, employees_repo).build_attendance_report(
        start=date(2024, 1, 8), end=date(2024, 1, 15),
    ).items[0]

    assert item.total_days == 2
    assert (item.present, item.absent, item.extra_days) == (1, 1, 1)
    assert item.present + item.absent <= item.total_days
    assert [r.work_date for r in item.records] == [date(2024, 1, 8), date(2024, 1, 13), date(2024, 1, 15)]


def test_range_without_scheduled_days_gives_zero_percentages(employees_repo, attendance_repo):
    employees_repo.add(work_days={WeekDay.SUNDAY})

    item = AttendanceReportService(attendance_repo, employees_repo).build_attendance_report(
        start=date(2024, 1, 8), end=date(2024, 1, 12),
    ).items[0]

    assert item.total_days == 0
    assert item.present_percentage == 0
    assert item.absent_percentage == 0


def test_report_filters_single_employee(employees_repo, attendance_repo):
    employees_repo.add(name="Ana", registration="1")
    bia = employees_repo.add(name="Bia", registration="2")
    svc = AttendanceReportService(attendance_repo, employees_repo)

    report = svc.build_attendance_report(start=date(2024, 1, 1), end=date(2024, 1, 31), employee_id=bia.employee_id)

    assert [i.employee.name for i in report.items] == ["Bia"]
    with pytest.raises(NotFoundError):
        svc.build_attendance_report(start=date(2024, 1, 1), end=date(2024, 1, 31), employee_id=99)


def test_inverted_range_is_rejected(employees_repo, attendance_repo):
    with pytest.raises(ValidationError):
        AttendanceReportService(attendance_repo, employees_repo).build_attendance_report(
            start=date(2024, 2, 1), end=date(2024, 1, 1),
        )


@pytest.mark.parametrize(
    "part,total,expected",
    [(1, 2, 50), (1, 3, 33), (2, 3, 67), (1, 8, 13), (0, 5, 0), (3, 0, 0)],
)
def test_rounded_percentage(part, total, expected):
    assert rounded_percentage(part, total) == expected
