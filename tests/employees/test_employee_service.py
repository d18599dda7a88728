from __future__ import annotations

from datetime import date, time

import pytest

from src.time_clock.time_clock.core.enums import AttendanceStatus
from src.time_clock.time_clock.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.time_clock.time_clock.employees.service import EmployeeService
from src.time_clock.time_clock.schedules.model import WeekDay


def test_create_normalizes_work_days(employees_repo, attendance_repo):
    svc = EmployeeService(employees_repo, attendance_repo)

    employee = svc.create(name=" Ana ", position="Caixa", registration="1001", work_days=["Friday", "monday"])

    assert employee.name == "Ana"
    assert employee.work_days == {WeekDay.MONDAY, WeekDay.FRIDAY}
    assert employee.to_dict()["workDays"] == ["monday", "friday"]


@pytest.mark.parametrize("work_days", [[], ["funday"], "monday"])
def test_create_rejects_invalid_work_days(employees_repo, attendance_repo, work_days):
    svc = EmployeeService(employees_repo, attendance_repo)

    with pytest.raises(ValidationError):
        svc.create(name="Ana", position="Caixa", registration="1001", work_days=work_days)


def test_registration_must_be_unique(employees_repo, attendance_repo):
    svc = EmployeeService(employees_repo, attendance_repo)
    svc.create(name="Ana", position="Caixa", registration="1001", work_days=["monday"])
    bia = svc.create(name="Bia", position="Caixa", registration="1002", work_days=["monday"])

    with pytest.raises(ConflictError):
        svc.create(name="Outra", position="Caixa", registration="1001", work_days=["monday"])
    with pytest.raises(ConflictError):
        svc.update(bia.employee_id, registration="1001")


def test_partial_update_keeps_other_fields(employees_repo, attendance_repo):
    svc = EmployeeService(employees_repo, attendance_repo)
    ana = svc.create(name="Ana", position="Caixa", registration="1001", work_days=["monday"])

    updated = svc.update(ana.employee_id, position="Gerente", is_active=False)

    assert updated.name == "Ana"
    assert updated.position == "Gerente"
    assert updated.work_days == {WeekDay.MONDAY}
    assert updated.is_active is False


def test_delete_removes_attendance_history(employees_repo, attendance_repo):
    svc = EmployeeService(employees_repo, attendance_repo)
    ana = svc.create(name="Ana", position="Caixa", registration="1001", work_days=["monday"])
    for day in (date(2024, 1, 8), date(2024, 1, 15)):
        attendance_repo.create_record(
            employee_id=ana.employee_id, work_date=day, entry_time=time(8, 0), exit_time=None,
            status=AttendanceStatus.PRESENT,
        )

    assert svc.delete(ana.employee_id) == 2
    assert attendance_repo.records == {}
    with pytest.raises(NotFoundError):
        svc.get(ana.employee_id)


def test_scheduled_on_skips_inactive_and_off_days(employees_repo, attendance_repo):
    employees_repo.add(name="Ana", registration="1", work_days={WeekDay.WEDNESDAY})
    employees_repo.add(name="Bia", registration="2", work_days={WeekDay.THURSDAY})
    employees_repo.add(name="Caio", registration="3", work_days={WeekDay.WEDNESDAY}, is_active=False)

    names = [e.name for e in EmployeeService(employees_repo, attendance_repo).scheduled_on(date(2024, 1, 10))]

    assert names == ["Ana"]
