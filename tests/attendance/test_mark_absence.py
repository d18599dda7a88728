from __future__ import annotations

from datetime import date, time

from src.time_clock.time_clock.attendance.service import AttendanceService
from src.time_clock.time_clock.core.enums import AttendanceStatus, ShiftType


def test_mark_absence_creates_record_without_punches(employees_repo, attendance_repo):
    ana = employees_repo.add()
    svc = AttendanceService(attendance_repo, employees_repo)

    result = svc.mark_absence(
        employee_id=ana.employee_id,
        work_date=date(2024, 1, 10),
        observations="atestado médico",
        shift=ShiftType.MORNING,
    )

    assert result.overwritten is False
    assert result.record.status == AttendanceStatus.ABSENT
    assert result.record.entry_time is None
    assert result.record.exit_time is None
    assert result.record.shift == ShiftType.MORNING
    assert result.record.observations == "atestado médico"


def test_mark_absence_overwrites_punched_day(fixed_now, employees_repo, attendance_repo):
    ana = employees_repo.add()
    svc = AttendanceService(attendance_repo, employees_repo)
    punched = svc.clock(ana.employee_id, now=fixed_now).record

    result = svc.mark_absence(employee_id=ana.employee_id, work_date=fixed_now.date())

    assert result.overwritten is True
    assert result.record.record_id == punched.record_id
    assert result.record.status == AttendanceStatus.ABSENT
    assert result.record.entry_time is None
    assert len(attendance_repo.records) == 1


def test_mark_present_clears_absence(employees_repo, attendance_repo):
    ana = employees_repo.add()
    svc = AttendanceService(attendance_repo, employees_repo)
    day = date(2024, 1, 10)
    svc.mark_absence(employee_id=ana.employee_id, work_date=day)

    result = svc.mark_absence(employee_id=ana.employee_id, work_date=day, status=AttendanceStatus.PRESENT)

    assert result.overwritten is True
    assert result.record.status == AttendanceStatus.PRESENT
    assert result.record.entry_time is None

    entry = svc.save_manual_record(
        employee_id=ana.employee_id, work_date=day, entry_time=time(9, 0), exit_time=None,
    )
    assert entry.status == AttendanceStatus.PRESENT


def test_present_override_keeps_recorded_punches(fixed_now, employees_repo, attendance_repo):
    ana = employees_repo.add()
    svc = AttendanceService(attendance_repo, employees_repo)
    svc.clock(ana.employee_id, now=fixed_now)
    svc.clock(ana.employee_id, now=fixed_now.replace(hour=17))

    result = svc.mark_absence(
        employee_id=ana.employee_id,
        work_date=fixed_now.date(),
        status=AttendanceStatus.PRESENT,
        observations="horário justificado",
    )

    assert result.record.entry_time == time(8, 0)
    assert result.record.exit_time == time(17, 0)
    assert result.record.observations == "horário justificado"
    assert result.record.is_complete
