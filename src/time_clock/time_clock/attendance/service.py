from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_of_day, now_local, truncate_to_minute
from ..core.constants import AUTO_ABSENCE_NOTE
from ..core.enums import AttendanceStatus, ShiftType
from ..core.exceptions import (
    AlreadyAbsentError,
    AlreadyCompletedError,
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..schedules.model import is_scheduled
from .model import (
    AbsenceMarkResult,
    AttendanceRecord,
    AttendanceRow,
    ClockResult,
    DailyStatusSummary,
    EmployeeDayStatus,
)
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases around attendance records: punches, manual edits and listings."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _require_employee(self, employee_id: int, *, active_only: bool = True) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or (active_only and not employee.is_active):
            raise NotFoundError("Funcionário não encontrado")
        return employee

    def _require_record(self, record_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Registro não encontrado")
        return record

    @staticmethod
    def _kept_note(record: AttendanceRecord) -> Optional[str]:
        # The generator's note no longer applies once the day is worked.
        return None if record.observations == AUTO_ABSENCE_NOTE else record.observations

    def clock(self, employee_id: int, *, now: datetime | None = None) -> ClockResult:
        """Register the next punch of the day for an employee.

        No record yet -> entry. Open entry -> exit. Closed or absent -> rejected.
        """
        employee = self._require_employee(employee_id)
        now = now or now_local()
        today = now.date()
        at = truncate_to_minute(now)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
        if record is None:
            try:
                record_id = self._attendance.create_record(
                    employee_id=employee.employee_id,
                    work_date=today,
                    entry_time=at,
                    exit_time=None,
                    status=AttendanceStatus.PRESENT,
                    shift=ShiftType.FULL_DAY,
                )
            except DuplicateRecordError:
                # A concurrent punch created the record first; continue from its state.
                record = self._attendance.get_for_employee_and_date(employee.employee_id, today)
                if record is None:
                    raise
            else:
                logger.info("entry punched employee_id=%s date=%s time=%s", employee.employee_id, today, at)
                return ClockResult(action="entry", record=self._require_record(record_id))

        return self._advance(record, at)

    def _advance(self, record: AttendanceRecord, at: time) -> ClockResult:
        if record.status == AttendanceStatus.ABSENT:
            raise AlreadyAbsentError("Funcionário marcado como ausente nesta data")

        if record.entry_time is None:
            # PRESENT without punches: an absence cleared by an administrator.
            self._attendance.replace_record(
                record_id=record.record_id,
                entry_time=at,
                exit_time=None,
                status=AttendanceStatus.PRESENT,
                shift=record.shift,
                observations=record.observations,
            )
            return ClockResult(action="entry", record=self._require_record(record.record_id))

        if record.is_complete:
            raise AlreadyCompletedError("Entrada e saída já registradas para hoje")

        if not self._attendance.update_exit(record_id=record.record_id, exit_time=at):
            current = self._require_record(record.record_id)
            if current.status == AttendanceStatus.ABSENT:
                raise AlreadyAbsentError("Funcionário marcado como ausente nesta data")
            raise AlreadyCompletedError("Entrada e saída já registradas para hoje")

        logger.info("exit punched employee_id=%s date=%s time=%s", record.employee_id, record.work_date, at)
        return ClockResult(action="exit", record=self._require_record(record.record_id))

    def save_manual_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        entry_time: Optional[time],
        exit_time: Optional[time],
        observations: Optional[str] = None,
    ) -> AttendanceRecord:
        """Create or overwrite the punches of (employee, date) by hand."""
        employee = self._require_employee(employee_id, active_only=False)

        if exit_time is not None and entry_time is None:
            raise ValidationError("Informe a entrada antes da saída")
        if entry_time is not None and exit_time is not None and minutes_of_day(exit_time) < minutes_of_day(entry_time):
            raise ValidationError("A saída não pode ser anterior à entrada")

        observations = observations.strip() if observations else None
        existing = self._attendance.get_for_employee_and_date(employee.employee_id, work_date)
        if existing:
            self._attendance.replace_record(
                record_id=existing.record_id,
                entry_time=entry_time,
                exit_time=exit_time,
                status=AttendanceStatus.PRESENT,
                shift=ShiftType.FULL_DAY,
                observations=observations if observations is not None else self._kept_note(existing),
            )
            return self._require_record(existing.record_id)

        record_id = self._attendance.create_record(
            employee_id=employee.employee_id,
            work_date=work_date,
            entry_time=entry_time,
            exit_time=exit_time,
            status=AttendanceStatus.PRESENT,
            shift=ShiftType.FULL_DAY,
            observations=observations,
        )
        return self._require_record(record_id)

    def mark_absence(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus = AttendanceStatus.ABSENT,
        observations: Optional[str] = None,
        shift: ShiftType = ShiftType.FULL_DAY,
    ) -> AbsenceMarkResult:
        """Manual override of the day's status.

        Overwrites whatever exists for the date. ABSENT never keeps punch times;
        PRESENT keeps the punches already recorded and clears a previous absence so
        the employee can punch.
        """
        employee = self._require_employee(employee_id, active_only=False)
        observations = observations.strip() if observations else None

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, work_date)
        keep_punches = status == AttendanceStatus.PRESENT
        if existing:
            self._attendance.replace_record(
                record_id=existing.record_id,
                entry_time=existing.entry_time if keep_punches else None,
                exit_time=existing.exit_time if keep_punches else None,
                status=status,
                shift=shift,
                observations=observations,
            )
            logger.info(
                "status overridden employee_id=%s date=%s %s->%s",
                employee.employee_id, work_date, existing.status.value, status.value,
            )
            return AbsenceMarkResult(record=self._require_record(existing.record_id), overwritten=True)

        record_id = self._attendance.create_record(
            employee_id=employee.employee_id,
            work_date=work_date,
            entry_time=None,
            exit_time=None,
            status=status,
            shift=shift,
            observations=observations,
        )
        return AbsenceMarkResult(record=self._require_record(record_id), overwritten=False)

    def update_observations(self, record_id: int, observations: Optional[str]) -> AttendanceRecord:
        """Edit free text only; status stays exactly as written by the punch or absence."""
        observations = observations.strip() if observations else None
        if not self._attendance.update_observations(record_id=int(record_id), observations=observations):
            raise NotFoundError("Registro não encontrado")
        return self._require_record(record_id)

    def delete_record(self, record_id: int) -> None:
        if not self._attendance.delete(int(record_id)):
            raise NotFoundError("Registro não encontrado")

    def list_rows(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[AttendanceRow]:
        if start_date and end_date and start_date > end_date:
            raise ValidationError("Data inicial deve ser anterior à data final")

        records = self._attendance.list_records(employee_id=employee_id, start_date=start_date, end_date=end_date)
        return self._join(records)

    def today_rows(self, *, today: date | None = None) -> list[AttendanceRow]:
        today = today or now_local().date()
        return self._join(self._attendance.list_records(start_date=today, end_date=today))

    def _join(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRow]:
        employees = {e.employee_id: e for e in self._employees.list_all()}
        return [AttendanceRow(record=r, employee=employees.get(r.employee_id)) for r in records]

    def daily_status(self, day: date | None = None) -> DailyStatusSummary:
        """State of every active employee scheduled on ``day`` (today by default)."""
        day = day or now_local().date()
        records = {r.employee_id: r for r in self._attendance.list_records(start_date=day, end_date=day)}
        items = [
            EmployeeDayStatus(employee=e, record=records.get(e.employee_id))
            for e in self._employees.list_all()
            if e.is_active and is_scheduled(e.work_days, day)
        ]
        return DailyStatusSummary(day=day, items=items)
