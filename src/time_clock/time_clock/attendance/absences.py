from __future__ import annotations

import logging
from datetime import date

from ..common.datetime_utils import now_local
from ..core.constants import AUTO_ABSENCE_NOTE
from ..core.enums import AttendanceStatus, ShiftType
from ..core.exceptions import DuplicateRecordError, ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.model import is_scheduled, weekday_of
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AbsenceGenerator:
    """Batch job: materialize ABSENT records for scheduled employees without a punch.

    Existing records are never touched, so running twice for the same date is a no-op
    the second time. Each employee is written independently; a crash mid-batch leaves
    a partial result that the next run completes.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, *, note: str = AUTO_ABSENCE_NOTE):
        self._attendance = attendance
        self._employees = employees
        self._note = note

    def generate(self, target_date: date) -> list[AttendanceRecord]:
        if target_date > now_local().date():
            raise ValidationError("Não é possível gerar faltas para datas futuras")

        created: list[AttendanceRecord] = []

        for employee in self._employees.list_all():
            if not employee.is_active or not is_scheduled(employee.work_days, target_date):
                continue
            if self._attendance.get_for_employee_and_date(employee.employee_id, target_date) is not None:
                continue

            try:
                record_id = self._attendance.create_record(
                    employee_id=employee.employee_id,
                    work_date=target_date,
                    entry_time=None,
                    exit_time=None,
                    status=AttendanceStatus.ABSENT,
                    shift=ShiftType.FULL_DAY,
                    observations=self._note,
                )
            except DuplicateRecordError:
                # Punched between the lookup and the insert.
                continue

            record = self._attendance.get_by_id(record_id)
            if record is not None:
                created.append(record)

        logger.info(
            "absence generation date=%s weekday=%s created=%d",
            target_date, weekday_of(target_date).value, len(created),
        )
        return created
