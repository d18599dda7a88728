from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, ShiftType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        employee_id: int,
        work_date: date,
        entry_time: Optional[time],
        exit_time: Optional[time],
        status: AttendanceStatus,
        shift: ShiftType = ShiftType.FULL_DAY,
        observations: Optional[str] = None,
    ) -> int:
        """Insert a record.

        Raises DuplicateRecordError when (employee_id, work_date) already exists.
        """

        raise NotImplementedError

    def update_exit(self, *, record_id: int, exit_time: time) -> bool:
        """Set exit_time only while the record is PRESENT with an open entry.

        Returns False when the record no longer qualifies (already closed, absent or gone).
        """

        raise NotImplementedError

    def replace_record(
        self,
        *,
        record_id: int,
        entry_time: Optional[time],
        exit_time: Optional[time],
        status: AttendanceStatus,
        shift: ShiftType,
        observations: Optional[str],
    ) -> bool:
        """Administrative override of every mutable field."""

        raise NotImplementedError

    def update_observations(self, *, record_id: int, observations: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, record_id: int) -> bool:
        raise NotImplementedError

    def delete_for_employee(self, employee_id: int) -> int:
        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by work_date then employee_id."""

        raise NotImplementedError
