from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Literal, Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import AttendanceStatus, ShiftType
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance on one calendar date."""

    record_id: int
    employee_id: int
    work_date: date
    entry_time: Optional[time]
    exit_time: Optional[time]
    status: AttendanceStatus
    shift: ShiftType = ShiftType.FULL_DAY
    observations: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.entry_time is not None and self.exit_time is not None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "entryTime": format_hhmm(self.entry_time),
            "exitTime": format_hhmm(self.exit_time),
            "status": self.status.value,
            "shift": self.shift.value,
            "observations": self.observations,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


ClockAction = Literal["entry", "exit"]


@dataclass(frozen=True)
class ClockResult:
    action: ClockAction
    record: AttendanceRecord


@dataclass(frozen=True)
class AbsenceMarkResult:
    record: AttendanceRecord
    overwritten: bool


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model joining a record with its employee (listings and exports)."""

    record: AttendanceRecord
    employee: Optional[Employee]

    def to_dict(self) -> dict:
        data = self.record.to_dict()
        data["employee"] = self.employee.to_dict() if self.employee else None
        return data


DayState = Literal["not-started", "working", "finished", "absent"]

DAY_STATE_LABELS = {
    "not-started": "Não registrado",
    "working": "Trabalhando",
    "finished": "Finalizado",
    "absent": "Ausente",
}


def day_state(record: Optional[AttendanceRecord]) -> DayState:
    """Where an employee stands on a date, derived from the stored record."""
    if record is None:
        return "not-started"
    if record.status == AttendanceStatus.ABSENT:
        return "absent"
    if record.is_complete:
        return "finished"
    if record.entry_time is not None:
        return "working"
    return "not-started"


@dataclass(frozen=True)
class EmployeeDayStatus:
    employee: Employee
    record: Optional[AttendanceRecord]

    @property
    def state(self) -> DayState:
        return day_state(self.record)

    def to_dict(self) -> dict:
        return {
            "employee": self.employee.to_dict(),
            "status": self.state,
            "label": DAY_STATE_LABELS[self.state],
            "record": self.record.to_dict() if self.record else None,
        }


@dataclass(frozen=True)
class DailyStatusSummary:
    """Scheduled employees of one date with their state and the day's counters."""

    day: date
    items: list[EmployeeDayStatus]

    def _count(self, *states: str) -> int:
        return sum(1 for i in self.items if i.state in states)

    @property
    def scheduled(self) -> int:
        return len(self.items)

    @property
    def entered(self) -> int:
        return self._count("working", "finished")

    @property
    def finished(self) -> int:
        return self._count("finished")

    @property
    def absent(self) -> int:
        return self._count("absent")

    @property
    def pending(self) -> int:
        return self.scheduled - self.entered

    def to_dict(self) -> dict:
        return {
            "date": self.day.isoformat(),
            "scheduled": self.scheduled,
            "entered": self.entered,
            "finished": self.finished,
            "pending": self.pending,
            "absent": self.absent,
            "employees": [i.to_dict() for i in self.items],
        }
