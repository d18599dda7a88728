from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.exceptions import ConflictError, NotFoundError
from ..schedules.model import is_scheduled, normalize_work_days
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use case: manage employees and their weekly schedule (admin)."""

    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository):
        self._employees = employees
        self._attendance = attendance

    def list_all(self) -> list[Employee]:
        return list(self._employees.list_all())

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Funcionário não encontrado")
        return employee

    def _ensure_registration_free(self, registration: str, *, owner_id: Optional[int] = None) -> None:
        other = self._employees.get_by_registration(registration)
        if other and other.employee_id != owner_id:
            raise ConflictError("Matrícula já cadastrada")

    def create(self, *, name: str, position: str, registration: str, work_days: Iterable[str]) -> Employee:
        name = require_non_empty(name, "Nome")
        position = require_non_empty(position, "Cargo")
        registration = require_non_empty(registration, "Matrícula")
        days = normalize_work_days(work_days)

        self._ensure_registration_free(registration)
        employee_id = self._employees.create(name=name, position=position, registration=registration, work_days=days)
        return self.get(employee_id)

    def update(
        self,
        employee_id: int,
        *,
        name: Optional[str] = None,
        position: Optional[str] = None,
        registration: Optional[str] = None,
        work_days: Optional[Iterable[str]] = None,
        is_active: Optional[bool] = None,
    ) -> Employee:
        """Partial update: fields left as None keep their current value."""
        current = self.get(employee_id)

        new_name = require_non_empty(name, "Nome") if name is not None else current.name
        new_position = require_non_empty(position, "Cargo") if position is not None else current.position
        new_registration = (
            require_non_empty(registration, "Matrícula") if registration is not None else current.registration
        )
        new_days = normalize_work_days(work_days) if work_days is not None else current.work_days

        if new_registration != current.registration:
            self._ensure_registration_free(new_registration, owner_id=current.employee_id)

        if not self._employees.update(
            employee_id=current.employee_id,
            name=new_name,
            position=new_position,
            registration=new_registration,
            work_days=new_days,
            is_active=current.is_active if is_active is None else bool(is_active),
        ):
            raise NotFoundError("Funcionário não encontrado")
        return self.get(current.employee_id)

    def delete(self, employee_id: int) -> int:
        """Delete an employee and its attendance records; returns how many records went with it."""
        employee = self.get(employee_id)
        removed = self._attendance.delete_for_employee(employee.employee_id)
        if not self._employees.delete(employee.employee_id):
            raise NotFoundError("Funcionário não encontrado")
        return removed

    def scheduled_on(self, day: date | None = None) -> list[Employee]:
        day = day or now_local().date()
        return [e for e in self._employees.list_all() if e.is_active and is_scheduled(e.work_days, day)]
