from __future__ import annotations

from typing import AbstractSet, Optional, Protocol, Sequence

from ..schedules.model import WeekDay
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Services depend on this interface, never on a concrete database.
    """

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_registration(self, registration: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        position: str,
        registration: str,
        work_days: AbstractSet[WeekDay],
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        position: str,
        registration: str,
        work_days: AbstractSet[WeekDay],
        is_active: bool,
    ) -> bool:
        raise NotImplementedError

    def delete(self, employee_id: int) -> bool:
        """Remove the employee together with any attendance records still referencing it."""

        raise NotImplementedError
