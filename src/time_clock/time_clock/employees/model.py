from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..schedules.model import WeekDay, sorted_work_days


@dataclass(frozen=True)
class Employee:
    """Domain entity: a staff member tracked by the time clock.

    Plain data object, no database access here.
    """

    employee_id: int
    name: str
    position: str
    registration: str
    work_days: frozenset[WeekDay]
    is_active: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "position": self.position,
            "registration": self.registration,
            "workDays": [d.value for d in sorted_work_days(self.work_days)],
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
