from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for authorization."""

    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class AttendanceStatus(str, Enum):
    """Status persisted on an attendance record."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class ShiftType(str, Enum):
    """Portion of a scheduled day an absence refers to."""

    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"
    FULL_DAY = "FULL_DAY"
