from __future__ import annotations

from datetime import time
from typing import Optional

from ..common.datetime_utils import minutes_of_day
from ..core.constants import INCOMPLETE_DURATION_LABEL
from ..core.enums import AttendanceStatus

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Presente",
    AttendanceStatus.ABSENT: "Faltou",
}


def status_label(status: AttendanceStatus) -> str:
    return STATUS_LABELS.get(status, status.value)


def worked_minutes(entry_time: Optional[time], exit_time: Optional[time]) -> Optional[int]:
    """exit - entry in minutes, None while a punch is missing.

    Shifts do not cross midnight, so a negative difference is clamped to 0.
    """
    if entry_time is None or exit_time is None:
        return None
    return max(minutes_of_day(exit_time) - minutes_of_day(entry_time), 0)


def format_duration(minutes: Optional[int]) -> str:
    if minutes is None:
        return INCOMPLETE_DURATION_LABEL
    hours, rest = divmod(minutes, 60)
    return f"{hours}h {rest}min" if rest else f"{hours}h"
