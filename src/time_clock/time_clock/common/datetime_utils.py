from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválida, use o formato AAAA-MM-DD")


def parse_hhmm(value: Optional[str], field_name: str = "time") -> Optional[time]:
    """Parse an HH:MM string; empty values mean "not punched"."""
    if value is None or value == "":
        return None
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} inválido, use o formato HH:MM")


def format_hhmm(value: Optional[time]) -> Optional[str]:
    return value.strftime(TIME_FORMAT) if value is not None else None


def truncate_to_minute(moment: datetime) -> time:
    """Punches are kept at minute granularity."""
    return moment.time().replace(second=0, microsecond=0)


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()
