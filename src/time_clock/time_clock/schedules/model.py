from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import AbstractSet, Iterable, Iterator

from ..core.exceptions import ValidationError


class WeekDay(str, Enum):
    """Weekday labels stored in an employee's work-day set.

    Declared in ``date.weekday()`` order (Monday == 0).
    """

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def label(self) -> str:
        return WEEKDAY_LABELS[self]


WEEKDAY_LABELS = {
    WeekDay.MONDAY: "Segunda",
    WeekDay.TUESDAY: "Terça",
    WeekDay.WEDNESDAY: "Quarta",
    WeekDay.THURSDAY: "Quinta",
    WeekDay.FRIDAY: "Sexta",
    WeekDay.SATURDAY: "Sábado",
    WeekDay.SUNDAY: "Domingo",
}

_ORDER = list(WeekDay)


def weekday_of(day: date) -> WeekDay:
    return _ORDER[day.weekday()]


def is_scheduled(work_days: AbstractSet[WeekDay], day: date) -> bool:
    return weekday_of(day) in work_days


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar date in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def scheduled_dates(work_days: AbstractSet[WeekDay], start: date, end: date) -> list[date]:
    return [d for d in iter_dates(start, end) if is_scheduled(work_days, d)]


def normalize_work_days(values: Iterable[str]) -> frozenset[WeekDay]:
    """Validate raw labels coming from requests or storage."""
    if values is None or isinstance(values, str):
        raise ValidationError("Dias de trabalho devem ser uma lista")

    out: set[WeekDay] = set()
    for raw in values:
        try:
            out.add(WeekDay(str(raw).strip().lower()))
        except ValueError:
            raise ValidationError(f"Dia da semana inválido: {raw}")

    if not out:
        raise ValidationError("Selecione pelo menos um dia de trabalho")
    return frozenset(out)


def sorted_work_days(work_days: AbstractSet[WeekDay]) -> list[WeekDay]:
    return [d for d in _ORDER if d in work_days]
