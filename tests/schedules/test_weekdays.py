from __future__ import annotations

from datetime import date

import pytest

from src.time_clock.time_clock.core.exceptions import ValidationError
from src.time_clock.time_clock.schedules.model import (
    WeekDay,
    is_scheduled,
    normalize_work_days,
    scheduled_dates,
    sorted_work_days,
    weekday_of,
)


@pytest.mark.parametrize(
    "day,expected",
    [
        (date(2024, 1, 7), WeekDay.SUNDAY),
        (date(2024, 1, 8), WeekDay.MONDAY),
        (date(2024, 1, 10), WeekDay.WEDNESDAY),
        (date(2024, 1, 13), WeekDay.SATURDAY),
    ],
)
def test_weekday_of(day, expected):
    assert weekday_of(day) == expected


def test_scheduled_dates_inclusive_range():
    days = scheduled_dates({WeekDay.MONDAY, WeekDay.WEDNESDAY}, date(2024, 1, 8), date(2024, 1, 15))

    assert days == [date(2024, 1, 8), date(2024, 1, 10), date(2024, 1, 15)]
    assert scheduled_dates({WeekDay.MONDAY}, date(2024, 1, 9), date(2024, 1, 8)) == []


def test_is_scheduled():
    assert is_scheduled({WeekDay.WEDNESDAY}, date(2024, 1, 10))
    assert not is_scheduled({WeekDay.WEDNESDAY}, date(2024, 1, 11))


def test_labels_and_order():
    days = normalize_work_days(["sunday", "MONDAY", " friday "])

    assert sorted_work_days(days) == [WeekDay.MONDAY, WeekDay.FRIDAY, WeekDay.SUNDAY]
    assert [d.label for d in sorted_work_days(days)] == ["Segunda", "Sexta", "Domingo"]


def test_normalize_rejects_unknown_label():
    with pytest.raises(ValidationError):
        normalize_work_days(["monday", "someday"])
