from datetime import date

import pytest

from workplan.errors import InvalidDuration
from workplan.workdays import (
    add_working_days,
    calendar_span,
    count_working_days,
    day_after,
    is_weekend,
    next_working_day,
)

THU = date(2024, 8, 1)
FRI = date(2024, 8, 2)
SAT = date(2024, 8, 3)
SUN = date(2024, 8, 4)
MON = date(2024, 8, 5)


def test_is_weekend():
    assert is_weekend(SAT)
    assert is_weekend(SUN)
    assert not is_weekend(FRI)
    assert not is_weekend(MON)


def test_next_working_day_snaps_weekends_to_monday():
    assert next_working_day(SAT) == MON
    assert next_working_day(SUN) == MON
    assert next_working_day(THU) == THU


def test_day_after_crosses_month_end():
    assert day_after(date(2024, 7, 31)) == THU


def test_add_working_days_counts_start_day():
    assert add_working_days(THU, 1) == THU
    # Thu, Fri, Mon, Tue, Wed
    assert add_working_days(THU, 5) == date(2024, 8, 7)
    assert add_working_days(FRI, 2) == MON


def test_add_working_days_rejects_non_positive_duration():
    with pytest.raises(InvalidDuration) as exc:
        add_working_days(THU, 0, task_id="T-1")
    assert exc.value.task_id == "T-1"
    assert exc.value.duration == 0

    with pytest.raises(InvalidDuration):
        add_working_days(THU, -3)


def test_calendar_span_is_inclusive():
    assert calendar_span(THU, THU) == 1
    assert calendar_span(THU, date(2024, 8, 7)) == 7
    assert calendar_span(MON, THU) == 1


def test_count_working_days():
    assert count_working_days(THU, date(2024, 8, 7)) == 5
    assert count_working_days(SAT, SUN) == 0
    assert count_working_days(MON, THU) == 0
