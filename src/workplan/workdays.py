"""Date arithmetic on a Monday-Friday working calendar."""

from __future__ import annotations

from datetime import date, timedelta

from workplan.errors import InvalidDuration

ONE_DAY = timedelta(days=1)


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def day_after(day: date) -> date:
    return day + ONE_DAY


def next_working_day(day: date) -> date:
    """Return *day* itself, or the Monday after it if it falls on a weekend."""
    if day.weekday() == 6:
        return day + ONE_DAY
    if day.weekday() == 5:
        return day + timedelta(days=2)
    return day


def add_working_days(start: date, duration: int, task_id: str | None = None) -> date:
    """Return the date of the last working day of a *duration*-day task.

    *start* counts as the first working day, so a one-day task ends on
    *start*. Weekend days are skipped while advancing.
    """
    if duration < 1:
        raise InvalidDuration(task_id, duration)
    current = start
    remaining = duration - 1
    while remaining > 0:
        current += ONE_DAY
        if not is_weekend(current):
            remaining -= 1
    return current


def calendar_span(start: date, end: date) -> int:
    """Inclusive number of calendar days from *start* to *end* (at least 1)."""
    return max(1, (end - start).days + 1)


def count_working_days(start: date, end: date) -> int:
    """Count Mon-Fri days in the inclusive range [start, end]."""
    if end < start:
        return 0
    total = 0
    current = start
    while current <= end:
        if not is_weekend(current):
            total += 1
        current += ONE_DAY
    return total
