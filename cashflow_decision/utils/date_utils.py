"""Date manipulation utilities"""

import calendar
import math
from datetime import date, timedelta
from typing import Iterator, Optional


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month"""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping day to the last day of a short month"""
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(year: int, month: int, months: int) -> tuple[int, int]:
    """Shift a (year, month) pair by a whole number of months"""
    index = year * 12 + (month - 1) + months
    return index // 12, index % 12 + 1


def next_due_by_day(today: date, due_day: int) -> date:
    """
    Next calendar occurrence of a day-of-month on or after today.

    A due day beyond the month's length clamps to the last day, so day 31
    falls on the 30th in a 30-day month.
    """
    this_month = clamp_day(today.year, today.month, due_day)
    if this_month >= today:
        return this_month
    year, month = add_months(today.year, today.month, 1)
    return clamp_day(year, month, due_day)


def monthly_occurrences(first: date, due_day: int, until: date) -> Iterator[date]:
    """
    Yield first and each following month's occurrence of due_day up to until.

    Clamping is re-applied against the original due day every month, so a
    day-31 bill lands on Feb 28 and then back on Mar 31.
    """
    offset = 0
    current = first
    while current <= until:
        yield current
        offset += 1
        year, month = add_months(first.year, first.month, offset)
        current = clamp_day(year, month, due_day)


def next_occurrence_after(today: date, last: date, cadence_days: int) -> date:
    """
    First cadence boundary strictly after today, counted from last.

    Uses whole-cadence arithmetic instead of stepping day by day.
    """
    elapsed = (today - last).days
    cycles = max(0, math.ceil(elapsed / cadence_days))
    candidate = last + timedelta(days=cycles * cadence_days)
    if candidate <= today:
        candidate += timedelta(days=cadence_days)
    return candidate


def whole_days_between(start: date, end: Optional[date]) -> int:
    """Signed number of whole days from start to end (0 when end is missing)"""
    if end is None:
        return 0
    return (end - start).days
