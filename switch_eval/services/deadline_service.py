"""
Deadline Service for Switch Evaluation.

Business-day deadline arithmetic for the three switching windows, plus the
clock abstraction that keeps the wall clock out of the engine.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Union

from constants import (
    WEEKEND_DAYS,
    MID_YEAR_DEADLINE_MONTH,
    MID_YEAR_DEADLINE_DAY,
    ANNUAL_DEADLINE_MONTH,
    ANNUAL_DEADLINE_DAY,
)
from switch_eval import WindowKind

DateLike = Union[date, datetime]


class SystemClock:
    """Reads today's date from the system. Only the app uses this."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a given day, for tests and what-if evaluations."""

    def __init__(self, day: DateLike):
        self._day = _to_date(day)

    def today(self) -> date:
        return self._day


def _to_date(value: DateLike) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def is_business_day(day: DateLike) -> bool:
    """Monday through Friday."""
    return _to_date(day).weekday() not in WEEKEND_DAYS


def last_business_day_on_or_before(day: DateLike) -> date:
    """
    Walk back from `day` while it falls on a weekend.

    Returns `day` itself when it is already a weekday. The result may land
    in the previous month (e.g. from Sunday the 1st).
    """
    result = _to_date(day)
    while not is_business_day(result):
        result -= timedelta(days=1)
    return result


def days_until(now: DateLike, target: DateLike) -> int:
    """
    Whole days from `now` to `target`, both taken at midnight.

    0 when the target is today, positive in the future, negative once it
    has passed. Callers must check EligibilityWindow.is_open before
    displaying the value.
    """
    return (_to_date(target) - _to_date(now)).days


def _anchored_deadline(now: date, month: int, day: int) -> date:
    """Business-day deadline for a fixed month/day, rolled to next year once passed."""
    candidate = last_business_day_on_or_before(date(now.year, month, day))
    if candidate < now:
        candidate = last_business_day_on_or_before(date(now.year + 1, month, day))
    return candidate


def end_of_month_deadline(now: DateLike) -> date:
    """Last business day of the month containing `now`."""
    today = _to_date(now)
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_business_day_on_or_before(date(today.year, today.month, last_day))


def window_deadline(kind: WindowKind, now: DateLike) -> date:
    """
    Deadline for a switching window, relative to `now`.

    Args:
        kind: Window type
        now: Evaluation date (datetimes are truncated to the day)

    Returns:
        MODEL_CHANGE: last business day of the current month
        MID_YEAR: last business day on/before March 31 (next year once passed)
        ANNUAL_CHANGE: last business day on/before November 30 (next year once passed)
    """
    today = _to_date(now)
    if kind == WindowKind.MODEL_CHANGE:
        return end_of_month_deadline(today)
    if kind == WindowKind.MID_YEAR:
        return _anchored_deadline(today, MID_YEAR_DEADLINE_MONTH, MID_YEAR_DEADLINE_DAY)
    if kind == WindowKind.ANNUAL_CHANGE:
        return _anchored_deadline(today, ANNUAL_DEADLINE_MONTH, ANNUAL_DEADLINE_DAY)
    raise ValueError(f"Unknown window kind: {kind}")
