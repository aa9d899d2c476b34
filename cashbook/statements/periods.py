"""Reporting-period predicates for the Profit & Loss statement."""

from collections.abc import Callable
from datetime import datetime
from typing import Optional

from cashbook.models.statements import Period


def previous_month(year: int, month: int) -> tuple[int, int]:
    """(year, month) one calendar month earlier; January rolls back a year."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def _align(ts: datetime, now: datetime) -> datetime:
    # Compare aware timestamps in the reporting timezone of `now`
    if ts.tzinfo is not None and now.tzinfo is not None:
        return ts.astimezone(now.tzinfo)
    return ts


def period_predicate(
    period: Period,
    now: Optional[datetime] = None,
) -> Callable[[datetime], bool]:
    """
    Build an inclusion test for timestamps.

    THIS_MONTH matches the calendar month and year of `now`, LAST_MONTH
    the month before it, ALL_TIME everything.
    """
    if period == Period.ALL_TIME:
        return lambda ts: True

    now = now or datetime.now()
    if period == Period.THIS_MONTH:
        target = (now.year, now.month)
    else:
        target = previous_month(now.year, now.month)

    def in_period(ts: datetime) -> bool:
        aligned = _align(ts, now)
        return (aligned.year, aligned.month) == target

    return in_period
