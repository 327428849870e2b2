"""Date manipulation utilities"""

import calendar
from datetime import date, datetime, time, timedelta
from typing import Tuple

SECONDS_PER_DAY = 24 * 60 * 60


def month_key(value: date) -> str:
    """Format a date as its ``YYYY-MM`` month label"""
    return f"{value.year:04d}-{value.month:02d}"


def add_months(value: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``value``'s month"""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_start(value: datetime) -> datetime:
    return datetime(value.year, value.month, 1)


def days_between(earlier: datetime, later: datetime) -> float:
    """Absolute gap in fractional days"""
    return abs((later - earlier).total_seconds()) / SECONDS_PER_DAY


def get_date_range(period: str, now: datetime | None = None) -> Tuple[datetime, datetime]:
    """
    Resolve a named reporting period into a (start, end) window.

    Supported periods: today, week, month, year, last30days, last90days.
    Anything else falls back to month-to-date.
    """
    now = now or datetime.utcnow()
    end_of_day = time(23, 59, 59, 999999)

    if period == "today":
        return datetime.combine(now.date(), time.min), datetime.combine(now.date(), end_of_day)

    if period == "week":
        # Weeks start on Sunday
        week_start = now.date() - timedelta(days=(now.weekday() + 1) % 7)
        return datetime.combine(week_start, time.min), now

    if period == "month":
        next_month = add_months(now.date(), 1)
        last_day = next_month - timedelta(days=1)
        return month_start(now), datetime.combine(last_day, end_of_day)

    if period == "year":
        return datetime(now.year, 1, 1), datetime.combine(date(now.year, 12, 31), end_of_day)

    if period == "last30days":
        return datetime.combine(now.date() - timedelta(days=30), time.min), now

    if period == "last90days":
        return datetime.combine(now.date() - timedelta(days=90), time.min), now

    return month_start(now), now


def shift_months(value: datetime, months: int) -> datetime:
    """Move ``value`` by whole months, clamping the day to the target month's length"""
    target = add_months(value.date(), months)
    day = min(value.day, calendar.monthrange(target.year, target.month)[1])
    return value.replace(year=target.year, month=target.month, day=day)
