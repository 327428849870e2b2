"""Unit tests for date helpers"""

from datetime import date, datetime
from giving_ledger.utils.date_utils import (
    add_months,
    days_between,
    get_date_range,
    month_key,
    shift_months,
)


def test_month_key():
    assert month_key(date(2026, 3, 9)) == "2026-03"


def test_add_months_across_years():
    assert add_months(date(2026, 11, 20), 3) == date(2027, 2, 1)
    assert add_months(date(2026, 1, 31), -1) == date(2025, 12, 1)


def test_shift_months_clamps_day():
    assert shift_months(datetime(2026, 3, 31, 8), -1) == datetime(2026, 2, 28, 8)
    assert shift_months(datetime(2028, 1, 31), 1) == datetime(2028, 2, 29)


def test_days_between_is_absolute():
    assert days_between(datetime(2026, 1, 8), datetime(2026, 1, 1)) == 7
    assert days_between(datetime(2026, 1, 1), datetime(2026, 1, 1, 6)) == 0.25


def test_week_starts_on_sunday():
    # 2026-10-14 is a Wednesday
    now = datetime(2026, 10, 14, 15, 30)
    start, end = get_date_range("week", now)
    assert start == datetime(2026, 10, 11)
    assert end == now


def test_week_on_a_sunday():
    start, _ = get_date_range("week", datetime(2026, 10, 11, 9))
    assert start == datetime(2026, 10, 11)


def test_month_covers_whole_calendar_month():
    start, end = get_date_range("month", datetime(2028, 2, 10))
    assert start == datetime(2028, 2, 1)
    assert end == datetime(2028, 2, 29, 23, 59, 59, 999999)


def test_today_and_year():
    now = datetime(2026, 6, 15, 12)
    assert get_date_range("today", now) == (datetime(2026, 6, 15), datetime(2026, 6, 15, 23, 59, 59, 999999))
    assert get_date_range("year", now) == (datetime(2026, 1, 1), datetime(2026, 12, 31, 23, 59, 59, 999999))


def test_rolling_windows():
    now = datetime(2026, 6, 15, 12)
    assert get_date_range("last30days", now) == (datetime(2026, 5, 16), now)
    assert get_date_range("last90days", now) == (datetime(2026, 3, 17), now)


def test_unknown_period_is_month_to_date():
    now = datetime(2026, 6, 15, 12)
    assert get_date_range("fortnight", now) == (datetime(2026, 6, 1), now)
