"""Unit tests for donation consistency scoring"""

import pytest
from datetime import datetime, timedelta
from giving_ledger.domain.consistency import (
    average_gap_days,
    consistency_score,
    insight_consistency_score,
)
from giving_ledger.domain.models import EntryKind, LedgerEntry


def _every(days: float, count: int, start: datetime = datetime(2026, 1, 1)) -> list[datetime]:
    return [start + timedelta(days=days * i) for i in range(count)]


def test_no_donations_scores_zero():
    assert consistency_score([]) == 0
    assert insight_consistency_score([]) == 0


def test_single_donation_scores_twenty():
    assert consistency_score([datetime(2026, 3, 1)]) == 20
    assert insight_consistency_score([datetime(2026, 3, 1)]) == 20


def test_uneven_gaps_use_the_average():
    """Test days 1, 8, 30: gaps of 7 and 22 average 14.5 days"""
    dates = [datetime(2026, 1, 1), datetime(2026, 1, 8), datetime(2026, 1, 30)]
    assert average_gap_days(dates) == 14.5
    assert consistency_score(dates) == 60


def test_order_of_donations_does_not_matter():
    dates = [datetime(2026, 1, 30), datetime(2026, 1, 1), datetime(2026, 1, 8)]
    assert consistency_score(dates) == 60


@pytest.mark.parametrize(
    "gap,expected",
    [(1, 100), (7, 100), (14, 80), (30, 60), (60, 40), (90, 20), (91, 10), (365, 10)],
)
def test_consistency_bands(gap, expected):
    assert consistency_score(_every(gap, 4)) == expected


@pytest.mark.parametrize("gap,expected", [(7, 100), (14, 80), (30, 60), (60, 40), (61, 20), (365, 20)])
def test_insight_bands_have_no_quarterly_tier(gap, expected):
    assert insight_consistency_score(_every(gap, 4)) == expected


def test_more_regular_giving_never_scores_lower():
    """Test the score is non-increasing as the average gap grows"""
    scores = [consistency_score(_every(gap, 5)) for gap in (0.5, 3, 7, 10, 14, 21, 30, 45, 60, 75, 90, 120)]
    assert scores == sorted(scores, reverse=True)


def test_accepts_ledger_entries():
    donations = [
        LedgerEntry(user_id="user_1", kind=EntryKind.DONATION, amount=100, date=d) for d in _every(7, 3)
    ]
    assert consistency_score(donations) == 100
    assert average_gap_days(donations) == 7.0


def test_fractional_day_gaps():
    dates = [datetime(2026, 1, 1), datetime(2026, 1, 1, 12)]
    assert average_gap_days(dates) == 0.5
