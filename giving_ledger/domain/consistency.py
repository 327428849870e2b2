"""Donation consistency analysis based on average gaps between donations"""

from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

from giving_ledger.domain.models import LedgerEntry
from giving_ledger.utils.date_utils import days_between

NO_DONATIONS_SCORE = 0
SINGLE_DONATION_SCORE = 20

# (max average gap in days, score), evaluated in order, first match wins
CONSISTENCY_BANDS: Sequence[Tuple[float, int]] = (
    (7, 100),  # weekly or more often
    (14, 80),  # fortnightly
    (30, 60),  # monthly
    (60, 40),  # every other month
    (90, 20),  # quarterly
)
CONSISTENCY_FLOOR = 10

# Coarser table used by the donation insights report; no quarterly band
INSIGHT_CONSISTENCY_BANDS: Sequence[Tuple[float, int]] = (
    (7, 100),
    (14, 80),
    (30, 60),
    (60, 40),
)
INSIGHT_CONSISTENCY_FLOOR = 20


def _sorted_dates(donations: Iterable[LedgerEntry | datetime]) -> List[datetime]:
    return sorted(d if isinstance(d, datetime) else d.date for d in donations)


def average_gap_days(donations: Iterable[LedgerEntry | datetime]) -> float:
    """Mean absolute gap in fractional days between consecutive donations (0 with fewer than 2)"""
    dates = _sorted_dates(donations)
    if len(dates) < 2:
        return 0.0

    total_days = sum(days_between(previous, current) for previous, current in zip(dates, dates[1:]))
    return total_days / (len(dates) - 1)


def _band_score(avg_gap: float, bands: Sequence[Tuple[float, int]], floor: int) -> int:
    for max_gap, score in bands:
        if avg_gap <= max_gap:
            return score
    return floor


def consistency_score(donations: Iterable[LedgerEntry | datetime]) -> int:
    """
    Map donation regularity to a 0-100 score.

    0 donations score 0 and a single donation scores 20. Otherwise the
    average gap picks a band: <=7 days 100, <=14 80, <=30 60, <=60 40,
    <=90 20, anything sparser 10.
    """
    dates = _sorted_dates(donations)
    if not dates:
        return NO_DONATIONS_SCORE
    if len(dates) == 1:
        return SINGLE_DONATION_SCORE
    return _band_score(average_gap_days(dates), CONSISTENCY_BANDS, CONSISTENCY_FLOOR)


def insight_consistency_score(donations: Iterable[LedgerEntry | datetime]) -> int:
    """
    Five-band variant used by the donation insights report.

    Same special cases and bands as consistency_score up to 60 days, but
    every average gap above 60 days scores 20.
    """
    dates = _sorted_dates(donations)
    if not dates:
        return NO_DONATIONS_SCORE
    if len(dates) == 1:
        return SINGLE_DONATION_SCORE
    return _band_score(average_gap_days(dates), INSIGHT_CONSISTENCY_BANDS, INSIGHT_CONSISTENCY_FLOOR)
