"""Donation insights, giving milestones, and spending patterns"""

import math
from datetime import datetime
from typing import List, Optional, Sequence

from giving_ledger.domain.consistency import average_gap_days, insight_consistency_score
from giving_ledger.domain.distribution import favorite_category, totals_by_category, totals_by_weekday
from giving_ledger.domain.models import DonationInsights, LedgerEntry, Milestone, SpendingPatterns
from giving_ledger.utils.date_utils import SECONDS_PER_DAY

DONATION_COUNT_MILESTONES = (1, 10, 50)
DONATED_AMOUNT_MILESTONES = (10_000, 50_000)
DONATION_RATE_MILESTONE = 5


def _count_milestone_name(count: int) -> str:
    return "First Donation" if count == 1 else f"{count} Donations"


def _amount_milestone_name(amount: float) -> str:
    return f"{amount:,.0f} Donated"


def achieved_milestones(donation_count: int, total_donated: float, donation_rate: float) -> List[Milestone]:
    """Milestones reached so far, in a fixed order: counts, amounts, then donation rate"""
    milestones = [
        Milestone(name=_count_milestone_name(threshold))
        for threshold in DONATION_COUNT_MILESTONES
        if donation_count >= threshold
    ]
    milestones.extend(
        Milestone(name=_amount_milestone_name(threshold))
        for threshold in DONATED_AMOUNT_MILESTONES
        if total_donated >= threshold
    )
    if donation_rate >= DONATION_RATE_MILESTONE:
        milestones.append(Milestone(name=f"{DONATION_RATE_MILESTONE}% Donation Rate"))
    return milestones


def next_milestone(donation_count: int, total_donated: float) -> Optional[Milestone]:
    """The next count milestone, then the first amount milestone, or None when all are reached"""
    for threshold in DONATION_COUNT_MILESTONES[1:]:
        if donation_count < threshold:
            return Milestone(
                name=_count_milestone_name(threshold),
                achieved=False,
                remaining=threshold - donation_count,
            )

    first_amount = DONATED_AMOUNT_MILESTONES[0]
    if total_donated < first_amount:
        return Milestone(
            name=_amount_milestone_name(first_amount),
            achieved=False,
            remaining=first_amount - total_donated,
        )
    return None


def donation_insights(donations: Sequence[LedgerEntry]) -> DonationInsights:
    """Summary of a user's full donation history"""
    if not donations:
        return DonationInsights(
            total_donated=0.0,
            donation_count=0,
            average_donation=0.0,
            favorite_category=None,
            consistency=0,
        )

    total = sum(d.amount for d in donations)
    return DonationInsights(
        total_donated=total,
        donation_count=len(donations),
        average_donation=total / len(donations),
        favorite_category=favorite_category(donations),
        consistency=insight_consistency_score(donations),
        avg_days_between=round(average_gap_days(donations)),
    )


def spending_patterns(expenses: Sequence[LedgerEntry], start: datetime, end: datetime) -> SpendingPatterns:
    """Expense totals by weekday and category plus the average daily spend over the window"""
    days = max(1, math.ceil((end - start).total_seconds() / SECONDS_PER_DAY))
    total_spent = sum(e.amount for e in expenses)

    return SpendingPatterns(
        by_weekday=totals_by_weekday(expenses),
        by_category=totals_by_category(expenses),
        avg_daily_spending=total_spent / days,
        total_spent=total_spent,
        period_days=days,
    )
