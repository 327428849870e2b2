"""Composite scoring engine - giving score and financial health"""

from typing import Iterable
from datetime import datetime

from giving_ledger.domain.consistency import consistency_score
from giving_ledger.domain.exceptions import InvalidInputError
from giving_ledger.domain.models import GivingScoreBreakdown, LedgerEntry, UserFinancialProfile

RATE_WEIGHT_CAP = 40.0
CONSISTENCY_WEIGHT = 0.3
GOAL_WEIGHT = 0.3
GOAL_WEIGHT_CAP = 30.0


def giving_score_breakdown(
    total_income: float,
    total_donated: float,
    donation_goal: float,
    consistency: int,
) -> GivingScoreBreakdown:
    """
    Break the giving score into its three weighted components.

    Scoring weights:
    - 40 points: donation rate (percent of income donated, x4, capped at 40)
    - 30 points: consistency (0-100 consistency score scaled by 0.3)
    - 30 points: goal achievement (percent of goal reached scaled by 0.3, capped at 30)

    Each term is capped on its own, so the total can never exceed 100.
    """
    if not 0 <= consistency <= 100:
        raise InvalidInputError(f"Consistency must be within [0, 100], got {consistency}")

    donation_rate = total_donated / total_income * 100 if total_income > 0 else 0.0
    rate_score = min(donation_rate * 4, RATE_WEIGHT_CAP)

    consistency_component = consistency * CONSISTENCY_WEIGHT

    # A zero goal would otherwise turn into NaN/inf
    goal_achievement = total_donated / donation_goal * 100 if donation_goal > 0 else 0.0
    goal_score = min(goal_achievement * GOAL_WEIGHT, GOAL_WEIGHT_CAP)

    return GivingScoreBreakdown(
        donation_rate=donation_rate,
        rate_score=rate_score,
        consistency_value=consistency,
        consistency_score=consistency_component,
        goal_achievement=goal_achievement,
        goal_score=goal_score,
        total=round(rate_score + consistency_component + goal_score),
    )


def giving_score(
    total_income: float,
    total_donated: float,
    donation_goal: float,
    consistency: int,
) -> int:
    return giving_score_breakdown(total_income, total_donated, donation_goal, consistency).total


def score_profile(
    profile: UserFinancialProfile,
    donations: Iterable[LedgerEntry | datetime],
) -> GivingScoreBreakdown:
    """Giving score breakdown for a profile's cached totals and its full donation history"""
    return giving_score_breakdown(
        total_income=profile.cached_total_income,
        total_donated=profile.cached_total_donated,
        donation_goal=profile.current_donation_goal,
        consistency=consistency_score(donations),
    )


def _expense_points(expense_ratio: float) -> int:
    if expense_ratio < 50:
        return 40
    elif expense_ratio < 70:
        return 30
    elif expense_ratio < 85:
        return 20
    else:
        return 10


def _donation_points(donation_ratio: float) -> int:
    if donation_ratio >= 5:
        return 20
    elif donation_ratio >= 2:
        return 15
    elif donation_ratio >= 1:
        return 10
    else:
        return 5


def _savings_points(savings_ratio: float) -> int:
    if savings_ratio >= 30:
        return 40
    elif savings_ratio >= 20:
        return 30
    elif savings_ratio >= 10:
        return 20
    else:
        return 10


def financial_health_score(income: float, expenses: float, donations: float, savings: float) -> int:
    """
    Banded financial health score from 25 to 100.

    Score bands:
    - Expense ratio (40 points): <50% 40, <70% 30, <85% 20, otherwise 10
    - Donation ratio (20 points): >=5% 20, >=2% 15, >=1% 10, otherwise 5
    - Savings ratio (40 points): >=30% 40, >=20% 30, >=10% 20, otherwise 10

    Every band has a non-zero floor so the score never shows 0. With no
    income the expense ratio counts as 100% and the other ratios as 0%.
    """
    expense_ratio = expenses / income * 100 if income > 0 else 100.0
    donation_ratio = donations / income * 100 if income > 0 else 0.0
    savings_ratio = savings / income * 100 if income > 0 else 0.0

    return _expense_points(expense_ratio) + _donation_points(donation_ratio) + _savings_points(savings_ratio)
