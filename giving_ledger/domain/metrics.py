"""Metric primitives - pure functions over totals for a reporting window"""

import math
from typing import Iterable

TREND_THRESHOLD_PERCENT = 5.0

# Returned by burn_rate when nothing is being spent
BURN_RATE_UNBOUNDED = math.inf


def savings(income: float, expenses: float, donations: float) -> float:
    """Money left after expenses and donations; negative means overspend"""
    return income - expenses - donations


def savings_rate(income: float, expenses: float, donations: float) -> float:
    if income == 0:
        return 0.0
    return savings(income, expenses, donations) / income * 100


def donation_goal(income: float, percentage: float) -> float:
    return income * percentage / 100


def donation_progress(donated: float, goal: float) -> float:
    """Percent of the goal reached, capped at 100; a zero goal reports 0"""
    if goal == 0:
        return 0.0
    return min(donated / goal * 100, 100.0)


def remaining_goal(goal: float, donated: float) -> float:
    return max(0.0, goal - donated)


def burn_rate(current_savings: float, avg_daily_expense: float) -> float:
    """
    Whole days until savings run out at the current daily spend.

    Returns BURN_RATE_UNBOUNDED when the average daily expense is zero.
    """
    if avg_daily_expense == 0:
        return BURN_RATE_UNBOUNDED
    return math.floor(current_savings / avg_daily_expense)


def growth(current: float, previous: float) -> float:
    """
    Period-over-period growth in percent, rounded to 2 decimals.

    With no previous value this is a heuristic rather than a real rate:
    100 when anything happened this period, 0 otherwise.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 2)


def trend_direction(current: float, previous: float) -> str:
    """Classify the change between two periods as increasing, decreasing, or stable (±5%)"""
    if previous == 0:
        return "increasing" if current > 0 else "stable"

    change = (current - previous) / previous * 100
    if change > TREND_THRESHOLD_PERCENT:
        return "increasing"
    if change < -TREND_THRESHOLD_PERCENT:
        return "decreasing"
    return "stable"


def percentage(value: float, total: float) -> float:
    if total == 0:
        return 0.0
    return round(value / total * 100, 2)


def monthly_average(amounts: Iterable[float], months: int = 3) -> float:
    """Spread the summed amounts evenly over a fixed number of months"""
    values = list(amounts)
    if not values:
        return 0.0
    return sum(values) / months
