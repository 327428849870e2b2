"""Unit tests for metric primitives"""

import math
from giving_ledger.domain import metrics


def test_monthly_scenario():
    """Test income 50,000 / expenses 30,000 / donations 3,000 at a 5% goal"""
    income, expenses, donations = 50_000, 30_000, 3_000

    assert metrics.savings(income, expenses, donations) == 17_000
    assert metrics.savings_rate(income, expenses, donations) == 34.0

    goal = metrics.donation_goal(income, 5)
    assert goal == 2_500
    assert metrics.donation_progress(donations, goal) == 100.0
    assert metrics.remaining_goal(goal, donations) == 0.0


def test_savings_can_go_negative():
    """Test overspend is reported as negative savings"""
    assert metrics.savings(1_000, 1_200, 100) == -300
    assert metrics.savings_rate(1_000, 1_200, 100) == -30.0


def test_zero_income_and_zero_goal():
    assert metrics.savings_rate(0, 500, 0) == 0.0
    assert metrics.donation_progress(500, 0) == 0.0
    assert metrics.remaining_goal(0, 500) == 0.0


def test_donation_progress_partial():
    assert metrics.donation_progress(1_250, 2_500) == 50.0


def test_burn_rate_floors_days():
    """Test burn rate is whole days"""
    assert metrics.burn_rate(1_000, 30) == 33
    assert metrics.burn_rate(-100, 10) == -10


def test_burn_rate_unbounded_without_spending():
    assert metrics.burn_rate(1_000, 0) == metrics.BURN_RATE_UNBOUNDED
    assert math.isinf(metrics.burn_rate(0, 0))


def test_growth():
    assert metrics.growth(150, 100) == 50.0
    assert metrics.growth(90, 100) == -10.0
    assert metrics.growth(1, 3) == -66.67


def test_growth_without_previous_period():
    """Test growth heuristic when there is nothing to compare against"""
    assert metrics.growth(10, 0) == 100.0
    assert metrics.growth(0, 0) == 0.0


def test_trend_direction_threshold():
    """Test changes within ±5% read as stable"""
    assert metrics.trend_direction(104, 100) == "stable"
    assert metrics.trend_direction(95, 100) == "stable"
    assert metrics.trend_direction(106, 100) == "increasing"
    assert metrics.trend_direction(94, 100) == "decreasing"


def test_trend_direction_from_zero():
    assert metrics.trend_direction(0, 0) == "stable"
    assert metrics.trend_direction(5, 0) == "increasing"


def test_percentage():
    assert metrics.percentage(1, 3) == 33.33
    assert metrics.percentage(5, 0) == 0.0


def test_monthly_average():
    """Test amounts are spread over the full window, not just months with data"""
    assert metrics.monthly_average([300, 600], 3) == 300
    assert metrics.monthly_average([], 3) == 0.0
