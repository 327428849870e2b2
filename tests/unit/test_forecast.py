"""Unit tests for donation forecasting"""

from datetime import date
from giving_ledger.domain.forecast import (
    advisor_confidence,
    dashboard_confidence,
    project_donations,
    recent_average,
)
from giving_ledger.domain.models import MonthlyTotal


def _history():
    return [
        MonthlyTotal(month="2026-01", amount=100, count=1),
        MonthlyTotal(month="2026-02", amount=200, count=1),
        MonthlyTotal(month="2026-03", amount=300, count=2),
        MonthlyTotal(month="2026-04", amount=600, count=1),
    ]


def test_recent_average_uses_last_three_months():
    assert recent_average(_history()) == (200 + 300 + 600) / 3


def test_recent_average_with_short_history():
    assert recent_average(_history()[:1]) == 100
    assert recent_average([]) == 0.0


def test_flat_projection_labels_following_months():
    """Test every projected month gets the rounded recent average"""
    points = project_donations(_history(), months=3, today=date(2026, 4, 15))

    assert [p.month for p in points] == ["2026-05", "2026-06", "2026-07"]
    assert all(p.projected_amount == 367 for p in points)


def test_projection_rolls_over_year_end():
    points = project_donations(_history(), months=2, today=date(2026, 12, 3))
    assert [p.month for p in points] == ["2027-01", "2027-02"]


def test_empty_history_projects_nothing():
    assert project_donations([], months=3) == []


def test_dashboard_confidence_policy():
    """Test more than five historical donations is high confidence"""
    assert project_donations(_history(), history_points=5, today=date(2026, 4, 1))[0].confidence == "medium"
    assert project_donations(_history(), history_points=6, today=date(2026, 4, 1))[0].confidence == "high"
    assert dashboard_confidence(0) == "medium"


def test_advisor_confidence_policy():
    """Test the advisor policy never reports high"""
    points = project_donations(_history(), confidence=advisor_confidence, today=date(2026, 4, 1))
    assert points[0].confidence == "low"
    assert advisor_confidence(6) == "low"
    assert advisor_confidence(7) == "medium"
    assert advisor_confidence(100) == "medium"
