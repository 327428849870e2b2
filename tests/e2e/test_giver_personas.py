"""
E2E tests for giver personas driven entirely through the HTTP API.

User personas:
- weekly_giver: Regular weekly donations above the goal, high giving score
- sporadic_giver: Two donations months apart, low consistency
- overspender: Expenses above income, floor financial health
- non_earner: Donates without any recorded income
"""

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient


def _onboard(client: TestClient, user_id: str, percentage: float = 5) -> None:
    response = client.post("/v1/profiles", json={"user_id": user_id, "donation_percentage": percentage})
    assert response.status_code == 201


def _record(client: TestClient, kind: str, user_id: str, amount: float, date: datetime | None = None, **fields) -> dict:
    body = {"user_id": user_id, "amount": amount, **fields}
    if date is not None:
        body["date"] = date.isoformat()
    response = client.post(f"/v1/entries/{kind}", json=body)
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
def test_weekly_giver(client: TestClient):
    """
    weekly_giver: 8 weekly donations of 300 on 40,000 income
    Expected: 6% rate -> 24, weekly consistency -> 30, goal exceeded -> 30
    """
    _onboard(client, "weekly_giver")
    _record(client, "income", "weekly_giver", 40_000, datetime(2026, 1, 1), category="salary")
    for week in range(8):
        _record(client, "donations", "weekly_giver", 300, datetime(2026, 1, 5) + timedelta(weeks=week), category="sadaqah")

    data = client.get("/v1/dashboard/giving-score", params={"user_id": "weekly_giver"}).json()

    assert data["giving_score"] == 84
    assert data["breakdown"]["consistency_value"] == 100
    assert data["average_days_between"] == 7
    assert data["next_milestone"]["name"] == "10 Donations"

    insights = client.get("/v1/donations/insights", params={"user_id": "weekly_giver"}).json()
    assert insights["consistency"] == 100
    assert insights["favorite_category"] == "sadaqah"


@pytest.mark.integration
def test_sporadic_giver(client: TestClient):
    """
    sporadic_giver: 200 in January and 200 in June on 40,000 income
    Expected: 1% rate -> 4, sparse consistency -> 3, 20% of goal -> 6
    """
    _onboard(client, "sporadic_giver")
    _record(client, "income", "sporadic_giver", 40_000, datetime(2026, 1, 1), category="freelance")
    _record(client, "donations", "sporadic_giver", 200, datetime(2026, 1, 1))
    _record(client, "donations", "sporadic_giver", 200, datetime(2026, 6, 1))

    data = client.get("/v1/dashboard/giving-score", params={"user_id": "sporadic_giver"}).json()

    assert data["giving_score"] == 13
    assert data["breakdown"]["consistency_value"] == 10

    # The insights table has no quarterly band, so sparse giving floors at 20
    insights = client.get("/v1/donations/insights", params={"user_id": "sporadic_giver"}).json()
    assert insights["consistency"] == 20


@pytest.mark.integration
def test_overspender(client: TestClient):
    """
    overspender: 12,000 spent on 10,000 income this month
    Expected: negative savings and the floor financial health score
    """
    _onboard(client, "overspender")
    _record(client, "income", "overspender", 10_000, category="salary")
    _record(client, "expenses", "overspender", 12_000, category="shopping")

    summary = client.get("/v1/dashboard/summary", params={"user_id": "overspender"}).json()

    assert summary["savings"] == -2_000
    assert summary["savings_rate"] == -20.0
    assert summary["financial_health"] == 25
    assert summary["giving_score"] == 0

    advice = client.post("/v1/advice/financial", params={"user_id": "overspender"}).json()
    assert advice["fallback"] is True
    assert "savings rate is low" in advice["text"]


@pytest.mark.integration
def test_non_earner(client: TestClient):
    """
    non_earner: One donation with no income recorded
    Expected: Only the single-donation consistency term counts
    """
    _onboard(client, "non_earner")
    _record(client, "donations", "non_earner", 500, category="community")

    profile = client.get("/v1/profiles/non_earner").json()
    assert profile["giving_score"] == 6
    assert profile["current_donation_goal"] == 0

    progress = client.get("/v1/donations/progress", params={"user_id": "non_earner"}).json()
    assert progress["progress"] == 0
    assert progress["remaining"] == 0
