"""GET /v1/donations/* and /v1/expenses/patterns - per-kind reports"""

import math
from dataclasses import asdict
from fastapi import APIRouter, Depends, Query

from giving_ledger.api.dependencies import get_analytics
from giving_ledger.api.v1.dashboard import PERIOD_PATTERN
from giving_ledger.api.v1.schemas import (
    DonationInsightsResponse,
    DonationProgressResponse,
    SpendingPatternsResponse,
)
from giving_ledger.services.analytics import AnalyticsService

router = APIRouter()


@router.get("/donations/insights", response_model=DonationInsightsResponse)
def get_donation_insights(
    user_id: str = Query(..., description="User identifier"),
    period: str = Query("month", pattern=PERIOD_PATTERN, description="Window used for growth"),
    analytics: AnalyticsService = Depends(get_analytics),
):
    """All-time donation insights plus growth of the period against the one before it"""
    insights = analytics.donation_insights(user_id)
    growth = analytics.donation_growth(user_id, period)
    return DonationInsightsResponse(**asdict(insights), growth=growth)


@router.get("/donations/progress", response_model=DonationProgressResponse)
def get_donation_progress(
    user_id: str = Query(..., description="User identifier"),
    period: str = Query("month", pattern=PERIOD_PATTERN),
    analytics: AnalyticsService = Depends(get_analytics),
):
    return DonationProgressResponse.model_validate(analytics.donation_progress(user_id, period))


@router.get("/expenses/patterns", response_model=SpendingPatternsResponse)
def get_spending_patterns(
    user_id: str = Query(..., description="User identifier"),
    months: int = Query(6, ge=1, le=24),
    analytics: AnalyticsService = Depends(get_analytics),
):
    """Spending by weekday and category, with days of runway at the recent burn rate"""
    patterns = analytics.spending_patterns(user_id, months)
    burn_rate = analytics.burn_rate(user_id)
    return SpendingPatternsResponse(
        **asdict(patterns),
        burn_rate_days=None if math.isinf(burn_rate) else int(burn_rate),
    )
