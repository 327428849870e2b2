"""GET /v1/dashboard/* - summary, trends, giving score, categories, predictions"""

from fastapi import APIRouter, Depends, Query

from giving_ledger.api.dependencies import get_analytics
from giving_ledger.api.v1.schemas import (
    CategoryResponse,
    GivingScoreResponse,
    PredictionResponse,
    SummaryResponse,
    TrendResponse,
)
from giving_ledger.services.analytics import AnalyticsService

router = APIRouter()

PERIOD_PATTERN = "^(today|week|month|year|last30days|last90days)$"


@router.get("/dashboard/summary", response_model=SummaryResponse)
def get_summary(
    user_id: str = Query(..., description="User identifier"),
    period: str = Query("month", pattern=PERIOD_PATTERN),
    analytics: AnalyticsService = Depends(get_analytics),
):
    """
    Totals, savings, donation progress, and scores for a period.

    The donation goal comes from the profile's all-time income; the giving
    score is the cached value kept fresh by ledger mutations.
    """
    return SummaryResponse.model_validate(analytics.financial_summary(user_id, period))


@router.get("/dashboard/trends", response_model=TrendResponse)
def get_trends(
    user_id: str = Query(..., description="User identifier"),
    months: int = Query(6, ge=1, le=24),
    analytics: AnalyticsService = Depends(get_analytics),
):
    return TrendResponse.model_validate(analytics.trends(user_id, months))


@router.get("/dashboard/giving-score", response_model=GivingScoreResponse)
def get_giving_score(
    user_id: str = Query(..., description="User identifier"),
    analytics: AnalyticsService = Depends(get_analytics),
):
    return GivingScoreResponse.model_validate(analytics.giving_score_report(user_id))


@router.get("/dashboard/categories", response_model=CategoryResponse)
def get_categories(
    user_id: str = Query(..., description="User identifier"),
    period: str = Query("month", pattern=PERIOD_PATTERN),
    analytics: AnalyticsService = Depends(get_analytics),
):
    return CategoryResponse.model_validate(analytics.category_breakdown(user_id, period))


@router.get("/dashboard/predictions", response_model=PredictionResponse)
def get_predictions(
    user_id: str = Query(..., description="User identifier"),
    analytics: AnalyticsService = Depends(get_analytics),
):
    """Recent monthly averages and a flat three-month donation projection"""
    return PredictionResponse.model_validate(analytics.predictions(user_id))
