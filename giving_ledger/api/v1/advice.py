"""/v1/advice/* - provider-backed advice with deterministic fallbacks"""

from fastapi import APIRouter, Depends, Query

from giving_ledger.api.dependencies import get_advisor
from giving_ledger.api.v1.schemas import AdviceResponse, CategorizeRequest, ForecastResponse, ImpactStoryRequest
from giving_ledger.services.advisor import Advisor

router = APIRouter()


@router.post("/advice/financial", response_model=AdviceResponse)
async def get_financial_advice(
    user_id: str = Query(..., description="User identifier"),
    advisor: Advisor = Depends(get_advisor),
):
    """Savings and giving tips; never fails because of the provider"""
    return AdviceResponse.model_validate(await advisor.financial_advice(user_id))


@router.post("/advice/donations", response_model=AdviceResponse)
async def get_donation_recommendations(
    user_id: str = Query(..., description="User identifier"),
    advisor: Advisor = Depends(get_advisor),
):
    return AdviceResponse.model_validate(await advisor.donation_recommendations(user_id))


@router.post("/advice/categorize", response_model=AdviceResponse)
async def categorize_expense(request_body: CategorizeRequest, advisor: Advisor = Depends(get_advisor)):
    """Suggest an expense category for a free-text description"""
    result = await advisor.categorize_expense(request_body.user_id, request_body.description, request_body.amount)
    return AdviceResponse.model_validate(result)


@router.post("/advice/impact-story", response_model=AdviceResponse)
async def generate_impact_story(request_body: ImpactStoryRequest, advisor: Advisor = Depends(get_advisor)):
    result = await advisor.impact_story(request_body.user_id, request_body.start_date, request_body.end_date)
    return AdviceResponse.model_validate(result)


@router.get("/advice/forecast", response_model=ForecastResponse)
async def forecast_donations(
    user_id: str = Query(..., description="User identifier"),
    months: int = Query(3, ge=1, le=12),
    advisor: Advisor = Depends(get_advisor),
):
    """Monthly donation forecast; needs at least three donations"""
    return ForecastResponse.model_validate(await advisor.forecast(user_id, months))
