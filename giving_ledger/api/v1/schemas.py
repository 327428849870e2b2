"""Pydantic schemas for API request/response validation"""

from datetime import datetime, timezone
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from typing import Annotated, Dict, List, Literal, Optional

from giving_ledger.config import settings
from giving_ledger.domain.models import EntryKind

Currency = Literal["INR", "USD", "EUR", "GBP", "AED"]


class SnapshotSchema(BaseModel):
    """Base for responses built straight from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Ledger dates are stored as naive UTC"""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


LedgerDate = Annotated[Optional[datetime], AfterValidator(_naive_utc)]


class ProfileCreateRequest(BaseModel):
    """Request body for POST /v1/profiles"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    donation_percentage: float = Field(settings.default_donation_percentage, ge=0, le=100)
    currency: Currency = settings.default_currency


class ProfileUpdateRequest(BaseModel):
    """Request body for PATCH /v1/profiles/{user_id}"""

    donation_percentage: Optional[float] = Field(None, ge=0, le=100)
    currency: Optional[Currency] = None


class ProfileResponse(SnapshotSchema):
    user_id: str
    donation_percentage: float
    currency: str
    cached_total_income: float
    cached_total_expenses: float
    cached_total_donated: float
    current_donation_goal: float
    remaining_donation_goal: float
    giving_score: int
    is_active: bool


class EntryCreateRequest(BaseModel):
    """Request body for POST /v1/entries/{kind}"""

    user_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, description="Non-negative amount in the entry currency")
    category: Optional[str] = Field(None, description="Category, or income source")
    date: LedgerDate = None
    currency: Currency = "INR"
    description: Optional[str] = Field(None, max_length=1000)
    recipient: Optional[str] = Field(None, max_length=200)
    purpose: Optional[str] = Field(None, max_length=500)


class EntryUpdateRequest(BaseModel):
    """Request body for PATCH /v1/entries/{kind}/{entry_id}"""

    amount: Optional[float] = Field(None, ge=0)
    category: Optional[str] = None
    date: LedgerDate = None
    currency: Optional[Currency] = None
    description: Optional[str] = Field(None, max_length=1000)
    recipient: Optional[str] = Field(None, max_length=200)
    purpose: Optional[str] = Field(None, max_length=500)


class EntryResponse(SnapshotSchema):
    id: str
    user_id: str
    kind: EntryKind
    amount: float
    currency: str
    category: str
    date: datetime
    description: Optional[str] = None
    recipient: Optional[str] = None
    purpose: Optional[str] = None
    suggested_donation: Optional[float] = None


class EntryListResponse(BaseModel):
    user_id: str
    kind: str
    count: int
    entries: List[EntryResponse]


class DistributionBucketSchema(SnapshotSchema):
    amount: float
    percentage: float


class SummaryResponse(SnapshotSchema):
    """Response for GET /v1/dashboard/summary"""

    period: str
    start_date: datetime
    end_date: datetime
    currency: str
    total_income: float
    income_count: int
    total_expenses: float
    expense_count: int
    total_donations: float
    donation_count: int
    donation_goal: float
    donation_progress: float
    remaining_goal: float
    savings: float
    savings_rate: float
    giving_score: int
    financial_health: int


class MonthlyTrendSchema(SnapshotSchema):
    month: str
    income: float
    expenses: float
    donations: float
    savings: float


class TrendResponse(SnapshotSchema):
    trends: List[MonthlyTrendSchema]
    directions: Dict[str, str]
    currency: str


class BreakdownSchema(SnapshotSchema):
    donation_rate: float
    rate_score: float
    consistency_value: int
    consistency_score: float
    goal_achievement: float
    goal_score: float
    total: int


class MilestoneSchema(SnapshotSchema):
    name: str
    achieved: bool
    remaining: Optional[float] = None


class GivingScoreResponse(SnapshotSchema):
    giving_score: int
    breakdown: BreakdownSchema
    average_days_between: int
    milestones: List[MilestoneSchema]
    next_milestone: Optional[MilestoneSchema] = None
    donation_count: int
    total_donated: float
    currency: str


class CategoryResponse(SnapshotSchema):
    period: str
    expenses: Dict[str, DistributionBucketSchema]
    donations: Dict[str, DistributionBucketSchema]
    currency: str
    top_expenses: List[str] = []


class ForecastPointSchema(SnapshotSchema):
    month: str
    projected_amount: int
    confidence: str


class MonthlyTotalSchema(SnapshotSchema):
    month: str
    amount: float
    count: int


class PredictionResponse(SnapshotSchema):
    monthly_income: int
    monthly_expense: int
    monthly_donation: int
    monthly_savings: int
    projections: List[ForecastPointSchema]
    currency: str
    note: str


class DonationInsightsResponse(SnapshotSchema):
    total_donated: float
    donation_count: int
    average_donation: float
    favorite_category: Optional[str] = None
    consistency: int
    avg_days_between: int
    growth: float = 0.0


class DonationProgressResponse(SnapshotSchema):
    period: str
    donation_goal: float
    total_donated: float
    remaining: float
    progress: float
    donation_percentage: float
    message: str


class SpendingPatternsResponse(SnapshotSchema):
    by_weekday: Dict[int, float]
    by_category: Dict[str, float]
    avg_daily_spending: float
    total_spent: float
    period_days: int
    burn_rate_days: Optional[int] = Field(None, description="Days until savings run out; null when unbounded")


class CategorizeRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    amount: Optional[float] = Field(None, ge=0)


class ImpactStoryRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    start_date: LedgerDate = None
    end_date: LedgerDate = None


class AdviceResponse(SnapshotSchema):
    text: str
    generated_at: datetime
    fallback: bool
    note: Optional[str] = None


class ForecastResponse(SnapshotSchema):
    forecast: List[ForecastPointSchema]
    historical: List[MonthlyTotalSchema]
    generated_at: datetime
    fallback: bool
    note: Optional[str] = None
