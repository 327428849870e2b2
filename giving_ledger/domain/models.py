"""Domain models - pure Python dataclasses representing ledger entities and metric snapshots"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from giving_ledger.domain.exceptions import InvalidInputError


class EntryKind(str, Enum):
    """Kind of ledger entry; each kind has its own category vocabulary"""

    INCOME = "income"
    EXPENSE = "expense"
    DONATION = "donation"


CURRENCIES = ("INR", "USD", "EUR", "GBP", "AED")

INCOME_SOURCES = ("salary", "freelance", "business", "investment", "rental", "gift", "other")

EXPENSE_CATEGORIES = (
    "food",
    "travel",
    "bills",
    "shopping",
    "healthcare",
    "education",
    "entertainment",
    "housing",
    "transportation",
    "utilities",
    "insurance",
    "personal",
    "charity",
    "other",
)

DONATION_CATEGORIES = (
    "zakat",
    "sadaqah",
    "tithe",
    "education",
    "healthcare",
    "poverty-relief",
    "disaster-relief",
    "animal-welfare",
    "environment",
    "religious",
    "community",
    "other",
)

CATEGORIES_BY_KIND = {
    EntryKind.INCOME: INCOME_SOURCES,
    EntryKind.EXPENSE: EXPENSE_CATEGORIES,
    EntryKind.DONATION: DONATION_CATEGORIES,
}


def parse_kind(value: str | EntryKind) -> EntryKind:
    """Coerce a raw kind string (``"income"``, ``"expenses"``...) into an EntryKind"""
    if isinstance(value, EntryKind):
        return value
    normalized = str(value).strip().lower()
    # Route segments use the plural form
    if normalized.endswith("s"):
        normalized = normalized[:-1]
    try:
        return EntryKind(normalized)
    except ValueError:
        raise InvalidInputError(f"Unknown ledger entry kind: {value!r}") from None


@dataclass
class LedgerEntry:
    """Single income, expense, or donation record owned by one user"""

    user_id: str
    kind: EntryKind
    amount: float
    category: Optional[str] = "other"  # income entries call this the "source"
    date: datetime = field(default_factory=datetime.utcnow)
    currency: str = "INR"
    id: Optional[str] = None
    description: Optional[str] = None
    recipient: Optional[str] = None  # donations only
    purpose: Optional[str] = None  # donations only
    suggested_donation: Optional[float] = None  # income only, snapshotted at commit
    is_deleted: bool = False

    def __post_init__(self) -> None:
        self.kind = parse_kind(self.kind)
        if self.amount is None or self.amount < 0:
            raise InvalidInputError(f"Amount must be non-negative, got {self.amount}")
        if not self.category:
            self.category = "other"
        if self.category not in CATEGORIES_BY_KIND[self.kind]:
            raise InvalidInputError(f"{self.category!r} is not a valid {self.kind.value} category")
        if self.currency not in CURRENCIES:
            raise InvalidInputError(f"Unsupported currency tag: {self.currency!r}")


@dataclass
class UserFinancialProfile:
    """Per-user settings plus cached running totals"""

    user_id: str
    donation_percentage: float = 5.0
    currency: str = "INR"
    cached_total_income: float = 0.0
    cached_total_expenses: float = 0.0
    cached_total_donated: float = 0.0
    giving_score: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.donation_percentage <= 100:
            raise InvalidInputError(
                f"Donation percentage must be within [0, 100], got {self.donation_percentage}"
            )

    @property
    def current_donation_goal(self) -> float:
        """Derived on every read so it never goes stale against the cached income"""
        return self.cached_total_income * self.donation_percentage / 100

    @property
    def remaining_donation_goal(self) -> float:
        return max(0.0, self.current_donation_goal - self.cached_total_donated)


@dataclass
class DistributionBucket:
    """Amount and share of one category within a distribution"""

    amount: float
    percentage: float


@dataclass
class MonthlyTotal:
    """Aggregated amount for one calendar month (``YYYY-MM``)"""

    month: str
    amount: float
    count: int


@dataclass
class GivingScoreBreakdown:
    """Weighted components of the giving score"""

    donation_rate: float
    rate_score: float
    consistency_value: int
    consistency_score: float
    goal_achievement: float
    goal_score: float
    total: int


@dataclass
class ForecastPoint:
    """Projected donation amount for a future month"""

    month: str
    projected_amount: int
    confidence: str


@dataclass
class Milestone:
    name: str
    achieved: bool = True
    remaining: Optional[float] = None


@dataclass
class FinancialSummary:
    """Window summary for the dashboard"""

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


@dataclass
class MonthlyTrend:
    month: str
    income: float
    expenses: float
    donations: float
    savings: float


@dataclass
class TrendReport:
    trends: List[MonthlyTrend]
    directions: Dict[str, str]
    currency: str


@dataclass
class GivingScoreReport:
    """Cached giving score plus the breakdown and milestones behind it"""

    giving_score: int
    breakdown: GivingScoreBreakdown
    average_days_between: int
    milestones: List[Milestone]
    next_milestone: Optional[Milestone]
    donation_count: int
    total_donated: float
    currency: str


@dataclass
class CategoryBreakdown:
    period: str
    expenses: Dict[str, DistributionBucket]
    donations: Dict[str, DistributionBucket]
    currency: str
    top_expenses: List[str] = field(default_factory=list)


@dataclass
class PredictionReport:
    """Three-month averages and naive donation projections"""

    monthly_income: int
    monthly_expense: int
    monthly_donation: int
    monthly_savings: int
    projections: List[ForecastPoint]
    currency: str
    note: str = "Predictions based on last 3 months of data"


@dataclass
class DonationInsights:
    total_donated: float
    donation_count: int
    average_donation: float
    favorite_category: Optional[str]
    consistency: int
    avg_days_between: int = 0


@dataclass
class DonationProgress:
    period: str
    donation_goal: float
    total_donated: float
    remaining: float
    progress: float
    donation_percentage: float
    message: str


@dataclass
class SpendingPatterns:
    by_weekday: Dict[int, float]
    by_category: Dict[str, float]
    avg_daily_spending: float
    total_spent: float
    period_days: int


@dataclass
class AdviceResult:
    """Text produced by the advice provider or by the deterministic fallback"""

    text: str
    generated_at: datetime
    fallback: bool = False
    note: Optional[str] = None


@dataclass
class DonationForecast:
    forecast: List[ForecastPoint]
    historical: List[MonthlyTotal]
    generated_at: datetime
    fallback: bool = False
    note: Optional[str] = None
