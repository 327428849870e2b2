"""Read-only analytics over a user's ledger - dashboard and report snapshots"""

import logging
from datetime import datetime, timedelta
from typing import List, Sequence, Tuple

from giving_ledger.config import settings
from giving_ledger.domain import metrics
from giving_ledger.domain.consistency import average_gap_days
from giving_ledger.domain.distribution import category_distribution, top_categories, totals_by_month
from giving_ledger.domain.forecast import dashboard_confidence, project_donations
from giving_ledger.domain.insights import (
    achieved_milestones,
    donation_insights,
    next_milestone,
    spending_patterns,
)
from giving_ledger.domain.models import (
    CategoryBreakdown,
    DonationInsights,
    DonationProgress,
    EntryKind,
    FinancialSummary,
    GivingScoreReport,
    LedgerEntry,
    MonthlyTrend,
    PredictionReport,
    SpendingPatterns,
    TrendReport,
)
from giving_ledger.domain.ports import LedgerStore, ProfileStore
from giving_ledger.domain.scoring import financial_health_score, score_profile
from giving_ledger.utils.date_utils import get_date_range, month_key, month_start, shift_months

logger = logging.getLogger(__name__)

TOP_EXPENSE_CATEGORIES = 5


def _total(entries: Sequence[LedgerEntry]) -> float:
    return sum(e.amount for e in entries)


class AnalyticsService:
    """
    Compute metric snapshots for one user and window.

    Nothing here writes to the stores; snapshots are built per call and
    discarded after serialization.
    """

    def __init__(self, ledger: LedgerStore, profiles: ProfileStore):
        self.ledger = ledger
        self.profiles = profiles

    def _window(
        self, user_id: str, start: datetime | None = None, end: datetime | None = None
    ) -> Tuple[List[LedgerEntry], List[LedgerEntry], List[LedgerEntry]]:
        return (
            self.ledger.find(user_id, EntryKind.INCOME, start, end),
            self.ledger.find(user_id, EntryKind.EXPENSE, start, end),
            self.ledger.find(user_id, EntryKind.DONATION, start, end),
        )

    def financial_summary(self, user_id: str, period: str = "month", now: datetime | None = None) -> FinancialSummary:
        """Totals, savings, donation progress, and both scores for a named period"""
        profile = self.profiles.get(user_id)
        start, end = get_date_range(period, now)
        income, expenses, donations = self._window(user_id, start, end)

        total_income = _total(income)
        total_expenses = _total(expenses)
        total_donations = _total(donations)

        savings = metrics.savings(total_income, total_expenses, total_donations)
        goal = profile.current_donation_goal

        logger.info(
            "Summary computed",
            extra={"user_id": user_id, "period": period, "entries": len(income) + len(expenses) + len(donations)},
        )
        return FinancialSummary(
            period=period,
            start_date=start,
            end_date=end,
            currency=profile.currency,
            total_income=total_income,
            income_count=len(income),
            total_expenses=total_expenses,
            expense_count=len(expenses),
            total_donations=total_donations,
            donation_count=len(donations),
            donation_goal=goal,
            donation_progress=round(metrics.donation_progress(total_donations, goal), 2),
            remaining_goal=metrics.remaining_goal(goal, total_donations),
            savings=savings,
            savings_rate=round(metrics.savings_rate(total_income, total_expenses, total_donations), 2),
            giving_score=profile.giving_score,
            financial_health=financial_health_score(total_income, total_expenses, total_donations, savings),
        )

    def trends(self, user_id: str, months: int | None = None, now: datetime | None = None) -> TrendReport:
        """
        Monthly totals for the last ``months`` completed months plus trend labels.

        Directions compare the latest month against the one before it; with a
        single month it is compared against itself and reads as stable.
        """
        profile = self.profiles.get(user_id)
        months = months or settings.trend_months
        current = month_start(now or datetime.utcnow())

        trends: List[MonthlyTrend] = []
        for offset in range(months, 0, -1):
            start = shift_months(current, -offset)
            end = shift_months(current, -offset + 1) - timedelta(microseconds=1)
            income, expenses, donations = self._window(user_id, start, end)
            total_income, total_expenses, total_donations = _total(income), _total(expenses), _total(donations)
            trends.append(
                MonthlyTrend(
                    month=month_key(start),
                    income=total_income,
                    expenses=total_expenses,
                    donations=total_donations,
                    savings=metrics.savings(total_income, total_expenses, total_donations),
                )
            )

        latest = trends[-1]
        previous = trends[-2] if len(trends) > 1 else latest
        directions = {
            field: metrics.trend_direction(getattr(latest, field), getattr(previous, field))
            for field in ("income", "expenses", "donations", "savings")
        }
        return TrendReport(trends=trends, directions=directions, currency=profile.currency)

    def giving_score_report(self, user_id: str) -> GivingScoreReport:
        """Cached giving score with its recomputed breakdown and milestones"""
        profile = self.profiles.get(user_id)
        donations = self.ledger.find(user_id, EntryKind.DONATION)
        breakdown = score_profile(profile, donations)

        return GivingScoreReport(
            giving_score=profile.giving_score,
            breakdown=breakdown,
            average_days_between=round(average_gap_days(donations)),
            milestones=achieved_milestones(len(donations), profile.cached_total_donated, breakdown.donation_rate),
            next_milestone=next_milestone(len(donations), profile.cached_total_donated),
            donation_count=len(donations),
            total_donated=profile.cached_total_donated,
            currency=profile.currency,
        )

    def category_breakdown(self, user_id: str, period: str = "month", now: datetime | None = None) -> CategoryBreakdown:
        profile = self.profiles.get(user_id)
        start, end = get_date_range(period, now)
        expenses = self.ledger.find(user_id, EntryKind.EXPENSE, start, end)
        donations = self.ledger.find(user_id, EntryKind.DONATION, start, end)

        expense_distribution = category_distribution(expenses)
        return CategoryBreakdown(
            period=period,
            expenses=expense_distribution,
            donations=category_distribution(donations),
            currency=profile.currency,
            top_expenses=[name for name, _ in top_categories(expense_distribution, TOP_EXPENSE_CATEGORIES)],
        )

    def predictions(self, user_id: str, now: datetime | None = None) -> PredictionReport:
        """Averages over the recent window and a flat donation projection"""
        profile = self.profiles.get(user_id)
        now = now or datetime.utcnow()
        window = settings.recent_window_months
        income, expenses, donations = self._window(user_id, shift_months(now, -window), now)

        avg_income = metrics.monthly_average((e.amount for e in income), window)
        avg_expense = metrics.monthly_average((e.amount for e in expenses), window)
        avg_donation = metrics.monthly_average((e.amount for e in donations), window)

        projections = project_donations(
            totals_by_month(donations),
            months=settings.forecast_months,
            confidence=dashboard_confidence,
            history_points=len(donations),
            today=now.date(),
        )
        return PredictionReport(
            monthly_income=round(avg_income),
            monthly_expense=round(avg_expense),
            monthly_donation=round(avg_donation),
            monthly_savings=round(metrics.savings(avg_income, avg_expense, avg_donation)),
            projections=projections,
            currency=profile.currency,
            note=f"Predictions based on last {window} months of data",
        )

    def donation_insights(self, user_id: str) -> DonationInsights:
        return donation_insights(self.ledger.find(user_id, EntryKind.DONATION))

    def donation_growth(self, user_id: str, period: str = "month", now: datetime | None = None) -> float:
        """Growth of donations in ``period`` against the equally long window just before it"""
        start, end = get_date_range(period, now)
        previous_start = start - (end - start)
        current = _total(self.ledger.find(user_id, EntryKind.DONATION, start, end))
        previous = _total(self.ledger.find(user_id, EntryKind.DONATION, previous_start, start - timedelta(microseconds=1)))
        return metrics.growth(current, previous)

    def donation_progress(self, user_id: str, period: str = "month", now: datetime | None = None) -> DonationProgress:
        profile = self.profiles.get(user_id)
        start, end = get_date_range(period, now)
        donated = _total(self.ledger.find(user_id, EntryKind.DONATION, start, end))
        goal = profile.current_donation_goal
        progress = metrics.donation_progress(donated, goal)

        if progress >= 100:
            message = "Congratulations! You have achieved your donation goal!"
        else:
            message = f"You have donated {profile.currency} {donated:,.2f} of {profile.currency} {goal:,.2f} goal."

        return DonationProgress(
            period=period,
            donation_goal=goal,
            total_donated=donated,
            remaining=metrics.remaining_goal(goal, donated),
            progress=round(progress, 2),
            donation_percentage=profile.donation_percentage,
            message=message,
        )

    def spending_patterns(self, user_id: str, months: int = 6, now: datetime | None = None) -> SpendingPatterns:
        now = now or datetime.utcnow()
        start = shift_months(now, -months)
        expenses = self.ledger.find(user_id, EntryKind.EXPENSE, start, now)
        return spending_patterns(expenses, start, now)

    def burn_rate(self, user_id: str, now: datetime | None = None) -> float:
        """Days the all-time savings last at the recent average daily spend"""
        profile = self.profiles.get(user_id)
        patterns = self.spending_patterns(user_id, months=settings.recent_window_months, now=now)
        current_savings = metrics.savings(
            profile.cached_total_income, profile.cached_total_expenses, profile.cached_total_donated
        )
        return metrics.burn_rate(current_savings, patterns.avg_daily_spending)
