"""Advice orchestration - ask the optional provider, fall back to deterministic rules"""

import json
from datetime import date, datetime
from typing import List, Optional

from giving_ledger.config import settings
from giving_ledger.domain import advice
from giving_ledger.domain.distribution import totals_by_month
from giving_ledger.domain.exceptions import InsufficientDataError, ProviderUnavailable
from giving_ledger.domain.forecast import advisor_confidence, project_donations
from giving_ledger.domain.models import AdviceResult, DonationForecast, EntryKind, ForecastPoint
from giving_ledger.domain.ports import AdviceProvider, LedgerStore, ProfileStore
from giving_ledger.infrastructure.observability.logging import log_advice_fallback
from giving_ledger.infrastructure.observability.metrics import advice_fallback_counter, advice_latency_histogram
from giving_ledger.utils.date_utils import get_date_range

MIN_FORECAST_DONATIONS = 3
IMPACT_STORY_DONATIONS = 10


class Advisor:
    """
    Text advice for a user's finances.

    Every operation returns a structurally valid result: when the provider
    is missing, fails, or answers with something unusable, the matching
    deterministic fallback from ``giving_ledger.domain.advice`` is used and
    the result is tagged with a fallback note.
    """

    def __init__(self, ledger: LedgerStore, profiles: ProfileStore, provider: Optional[AdviceProvider] = None):
        self.ledger = ledger
        self.profiles = profiles
        self.provider = provider

    async def _ask(self, operation: str, user_id: str, prompt: str) -> Optional[str]:
        """Provider text, or None after logging and counting the fallback"""
        if self.provider is None:
            reason = "advice provider disabled"
        else:
            try:
                with advice_latency_histogram.time():
                    return await self.provider.generate(prompt)
            except ProviderUnavailable as e:
                reason = str(e)

        self._fell_back(operation, user_id, reason)
        return None

    @staticmethod
    def _fell_back(operation: str, user_id: str, reason: str) -> None:
        advice_fallback_counter.labels(operation=operation).inc()
        log_advice_fallback(operation, user_id, reason)

    @staticmethod
    def _result(text: Optional[str], fallback_text: str) -> AdviceResult:
        if text is None:
            return AdviceResult(
                text=fallback_text,
                generated_at=datetime.utcnow(),
                fallback=True,
                note=advice.FALLBACK_NOTE,
            )
        return AdviceResult(text=text, generated_at=datetime.utcnow())

    async def financial_advice(self, user_id: str, now: datetime | None = None) -> AdviceResult:
        """Savings and giving tips for the current month"""
        profile = self.profiles.get(user_id)
        start, end = get_date_range("month", now)
        total_income = sum(e.amount for e in self.ledger.find(user_id, EntryKind.INCOME, start, end))
        total_expenses = sum(e.amount for e in self.ledger.find(user_id, EntryKind.EXPENSE, start, end))
        total_donations = sum(e.amount for e in self.ledger.find(user_id, EntryKind.DONATION, start, end))
        goal = profile.current_donation_goal

        text = await self._ask(
            "financial",
            user_id,
            advice.financial_advice_prompt(total_income, total_expenses, total_donations, goal),
        )
        return self._result(
            text,
            advice.fallback_financial_advice(total_income, total_expenses, total_donations, goal, profile.currency),
        )

    async def donation_recommendations(self, user_id: str, now: datetime | None = None) -> AdviceResult:
        profile = self.profiles.get(user_id)
        start, end = get_date_range("month", now)
        monthly_income = sum(e.amount for e in self.ledger.find(user_id, EntryKind.INCOME, start, end))
        monthly_expense = sum(e.amount for e in self.ledger.find(user_id, EntryKind.EXPENSE, start, end))
        stability = advice.financial_stability(monthly_income, monthly_expense)

        text = await self._ask(
            "donations",
            user_id,
            advice.donation_recommendation_prompt(monthly_income, profile.donation_percentage, stability),
        )
        return self._result(text, advice.fallback_donation_recommendation(stability))

    async def categorize_expense(self, user_id: str, description: str, amount: float | None = None) -> AdviceResult:
        """Suggest an expense category; unknown provider answers fall back to keyword matching"""
        text = await self._ask("categorize", user_id, advice.categorize_prompt(description, amount))
        category = None
        if text is not None:
            category = advice.normalize_category(text)
            if category is None:
                self._fell_back("categorize", user_id, "unknown provider category")
        return self._result(category, advice.categorize_fallback(description))

    async def impact_story(
        self, user_id: str, start: datetime | None = None, end: datetime | None = None
    ) -> AdviceResult:
        donations = self.ledger.find(user_id, EntryKind.DONATION, start, end)[-IMPACT_STORY_DONATIONS:]
        if not donations:
            raise InsufficientDataError("No donations found for the specified period")

        text = await self._ask("impact_story", user_id, advice.impact_story_prompt(donations))
        return self._result(text, advice.fallback_impact_story(donations))

    async def forecast(self, user_id: str, months: int | None = None, today: date | None = None) -> DonationForecast:
        """
        Forecast monthly donations, preferring the provider's JSON answer.

        Requires at least three donations. Provider failures and replies that
        are not a JSON list of ``{"month", "projected_amount"}`` objects fall
        back to the flat recent-average projection.
        """
        months = months or settings.forecast_months
        donations = self.ledger.find(user_id, EntryKind.DONATION)
        if len(donations) < MIN_FORECAST_DONATIONS:
            raise InsufficientDataError(
                f"Insufficient data for forecasting. At least {MIN_FORECAST_DONATIONS} donations required."
            )

        history = totals_by_month(donations)
        text = await self._ask("forecast", user_id, advice.forecast_prompt(history, months))

        points = _parse_forecast(text) if text is not None else None
        if points is None:
            if text is not None:
                self._fell_back("forecast", user_id, "unparseable provider forecast")
            return DonationForecast(
                forecast=project_donations(history, months, confidence=advisor_confidence, today=today),
                historical=history[-6:],
                generated_at=datetime.utcnow(),
                fallback=True,
                note=advice.FALLBACK_NOTE,
            )

        return DonationForecast(forecast=points, historical=history[-6:], generated_at=datetime.utcnow())


def _parse_forecast(text: str) -> Optional[List[ForecastPoint]]:
    try:
        payload = json.loads(text)
        points = [
            ForecastPoint(
                month=str(item["month"]),
                projected_amount=round(float(item["projected_amount"])),
                confidence=str(item.get("confidence", "low")),
            )
            for item in payload
        ]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError, OverflowError):
        # round() raises OverflowError on inf and ValueError on nan
        return None
    return points or None
