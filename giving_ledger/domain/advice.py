"""Prompts for the advice provider and the deterministic fallbacks used when it is unavailable"""

import json
from typing import List, Sequence

from giving_ledger.domain.metrics import percentage, remaining_goal, savings_rate
from giving_ledger.domain.models import EXPENSE_CATEGORIES, LedgerEntry, MonthlyTotal

FALLBACK_NOTE = "Generated using fallback system"

# Checked in order; first category with a matching keyword wins
CATEGORY_KEYWORDS = (
    ("food", ("food", "restaurant", "grocery")),
    ("travel", ("uber", "taxi", "bus", "train")),
    ("bills", ("electric", "water", "gas", "bill")),
    ("shopping", ("shop", "store", "mall")),
    ("healthcare", ("doctor", "hospital", "medicine")),
    ("education", ("school", "course", "book")),
    ("entertainment", ("movie", "game", "concert")),
)


def financial_stability(monthly_income: float, monthly_expense: float) -> str:
    """high above 30% savings, medium above 15%, low otherwise (donations not counted)"""
    rate = savings_rate(monthly_income, monthly_expense, 0)
    if rate > 30:
        return "high"
    if rate > 15:
        return "medium"
    return "low"


def financial_advice_prompt(
    total_income: float,
    total_expenses: float,
    total_donations: float,
    donation_goal: float,
) -> str:
    return (
        "You are a financial advisor. Based on the following data, provide personalized financial advice:\n\n"
        f"Income: {total_income}\n"
        f"Expenses: {total_expenses}\n"
        f"Donations: {total_donations}\n"
        f"Donation Goal: {donation_goal}\n"
        f"Remaining Goal: {remaining_goal(donation_goal, total_donations)}\n\n"
        "Provide 3-4 actionable tips to help them save money and reach their donation goals."
    )


def fallback_financial_advice(
    total_income: float,
    total_expenses: float,
    total_donations: float,
    donation_goal: float,
    currency: str = "INR",
) -> str:
    """Rule-based tips; always returns at least the emergency-fund tip"""
    tips: List[str] = []

    if savings_rate(total_income, total_expenses, total_donations) < 10:
        tips.append(
            "Your savings rate is low. Try to reduce unnecessary expenses to improve your financial stability."
        )

    if total_donations < donation_goal:
        remaining = remaining_goal(donation_goal, total_donations)
        tips.append(
            f"You're {currency} {remaining:,.2f} away from your donation goal. "
            "Consider setting aside small amounts regularly."
        )

    if percentage(total_expenses, total_income) > 70:
        tips.append(
            "Your expenses are high relative to income. "
            "Review your spending categories to identify areas for reduction."
        )

    tips.append("Set up automatic transfers to a savings account to build your emergency fund.")
    return "\n\n".join(tips)


def donation_recommendation_prompt(monthly_income: float, donation_percentage: float, stability: str) -> str:
    return (
        "Based on this financial profile:\n\n"
        f"Monthly Income: {monthly_income}\n"
        f"Current Donation Percentage: {donation_percentage}%\n"
        f"Financial Stability: {stability}\n\n"
        "Recommend an appropriate donation percentage and suggest 2-3 causes or charities they might support."
    )


def fallback_donation_recommendation(stability: str) -> str:
    recommended = {"high": 7, "low": 2}.get(stability, 5)
    return (
        f"Based on your financial stability ({stability}), we recommend donating {recommended}% of your income.\n\n"
        "Suggested causes:\n"
        "- Education programs for underprivileged children\n"
        "- Healthcare initiatives in your community\n"
        "- Environmental conservation projects\n\n"
        "Start small and increase gradually as your income grows."
    )


def categorize_prompt(description: str, amount: float | None) -> str:
    return (
        "Categorize this expense into ONE of these categories: "
        "Food, Travel, Bills, Shopping, Healthcare, Education, Entertainment, Other.\n\n"
        f"Description: {description}\n"
        f"Amount: {amount}\n\n"
        "Respond with only the category name."
    )


def normalize_category(text: str) -> str | None:
    """Provider reply to a known expense category, or None when it is not one"""
    category = text.strip().strip(".").lower()
    return category if category in EXPENSE_CATEGORIES else None


def categorize_fallback(description: str) -> str:
    desc = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in desc for keyword in keywords):
            return category
    return "other"


def impact_story_prompt(donations: Sequence[LedgerEntry]) -> str:
    total = sum(d.amount for d in donations)
    causes = ", ".join(d.recipient or d.category for d in donations)
    return (
        "Create an inspiring, personal impact story (2-3 sentences) about someone who donated "
        f"{total} to causes including: {causes}."
    )


def fallback_impact_story(donations: Sequence[LedgerEntry]) -> str:
    total = sum(d.amount for d in donations)
    return (
        f"Through {len(donations)} generous donations totaling {total:,.2f}, you've made a meaningful "
        "difference in the lives of many. Your commitment to giving back demonstrates compassion "
        "and creates ripples of positive change in the world."
    )


def forecast_prompt(history: Sequence[MonthlyTotal], months: int) -> str:
    payload = [{"month": m.month, "amount": m.amount, "count": m.count} for m in history]
    return (
        f"Based on this donation history: {json.dumps(payload)}, predict the likely donation amount "
        f"for the next {months} months. Provide your answer as a JSON array of objects with "
        '"month" (YYYY-MM) and "projected_amount" keys. Respond with valid JSON only.'
    )
