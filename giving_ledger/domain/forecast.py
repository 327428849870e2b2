"""Naive donation forecasting from recent monthly averages"""

from datetime import date
from typing import Callable, List, Sequence

from giving_ledger.domain.models import ForecastPoint, MonthlyTotal
from giving_ledger.utils.date_utils import add_months, month_key

RECENT_MONTHS = 3

ConfidencePolicy = Callable[[int], str]


def dashboard_confidence(history_points: int) -> str:
    """Dashboard predictions: more than 5 historical donations is high confidence"""
    return "high" if history_points > 5 else "medium"


def advisor_confidence(history_points: int) -> str:
    """Advisor forecast: more than 6 historical months is medium confidence, never high"""
    return "medium" if history_points > 6 else "low"


def recent_average(history: Sequence[MonthlyTotal], recent_months: int = RECENT_MONTHS) -> float:
    """Arithmetic mean of the last ``recent_months`` monthly totals (or fewer when unavailable)"""
    recent = list(history)[-recent_months:]
    if not recent:
        return 0.0
    return sum(m.amount for m in recent) / len(recent)


def project_donations(
    history: Sequence[MonthlyTotal],
    months: int = 3,
    confidence: ConfidencePolicy = dashboard_confidence,
    history_points: int | None = None,
    today: date | None = None,
) -> List[ForecastPoint]:
    """
    Project the recent monthly average forward for ``months`` months.

    Known limitation: this is a flat projection. It ignores seasonality and
    does not extrapolate trends; every future month gets the same amount.

    Args:
        history: Chronological monthly donation totals
        months: Number of future months to project
        confidence: Policy mapping the number of historical points to a label
        history_points: Count fed to the confidence policy (defaults to len(history))
        today: Reference date; labels start at the month after it

    Returns:
        One ForecastPoint per future month, empty when there is no history
    """
    if not history or months <= 0:
        return []

    today = today or date.today()
    average = recent_average(history)
    label = confidence(len(history) if history_points is None else history_points)

    return [
        ForecastPoint(
            month=month_key(add_months(today, offset)),
            projected_amount=round(average),
            confidence=label,
        )
        for offset in range(1, months + 1)
    ]
