"""Category and time-bucket aggregation of ledger amounts"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from giving_ledger.domain.models import DistributionBucket, LedgerEntry, MonthlyTotal
from giving_ledger.utils.date_utils import month_key

DEFAULT_CATEGORY = "other"


def category_distribution(entries: Iterable[LedgerEntry]) -> Dict[str, DistributionBucket]:
    """
    Group amounts by category and convert them to percentage shares.

    Categories appear in order of first occurrence. When the total is zero
    every bucket reports a 0% share.
    """
    totals: Dict[str, float] = {}
    total = 0.0
    for entry in entries:
        category = entry.category or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + entry.amount
        total += entry.amount

    return {
        category: DistributionBucket(
            amount=amount,
            percentage=(amount / total * 100) if total > 0 else 0.0,
        )
        for category, amount in totals.items()
    }


def top_categories(
    distribution: Dict[str, DistributionBucket],
    n: int = 3,
) -> List[Tuple[str, DistributionBucket]]:
    """Largest buckets by amount; sorted() is stable so ties keep first-seen order"""
    ranked = sorted(distribution.items(), key=lambda item: item[1].amount, reverse=True)
    return ranked[:n]


def totals_by_category(entries: Iterable[LedgerEntry]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for entry in entries:
        category = entry.category or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + entry.amount
    return totals


def totals_by_month(entries: Iterable[LedgerEntry]) -> List[MonthlyTotal]:
    """Aggregate entries into chronological ``YYYY-MM`` buckets"""
    buckets: Dict[str, MonthlyTotal] = {}
    for entry in sorted(entries, key=lambda e: e.date):
        key = month_key(entry.date)
        bucket = buckets.setdefault(key, MonthlyTotal(month=key, amount=0.0, count=0))
        bucket.amount += entry.amount
        bucket.count += 1
    return list(buckets.values())


def totals_by_weekday(entries: Iterable[LedgerEntry]) -> Dict[int, float]:
    """Amounts keyed by weekday (0 = Monday)"""
    totals: Dict[int, float] = {}
    for entry in entries:
        day = entry.date.weekday()
        totals[day] = totals.get(day, 0.0) + entry.amount
    return totals


def favorite_category(entries: Iterable[LedgerEntry]) -> Optional[str]:
    """Most frequent category by entry count; ties go to the first one seen"""
    counts = Counter(entry.category or DEFAULT_CATEGORY for entry in entries)
    if not counts:
        return None
    # Counter preserves insertion order and most_common sorts stably
    return counts.most_common(1)[0][0]
