"""Prometheus metrics for monitoring ledger mutations, score refreshes, and advice fallbacks"""

from prometheus_client import Counter, Histogram

# Running totals
totals_recompute_counter = Counter(
    "giving_ledger_totals_recompute_total",
    "Running-total recomputations triggered by ledger mutations",
    ["kind", "event"],  # income | expense | donation ; committed | updated | removed | deactivated
)

giving_score_histogram = Histogram(
    "giving_ledger_giving_score",
    "Giving scores written to user profiles",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

# Advice provider
advice_latency_histogram = Histogram(
    "advice_provider_latency_seconds",
    "Advice provider response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

advice_fallback_counter = Counter(
    "advice_fallback_total",
    "Responses served by the deterministic fallback",
    ["operation"],  # financial | donations | categorize | impact_story | forecast
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_recompute(kind: str, event: str, giving_score: int | None = None) -> None:
    """Record a running-total refresh and, for donations, the resulting score"""
    totals_recompute_counter.labels(kind=kind, event=event).inc()
    if giving_score is not None:
        giving_score_histogram.observe(giving_score)
