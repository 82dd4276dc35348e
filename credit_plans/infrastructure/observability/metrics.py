"""Prometheus metrics for plan previews, submissions, and credit API performance"""

from prometheus_client import Counter, Histogram

# Plan metrics
plan_built_counter = Counter(
    "credit_plans_built_total",
    "Installment plans computed",
    ["interest_kind", "endpoint"],  # endpoint: preview | resolve | credits
)

plan_installments_histogram = Histogram(
    "credit_plans_installments",
    "Installments per computed plan",
    buckets=[1, 2, 3, 4, 6, 12, 24, 36, 60],
)

invalid_plan_request_counter = Counter(
    "credit_plans_invalid_requests_total",
    "Plan requests rejected as invalid",
)

submission_counter = Counter(
    "credit_submissions_total",
    "Credit submissions resolved",
    ["mode"],  # manual | generated
)

# Credit API metrics
credit_api_latency_histogram = Histogram(
    "credit_api_latency_seconds",
    "Credit API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

credit_api_failure_counter = Counter(
    "credit_api_failures_total",
    "Failed credit API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_plan(interest_kind: str, endpoint: str, installment_count: int) -> None:
    """Record plan metrics for monitoring preview and submission traffic"""
    plan_built_counter.labels(interest_kind=interest_kind, endpoint=endpoint).inc()
    plan_installments_histogram.observe(installment_count)


def record_submission(is_manual: bool) -> None:
    submission_counter.labels(mode="manual" if is_manual else "generated").inc()
