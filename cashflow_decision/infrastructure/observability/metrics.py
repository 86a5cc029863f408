"""Prometheus metrics for decision outcomes, schedule warnings, and funding advice"""

from prometheus_client import Counter, Histogram

from cashflow_decision.domain.models import DecisionReport

# Decision metrics
decision_counter = Counter(
    "cashflow_decision_total",
    "Total cash-flow decisions made",
    ["outcome"],  # safe | unsafe
)

schedule_warning_counter = Counter(
    "cashflow_schedule_warnings_total",
    "Warnings raised while scheduling profile events",
    ["code"],
)

funding_counter = Counter(
    "cashflow_funding_total",
    "Funding recommendations issued for unsafe anchors",
    ["outcome"],  # funded | partial | unfunded
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def funding_outcome(borrow_amount: float, unfunded_remainder: float) -> str:
    if borrow_amount <= 0:
        return "unfunded"
    if unfunded_remainder > 0:
        return "partial"
    return "funded"


def record_decision(report: DecisionReport) -> None:
    """Record decision metrics for monitoring unsafe rates and borrowing advice"""
    decision_counter.labels(outcome="safe" if report.safe else "unsafe").inc()

    for warning in report.warnings:
        schedule_warning_counter.labels(code=warning.code).inc()

    for recommendation in report.recommendations:
        outcome = funding_outcome(recommendation.borrow_amount, recommendation.unfunded_remainder)
        funding_counter.labels(outcome=outcome).inc()
