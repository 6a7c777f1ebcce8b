"""Threshold rules that classify location metrics into insights.

Every rule runs on every call and emits exactly one insight, in the order
of ``INSIGHT_RULES``.  Consumers should key on ``Insight.rule`` rather than
list position.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from staffdesk.schemas.dashboard import Insight, InsightRule
from staffdesk.schemas.snapshots import MetricsSnapshot, coerce
from staffdesk.services.dashboard.shared import format_number

# Success rate (%): above GOOD is success, above FAIR is warning, else danger
SUCCESS_RATE_GOOD = 70
SUCCESS_RATE_FAIR = 40

# Average response time (days): below FAST is success, below SLOW is warning,
# anything else (including unknown) is danger
RESPONSE_TIME_FAST = 3
RESPONSE_TIME_SLOW = 7


def classify_success_rate(rate: float) -> str:
    if rate > SUCCESS_RATE_GOOD:
        return "success"
    if rate > SUCCESS_RATE_FAIR:
        return "warning"
    return "danger"


def classify_response_time(days: float | None) -> str:
    if days is None:
        return "danger"
    if days < RESPONSE_TIME_FAST:
        return "success"
    if days < RESPONSE_TIME_SLOW:
        return "warning"
    return "danger"


def success_rate_insight(snapshot: MetricsSnapshot) -> Insight:
    rate = snapshot.overview.successRate
    kind = classify_success_rate(rate)
    if kind == "success":
        message = f"Excellent success rate of {format_number(rate)}%"
    elif kind == "warning":
        message = "Moderate success rate - room for improvement"
    else:
        message = "Low success rate - requires attention"
    return Insight(rule="success_rate", kind=kind, message=message)


def response_time_insight(snapshot: MetricsSnapshot) -> Insight:
    kind = classify_response_time(snapshot.performance.avgResponseTime)
    message = {
        "success": "Fast response time - great customer service",
        "warning": "Moderate response time - consider optimization",
        "danger": "Slow response time - needs improvement",
    }[kind]
    return Insight(rule="response_time", kind=kind, message=message)


def pending_claims_insight(snapshot: MetricsSnapshot) -> Insight:
    # None (unknown) must not be folded into 0
    pending = snapshot.overview.pendingClaims
    if pending == 0:
        return Insight(
            rule="pending_claims", kind="success",
            message="All claims processed - excellent work!",
        )
    if pending is not None and pending > 0:
        return Insight(
            rule="pending_claims", kind="info",
            message=f"{pending} claims pending review",
        )
    return Insight(
        rule="pending_claims", kind="info",
        message="Pending claims data not available",
    )


INSIGHT_RULES: list[Callable[[MetricsSnapshot], Insight]] = [
    success_rate_insight,
    response_time_insight,
    pending_claims_insight,
]


# ===================================================================
# Public API
# ===================================================================


def derive_insights(snapshot: MetricsSnapshot | dict[str, Any] | None) -> list[Insight]:
    """Evaluate all insight rules in order over a stats snapshot."""
    stats = coerce(MetricsSnapshot, snapshot)
    return [rule(stats) for rule in INSIGHT_RULES]


def insights_by_rule(insights: list[Insight]) -> dict[InsightRule, Insight]:
    return {insight.rule: insight for insight in insights}
