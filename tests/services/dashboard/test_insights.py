"""Tests for the insight threshold rules."""
import pytest
from pydantic import ValidationError

from staffdesk.schemas.snapshots import MetricsSnapshot
from staffdesk.services.dashboard.insights import derive_insights, insights_by_rule


def _stats(success_rate=80, avg_response=2, pending=0, **overview):
    return {
        "overview": {"successRate": success_rate, "pendingClaims": pending, **overview},
        "performance": {"avgResponseTime": avg_response},
    }


def test_always_three_insights_in_rule_order():
    """Three insights in fixed order, one per rule."""
    insights = derive_insights(_stats())
    assert [i.rule for i in insights] == ["success_rate", "response_time", "pending_claims"]


@pytest.mark.parametrize("rate", [70.01, 71, 85.5, 100])
def test_success_rate_above_70_is_success(rate):
    insight = derive_insights(_stats(success_rate=rate))[0]
    assert insight.kind == "success"
    assert str(rate) in insight.message


@pytest.mark.parametrize("rate,kind", [(70, "warning"), (40.01, "warning"), (40, "danger"), (0, "danger")])
def test_success_rate_boundaries(rate, kind):
    assert derive_insights(_stats(success_rate=rate))[0].kind == kind


def test_success_rate_message_drops_trailing_zero():
    """85.0 is shown as 85%, matching the console display."""
    insight = derive_insights(_stats(success_rate=85.0))[0]
    assert insight.message == "Excellent success rate of 85%"


def test_success_rate_warning_and_danger_messages():
    assert derive_insights(_stats(success_rate=50))[0].message == (
        "Moderate success rate - room for improvement"
    )
    assert derive_insights(_stats(success_rate=10))[0].message == (
        "Low success rate - requires attention"
    )


@pytest.mark.parametrize(
    "days,kind",
    [(0, "success"), (2.99, "success"), (3, "warning"), (6.9, "warning"), (7, "danger"), (30, "danger")],
)
def test_response_time_boundaries(days, kind):
    assert derive_insights(_stats(avg_response=days))[1].kind == kind


def test_pending_claims_zero_is_success():
    insight = derive_insights(_stats(pending=0))[2]
    assert insight.kind == "success"
    assert insight.message == "All claims processed - excellent work!"


def test_pending_claims_positive_is_info_with_count():
    insight = derive_insights(_stats(pending=5))[2]
    assert insight.kind == "info"
    assert "5" in insight.message
    assert insight.message == "5 claims pending review"


def test_pending_claims_null_is_not_zero():
    """null means unknown, which must not be treated as 0."""
    insight = derive_insights(_stats(pending=None))[2]
    assert insight.kind == "info"
    assert insight.message == "Pending claims data not available"


def test_pending_claims_absent_is_unknown():
    stats = {"overview": {"successRate": 90}, "performance": {"avgResponseTime": 1}}
    insight = derive_insights(stats)[2]
    assert insight.message == "Pending claims data not available"


def test_empty_snapshot_uses_defaults():
    """Missing counters default to 0, unknown response time is danger; nothing raises."""
    insights = derive_insights({})
    assert [i.kind for i in insights] == ["danger", "danger", "info"]
    assert derive_insights(None) == insights


def test_accepts_model_instance():
    snapshot = MetricsSnapshot.model_validate(_stats(success_rate=55, avg_response=4, pending=2))
    kinds = [i.kind for i in derive_insights(snapshot)]
    assert kinds == ["warning", "warning", "info"]


def test_insights_by_rule_keys_on_discriminant():
    by_rule = insights_by_rule(derive_insights(_stats(pending=3)))
    assert set(by_rule) == {"success_rate", "response_time", "pending_claims"}
    assert by_rule["pending_claims"].message == "3 claims pending review"


def test_insights_are_immutable():
    insight = derive_insights(_stats())[0]
    with pytest.raises(ValidationError):
        insight.kind = "danger"


def test_idempotent():
    stats = _stats(success_rate=62, avg_response=5, pending=None)
    assert derive_insights(stats) == derive_insights(stats)


@pytest.mark.parametrize("performance", [{}, {"avgResponseTime": None}, None])
def test_unknown_response_time_is_slow(performance):
    insight = derive_insights({"overview": {"successRate": 90}, "performance": performance})[1]
    assert insight.kind == "danger"
    assert insight.message == "Slow response time - needs improvement"
