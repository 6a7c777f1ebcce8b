"""Tests for recommendation rules."""
from staffdesk.services.dashboard.recommendations import (
    BASELINE_RECOMMENDATIONS,
    derive_recommendations,
)


def test_empty_analytics_returns_baseline_only():
    result = derive_recommendations({"peakHours": [], "topCategories": []}, {})
    assert result == [
        "Focus on processing pending claims quickly",
        "Maintain detailed verification records",
        "Encourage user feedback for continuous improvement",
    ]


def test_peak_hour_prepends_one_line():
    analytics = {"peakHours": [{"hour": 14, "count": 9}, {"hour": 9, "count": 4}]}
    result = derive_recommendations(analytics, {})
    assert len(result) == 4
    assert result[0] == "Peak activity: 14:00 - schedule accordingly"
    assert result[1:] == list(BASELINE_RECOMMENDATIONS)


def test_peak_hour_and_category_with_mongo_ids():
    """Upstream aggregation rows use _id."""
    analytics = {
        "peakHours": [{"_id": 9, "count": 12}],
        "topCategories": [{"_id": "electronics", "count": 20, "recent": 3}],
    }
    result = derive_recommendations(analytics, {})
    assert result[:2] == [
        "Peak activity: 9:00 - schedule accordingly",
        "Most common: electronics items",
    ]
    assert len(result) == 5


def test_slow_response_appends_streamlining():
    stats = {"performance": {"avgResponseTime": 5.5}}
    result = derive_recommendations({}, stats)
    assert result[-1] == "Consider streamlining the claim verification process"
    assert len(result) == 4


def test_response_time_exactly_five_does_not_append():
    result = derive_recommendations({}, {"performance": {"avgResponseTime": 5}})
    assert len(result) == 3


def test_missing_inputs_do_not_raise():
    assert derive_recommendations(None, None) == list(BASELINE_RECOMMENDATIONS)
    assert derive_recommendations({"peakHours": None, "topCategories": None}, {"performance": None}) == (
        list(BASELINE_RECOMMENDATIONS)
    )


def test_full_order():
    analytics = {"peakHours": [{"hour": 17, "count": 3}], "topCategories": [{"id": "keys", "count": 8}]}
    result = derive_recommendations(analytics, {"performance": {"avgResponseTime": 8}})
    assert result == [
        "Peak activity: 17:00 - schedule accordingly",
        "Most common: keys items",
        *BASELINE_RECOMMENDATIONS,
        "Consider streamlining the claim verification process",
    ]


def test_unknown_response_time_does_not_append_streamlining():
    result = derive_recommendations({}, {"performance": {"avgResponseTime": None}})
    assert result == list(BASELINE_RECOMMENDATIONS)


def test_same_inputs_give_same_output():
    analytics = {"peakHours": [{"_id": 9, "count": 4}], "topCategories": [{"_id": "keys", "count": 2}]}
    stats = {"performance": {"avgResponseTime": 6.5}}
    assert derive_recommendations(analytics, stats) == derive_recommendations(analytics, stats)
