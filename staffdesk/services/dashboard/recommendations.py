"""Recommendation rules: analytics facts plus fixed baseline guidance."""
from __future__ import annotations

from typing import Any

from staffdesk.schemas.snapshots import LocationAnalytics, MetricsSnapshot, coerce

BASELINE_RECOMMENDATIONS: tuple[str, ...] = (
    "Focus on processing pending claims quickly",
    "Maintain detailed verification records",
    "Encourage user feedback for continuous improvement",
)

# Average response time (days) above which verification should be streamlined
STREAMLINE_THRESHOLD_DAYS = 5


def derive_recommendations(
    analytics: LocationAnalytics | dict[str, Any] | None,
    snapshot: MetricsSnapshot | dict[str, Any] | None,
) -> list[str]:
    """Build the ordered recommendation list.

    Peak hour and top category lines only appear when the analytics carry
    them; the baseline three are always present.
    """
    location = coerce(LocationAnalytics, analytics)
    stats = coerce(MetricsSnapshot, snapshot)

    recommendations: list[str] = []
    if location.peakHours:
        recommendations.append(
            f"Peak activity: {location.peakHours[0].hour}:00 - schedule accordingly"
        )
    if location.topCategories:
        recommendations.append(f"Most common: {location.topCategories[0].id} items")

    recommendations.extend(BASELINE_RECOMMENDATIONS)

    avg = stats.performance.avgResponseTime
    if avg is not None and avg > STREAMLINE_THRESHOLD_DAYS:
        recommendations.append("Consider streamlining the claim verification process")
    return recommendations
