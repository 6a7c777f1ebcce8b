"""Location overview panels: status shares, categories, peak hours, weekly trends."""
from __future__ import annotations

from typing import Any

from staffdesk.schemas.dashboard import (
    CategoryTile,
    ItemTypeBreakdown,
    LocationOverview,
    PeakHourBar,
    PerformanceSummary,
    StatusShare,
    WeeklyTrendRow,
)
from staffdesk.schemas.snapshots import LocationAnalytics, MetricsSnapshot, PeakHour, coerce
from staffdesk.services.dashboard.insights import classify_success_rate
from staffdesk.services.dashboard.shared import percent_of, take


def peak_hour_bars(peak_hours: list[PeakHour]) -> list[PeakHourBar]:
    """Bars sized relative to the first (busiest) hour."""
    if not peak_hours:
        return []
    top = peak_hours[0].count
    return [
        PeakHourBar(
            hour=h.hour,
            label=f"{h.hour}:00 - {h.hour + 1}:00",
            count=h.count,
            widthPercent=h.count * 100 / top if top else 0.0,
        )
        for h in peak_hours
    ]


def derive_location_overview(
    snapshot: MetricsSnapshot | dict[str, Any] | None,
    analytics: LocationAnalytics | dict[str, Any] | None,
    category_limit: int = 8,
) -> LocationOverview:
    stats = coerce(MetricsSnapshot, snapshot)
    location = coerce(LocationAnalytics, analytics)
    overview = stats.overview

    distribution = [
        StatusShare(status=status, count=count, percent=percent_of(count, overview.totalItems))
        for status, count in (
            ("active", overview.activeItems),
            ("claimed", overview.claimedItems),
            ("returned", overview.returnedItems),
        )
    ]

    categories, has_more = take(stats.breakdown.categories, category_limit)

    trends = [
        WeeklyTrendRow(
            week=t.weekId.week,
            type=t.weekId.type,
            label=f"Week {t.weekId.week} - {t.weekId.type} items",
            badgeKey="danger" if t.weekId.type == "lost" else "success",
            count=t.count,
        )
        for t in location.weeklyTrends
    ]

    return LocationOverview(
        location=stats.location,
        successRate=overview.successRate,
        successRateTier=classify_success_rate(overview.successRate),
        statusDistribution=distribution,
        categoryPreview=[CategoryTile(**c.model_dump()) for c in categories],
        hasMoreCategories=has_more,
        peakHourBars=peak_hour_bars(location.peakHours),
        weeklyTrends=trends,
        itemTypes=ItemTypeBreakdown(
            lost=stats.breakdown.lostItems,
            found=stats.breakdown.foundItems,
            total=overview.totalItems,
        ),
        performance=PerformanceSummary(**stats.performance.model_dump()),
    )
