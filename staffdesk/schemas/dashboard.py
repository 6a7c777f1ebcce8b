"""Pydantic schemas for the staff dashboard API."""
from __future__ import annotations

from datetime import datetime
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from staffdesk.schemas.snapshots import (
    ActivityEvent,
    AttentionCounts,
    LocationAnalytics,
    MetricsSnapshot,
    SnapshotModel,
)

T = TypeVar("T")

InsightKind = Literal["success", "warning", "danger", "info"]
InsightRule = Literal["success_rate", "response_time", "pending_claims"]
BadgeKey = Literal["danger", "success"]
TriageAction = Literal["review_claims", "manage_expired", "view_all_items"]


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------


class Insight(BaseModel):
    """A classified diagnostic statement produced by one threshold rule."""

    model_config = ConfigDict(frozen=True)

    rule: InsightRule = Field(description="Rule that produced the insight")
    kind: InsightKind = Field(description="Severity class")
    message: str = Field(
        description="Display text", examples=["Excellent success rate of 85%"]
    )


# ---------------------------------------------------------------------------
# Attention triage
# ---------------------------------------------------------------------------


class PerCategory(BaseModel, Generic[T]):
    pendingClaims: T
    expiredItems: T
    expiringSoon: T


class TriageItem(BaseModel):
    title: str = Field(description="Item title")
    location: str = Field(description="Where the item is held")
    expiryDate: str | None = Field(default=None, description="Raw expiry value from upstream")
    expiryDisplay: str | None = Field(
        default=None, description="Expiry rendered as M/D/YYYY", examples=["3/14/2025"]
    )


class TriageView(BaseModel):
    """Unified attention queue with capped previews."""

    totalCount: int = Field(description="Sum of the three attention counts", examples=[7])
    needsAttention: bool = Field(description="True when totalCount > 0")
    counts: AttentionCounts
    previews: PerCategory[list[TriageItem]]
    hasOverflow: PerCategory[bool]
    listTotals: PerCategory[int] = Field(description="Length of each upstream list")
    summaryLines: list[str] = Field(
        default=[], examples=[["2 claims need review", "1 items expiring soon"]]
    )
    actions: list[TriageAction] = Field(default=[])


# ---------------------------------------------------------------------------
# Activity feed
# ---------------------------------------------------------------------------


class ActivityEntry(BaseModel):
    type: str = Field(description="Raw activity type")
    iconKey: str = Field(examples=["package"])
    colorKey: str = Field(examples=["blue"])
    message: str = Field(examples=['New lost item: "Black wallet"'])
    relativeTime: str = Field(examples=["about 2 hours ago"])
    attribution: str | None = Field(default=None, description="Reporter or claimant name")
    location: str | None = None
    itemType: str = ""
    badgeKey: BadgeKey = "success"


class ActivityFeed(BaseModel):
    entries: list[ActivityEntry]
    total: int = Field(description="Events received before the display cap")
    hasMore: bool
    isEmpty: bool


# ---------------------------------------------------------------------------
# Location overview
# ---------------------------------------------------------------------------


class StatusShare(BaseModel):
    status: Literal["active", "claimed", "returned"]
    count: int
    percent: float = Field(description="Share of total items (0-100)")


class CategoryTile(BaseModel):
    id: str
    count: int
    active: int
    returned: int


class PeakHourBar(BaseModel):
    hour: int
    label: str = Field(examples=["14:00 - 15:00"])
    count: int
    widthPercent: float = Field(description="Relative to the busiest hour")


class WeeklyTrendRow(BaseModel):
    week: int
    type: str
    label: str = Field(examples=["Week 12 - lost items"])
    badgeKey: BadgeKey
    count: int


class ItemTypeBreakdown(BaseModel):
    lost: int
    found: int
    total: int


class PerformanceSummary(BaseModel):
    avgResponseTime: float | None = None
    minResponseTime: float
    maxResponseTime: float


class LocationOverview(BaseModel):
    location: str | None = None
    successRate: float
    successRateTier: Literal["success", "warning", "danger"]
    statusDistribution: list[StatusShare]
    categoryPreview: list[CategoryTile]
    hasMoreCategories: bool
    peakHourBars: list[PeakHourBar]
    weeklyTrends: list[WeeklyTrendRow]
    itemTypes: ItemTypeBreakdown
    performance: PerformanceSummary


# ---------------------------------------------------------------------------
# Composite view
# ---------------------------------------------------------------------------


class SourceStatus(BaseModel):
    available: bool = Field(description="A snapshot has been received at least once")
    fetchedAt: datetime | None = None


class DashboardView(BaseModel):
    location: str | None = None
    generatedAt: datetime
    insights: list[Insight]
    recommendations: list[str]
    attention: TriageView
    activity: ActivityFeed
    overview: LocationOverview
    sources: dict[str, SourceStatus]


# ---------------------------------------------------------------------------
# Stateless derivation requests
# ---------------------------------------------------------------------------


class RecommendationsRequest(SnapshotModel):
    analytics: LocationAnalytics = Field(default_factory=LocationAnalytics)
    stats: MetricsSnapshot = Field(default_factory=MetricsSnapshot)


class ActivityRequest(SnapshotModel):
    events: list[ActivityEvent] = Field(default=[])
    now: datetime | None = Field(
        default=None, description="Evaluation instant; defaults to the server clock"
    )
    limit: int = Field(default=10, ge=1, le=100)

