"""Pydantic models for the upstream dashboard snapshots.

These models are the single default-filling boundary: every rule in
``staffdesk.services.dashboard`` receives a fully populated record.  Nulls
are stripped before validation so that a ``null`` counter behaves exactly
like a missing one, and null entries inside lists are dropped.

The exceptions are ``Overview.pendingClaims`` and ``Performance.avgResponseTime``,
which stay ``None`` when unknown so the rules can tell "unknown" apart from ``0``.
Numbers arriving where text is expected are rendered as strings.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class SnapshotModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, list):
                value = [v for v in value if v is not None]
            cleaned[key] = value
        return cleaned


M = TypeVar("M", bound=SnapshotModel)


def coerce(model: type[M], raw: Any) -> M:
    """Return *raw* as an instance of *model*, filling defaults."""
    if isinstance(raw, model):
        return raw
    if raw is None:
        return model()
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(by_alias=False)
    return model.model_validate(raw)


# ---------------------------------------------------------------------------
# Dashboard stats
# ---------------------------------------------------------------------------


class Overview(SnapshotModel):
    totalItems: int = Field(default=0, description="Items at this location")
    activeItems: int = Field(default=0, description="Items still open")
    claimedItems: int = Field(default=0, description="Items with an accepted claim")
    returnedItems: int = Field(default=0, description="Items handed back to owners")
    pendingClaims: int | None = Field(
        default=None, description="Claims awaiting review; null when unknown"
    )
    successRate: float = Field(default=0, description="Returned share of items (0-100)")
    recentItems: int = Field(default=0, description="Items reported within the time range")


class Performance(SnapshotModel):
    avgResponseTime: float | None = Field(
        default=None, description="Average days to process a claim; null when unknown"
    )
    minResponseTime: float = Field(default=0, description="Fastest claim processing (days)")
    maxResponseTime: float = Field(default=0, description="Slowest claim processing (days)")


class CategoryBreakdown(SnapshotModel):
    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    count: int = 0
    active: int = 0
    returned: int = 0


class Breakdown(SnapshotModel):
    lostItems: int = 0
    foundItems: int = 0
    categories: list[CategoryBreakdown] = Field(default_factory=list)


class MetricsSnapshot(SnapshotModel):
    location: str | None = Field(default=None, description="Branch the stats are scoped to")
    overview: Overview = Field(default_factory=Overview)
    performance: Performance = Field(default_factory=Performance)
    breakdown: Breakdown = Field(default_factory=Breakdown)


# ---------------------------------------------------------------------------
# Location analytics
# ---------------------------------------------------------------------------


class TopCategory(SnapshotModel):
    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    count: int = 0
    recent: int = 0


class PeakHour(SnapshotModel):
    hour: int = Field(default=0, validation_alias=AliasChoices("hour", "_id"))
    count: int = 0


class WeekId(SnapshotModel):
    week: int = 0
    type: str = ""


class WeeklyTrend(SnapshotModel):
    weekId: WeekId = Field(
        default_factory=WeekId, validation_alias=AliasChoices("weekId", "_id")
    )
    count: int = 0


class LocationAnalytics(SnapshotModel):
    topCategories: list[TopCategory] = Field(default_factory=list)
    peakHours: list[PeakHour] = Field(default_factory=list)
    weeklyTrends: list[WeeklyTrend] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Attention queue
# ---------------------------------------------------------------------------


class AttentionCounts(SnapshotModel):
    pendingClaims: int = 0
    expired: int = 0
    expiringSoon: int = 0


class AttentionItem(SnapshotModel):
    title: str = ""
    location: str = ""
    expiryDate: Any = None


class AttentionSnapshot(SnapshotModel):
    counts: AttentionCounts = Field(default_factory=AttentionCounts)
    pendingClaims: list[AttentionItem] = Field(default_factory=list)
    expiredItems: list[AttentionItem] = Field(default_factory=list)
    expiringSoon: list[AttentionItem] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Activity stream
# ---------------------------------------------------------------------------


class PersonRef(SnapshotModel):
    name: str | None = None


class ActivityData(SnapshotModel):
    itemType: str = ""
    itemTitle: str = ""
    location: str | None = None
    reportedBy: PersonRef | None = None
    claimedBy: PersonRef | None = None

    @field_validator("reportedBy", "claimedBy", mode="before")
    @classmethod
    def _unpopulated_ref(cls, value: Any) -> Any:
        # an unpopulated reference arrives as a bare id string
        if isinstance(value, (Mapping, PersonRef)):
            return value
        return None


class ActivityEvent(SnapshotModel):
    type: str = ""
    timestamp: Any = None
    data: ActivityData = Field(default_factory=ActivityData)
