"""Compose dashboard views from the cached upstream snapshots."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from staffdesk.config import settings
from staffdesk.schemas.dashboard import (
    ActivityFeed,
    DashboardView,
    Insight,
    LocationOverview,
    SourceStatus,
    TriageView,
)
from staffdesk.schemas.snapshots import MetricsSnapshot, coerce
from staffdesk.services import snapshot_cache
from staffdesk.services.dashboard.activity import build_activity_feed
from staffdesk.services.dashboard.attention import derive_triage_view
from staffdesk.services.dashboard.insights import derive_insights
from staffdesk.services.dashboard.overview import derive_location_overview
from staffdesk.services.dashboard.recommendations import derive_recommendations
from staffdesk.services.dashboard.shared import utc_now
from staffdesk.services.upstream_client import SNAPSHOT_SOURCES


def _activity_events() -> list[Any]:
    payload = snapshot_cache.get_payload("activity")
    return payload if isinstance(payload, list) else []


def get_insights() -> list[Insight]:
    return derive_insights(snapshot_cache.get_payload("stats"))


def get_recommendations() -> list[str]:
    return derive_recommendations(
        snapshot_cache.get_payload("analytics"), snapshot_cache.get_payload("stats"),
    )


def get_attention() -> TriageView:
    return derive_triage_view(snapshot_cache.get_payload("attention"))


def get_activity(now: datetime | None = None, limit: int | None = None) -> ActivityFeed:
    return build_activity_feed(
        _activity_events(), now=now, limit=limit or settings.ACTIVITY_DISPLAY_LIMIT,
    )


def get_overview() -> LocationOverview:
    return derive_location_overview(
        snapshot_cache.get_payload("stats"),
        snapshot_cache.get_payload("analytics"),
        category_limit=settings.CATEGORY_DISPLAY_LIMIT,
    )


def get_source_status() -> dict[str, SourceStatus]:
    cached = snapshot_cache.all_snapshots()
    status: dict[str, SourceStatus] = {}
    for source in SNAPSHOT_SOURCES:
        entry = cached.get(source)
        status[source] = SourceStatus(
            available=entry is not None,
            fetchedAt=entry.fetched_at if entry is not None else None,
        )
    return status


def get_dashboard(now: datetime | None = None) -> DashboardView:
    """Derive every panel from whatever snapshots are currently cached.

    Panels may come from snapshots of different ages; ``sources`` reports
    when each one was fetched.
    """
    now = now or utc_now()
    stats = coerce(MetricsSnapshot, snapshot_cache.get_payload("stats"))
    return DashboardView(
        location=stats.location,
        generatedAt=now,
        insights=derive_insights(stats),
        recommendations=derive_recommendations(snapshot_cache.get_payload("analytics"), stats),
        attention=get_attention(),
        activity=get_activity(now=now),
        overview=get_overview(),
        sources=get_source_status(),
    )
