"""Staff dashboard endpoints over the cached upstream snapshots."""
from fastapi import APIRouter, Query

from staffdesk.schemas.dashboard import (
    ActivityFeed,
    DashboardView,
    Insight,
    LocationOverview,
    TriageView,
)
from staffdesk.services.dashboard import service as dashboard_service

router = APIRouter()


@router.get(
    "/",
    response_model=DashboardView,
    summary="Full dashboard",
    description="Insights, recommendations, attention queue, activity feed and location "
    "overview derived from the latest snapshots. Each panel may come from a snapshot of a "
    "different age; `sources` reports when each was fetched.",
)
async def get_dashboard():
    return dashboard_service.get_dashboard()


@router.get(
    "/insights",
    response_model=list[Insight],
    summary="Performance insights",
    description="Success-rate, response-time and pending-claims insights, in that order.",
)
async def get_insights():
    return dashboard_service.get_insights()


@router.get(
    "/recommendations",
    response_model=list[str],
    summary="Recommendations",
)
async def get_recommendations():
    return dashboard_service.get_recommendations()


@router.get(
    "/attention",
    response_model=TriageView,
    summary="Items requiring attention",
    description="Pending claims, expired and expiring-soon items with capped previews.",
)
async def get_attention():
    return dashboard_service.get_attention()


@router.get(
    "/activity",
    response_model=ActivityFeed,
    summary="Recent activity",
)
async def get_activity(
    limit: int | None = Query(None, ge=1, le=100, description="Entries to display"),
):
    return dashboard_service.get_activity(limit=limit)


@router.get(
    "/overview",
    response_model=LocationOverview,
    summary="Location overview",
    description="Status distribution, category breakdown, peak hours and weekly trends.",
)
async def get_overview():
    return dashboard_service.get_overview()
