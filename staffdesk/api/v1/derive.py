"""Stateless derivation endpoints: callers post snapshots, get views back."""
from fastapi import APIRouter

from staffdesk.schemas.dashboard import (
    ActivityFeed,
    ActivityRequest,
    Insight,
    RecommendationsRequest,
    TriageView,
)
from staffdesk.schemas.snapshots import AttentionSnapshot, MetricsSnapshot
from staffdesk.services.dashboard.activity import build_activity_feed
from staffdesk.services.dashboard.attention import derive_triage_view
from staffdesk.services.dashboard.insights import derive_insights
from staffdesk.services.dashboard.recommendations import derive_recommendations

router = APIRouter()


@router.post("/insights", response_model=list[Insight], summary="Derive insights")
async def post_insights(snapshot: MetricsSnapshot):
    return derive_insights(snapshot)


@router.post(
    "/recommendations", response_model=list[str], summary="Derive recommendations",
)
async def post_recommendations(body: RecommendationsRequest):
    return derive_recommendations(body.analytics, body.stats)


@router.post("/attention", response_model=TriageView, summary="Derive triage view")
async def post_attention(attention: AttentionSnapshot):
    return derive_triage_view(attention)


@router.post("/activity", response_model=ActivityFeed, summary="Format activity events")
async def post_activity(body: ActivityRequest):
    return build_activity_feed(body.events, now=body.now, limit=body.limit)
