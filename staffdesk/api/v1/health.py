from fastapi import APIRouter, Depends, HTTPException, Query

from staffdesk.api.deps import require_staff
from staffdesk.config import ALLOWED_TIME_RANGES
from staffdesk.schemas.common import ErrorResponse
from staffdesk.services.dashboard.service import get_source_status

router = APIRouter()


@router.get(
    "/",
    summary="Health check",
    description="Scheduler state and the age of each cached snapshot.",
)
async def health_check():
    from staffdesk.scheduler.manager import get_scheduler_manager

    scheduler = get_scheduler_manager()
    return {
        "status": "ok",
        "scheduler": "running" if scheduler and scheduler.running else "not_started",
        "timeRange": scheduler.time_range if scheduler else None,
        "sources": {
            source: status.model_dump(mode="json")
            for source, status in get_source_status().items()
        },
    }


@router.post(
    "/refresh",
    summary="Refresh snapshots now",
    description="Queue an immediate fetch of all four snapshots, outside the regular cadence. "
    "Passing `timeRange` also switches the reporting window for later periodic fetches.",
    responses={
        400: {"model": ErrorResponse, "description": "Unsupported time range"},
        503: {"model": ErrorResponse, "description": "Scheduler not running"},
    },
    dependencies=[Depends(require_staff)],
)
async def trigger_refresh(
    time_range: int | None = Query(
        None, alias="timeRange", description="Reporting window in days: 7 / 30 / 90"
    ),
):
    from staffdesk.scheduler.manager import get_scheduler_manager

    if time_range is not None and time_range not in ALLOWED_TIME_RANGES:
        raise HTTPException(400, f"Unsupported time range: {time_range}")

    mgr = get_scheduler_manager()
    if mgr is None:
        raise HTTPException(503, "Scheduler not running")
    await mgr.trigger_refresh(time_range)
    return {"status": "triggered", "message": "Snapshot refresh triggered"}
