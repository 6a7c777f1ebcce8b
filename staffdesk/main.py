import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from scalar_fastapi import get_scalar_api_reference

from staffdesk.api.v1.router import v1_router
from staffdesk.config import settings
from staffdesk.scheduler.manager import SchedulerManager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# OpenAPI tag metadata
# ---------------------------------------------------------------------------
TAG_METADATA = [
    {
        "name": "dashboard",
        "description": "Staff dashboard: insights, recommendations, attention queue, activity "
        "feed and location overview derived from the latest upstream snapshots. "
        "Requires a staff or admin role.",
    },
    {
        "name": "derive",
        "description": "Stateless derivations: post a snapshot and get the derived view back.",
    },
    {
        "name": "health",
        "description": "Scheduler state, snapshot freshness and manual refresh.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage startup and shutdown of the snapshot scheduler."""
    logger.info("=" * 60)
    logger.info("  StaffDesk starting (upstream: %s)", settings.UPSTREAM_BASE_URL)
    logger.info("=" * 60)

    scheduler: SchedulerManager | None = None
    if settings.SCHEDULER_ENABLED:
        scheduler = SchedulerManager()
        try:
            await scheduler.start()
        except Exception as e:
            logger.error("Scheduler failed to start: %s", e)
            scheduler = None
    else:
        logger.info("Scheduler disabled, snapshots will only change on manual refresh")

    if scheduler and settings.REFRESH_ON_STARTUP:
        await scheduler.trigger_refresh()

    yield

    if scheduler:
        try:
            await scheduler.stop()
        except Exception as e:
            logger.error("Scheduler failed to stop cleanly: %s", e)

    logger.info("Application shutdown complete")


app = FastAPI(
    title="StaffDesk API",
    summary="Lost-and-found staff operations console",
    description=(
        "## Overview\n\n"
        "Per-location metrics for lost-and-found staff: classified insights, "
        "recommendations, a prioritized attention queue and a readable activity feed.\n\n"
        "Snapshots (stats, analytics, activity, attention) are polled from the upstream "
        "lost-and-found API on independent cadences; every view is re-derived on request.\n\n"
        "## Access\n\n"
        "Dashboard and derive routes require `X-User-Role: staff` or `X-User-Role: admin`."
    ),
    version="0.1.0",
    openapi_tags=TAG_METADATA,
    lifespan=lifespan,
    docs_url="/swagger",
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/", tags=["default"], summary="API entry", include_in_schema=False)
async def root():
    return {
        "message": "StaffDesk API",
        "version": "0.1.0",
        "docs": "/docs",
        "swagger": "/swagger",
        "openapi": "/openapi.json",
    }


@app.get("/docs", include_in_schema=False)
async def scalar_html():
    return get_scalar_api_reference(
        openapi_url=app.openapi_url,
        title=app.title,
    )
