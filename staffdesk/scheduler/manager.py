from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from staffdesk.config import settings
from staffdesk.services.upstream_client import SNAPSHOT_SOURCES

logger = logging.getLogger(__name__)

# Module-level reference for access from API routes
_scheduler_manager: SchedulerManager | None = None

# Sources whose upstream query takes a timeRange parameter
RANGED_SOURCES = ("stats", "analytics")


def get_scheduler_manager() -> SchedulerManager | None:
    return _scheduler_manager


def refresh_intervals() -> dict[str, int]:
    """Refresh cadence per snapshot source, in seconds."""
    return {
        "stats": settings.STATS_REFRESH_SECONDS,
        "analytics": settings.ANALYTICS_REFRESH_SECONDS,
        "activity": settings.ACTIVITY_REFRESH_SECONDS,
        "attention": settings.ATTENTION_REFRESH_SECONDS,
    }


class SchedulerManager:
    def __init__(self, intervals: dict[str, int] | None = None) -> None:
        self.scheduler = AsyncIOScheduler(
            job_defaults={"coalesce": True, "max_instances": 1}
        )
        self.intervals = intervals or refresh_intervals()
        self.time_range = settings.DEFAULT_TIME_RANGE_DAYS

    async def start(self) -> None:
        global _scheduler_manager
        _scheduler_manager = self

        # Import job function here to avoid circular imports
        from staffdesk.scheduler.jobs import refresh_snapshot

        for source in SNAPSHOT_SOURCES:
            seconds = self.intervals.get(source)
            if not seconds or seconds <= 0:
                logger.warning("No refresh interval for '%s', polling disabled", source)
                continue
            self.scheduler.add_job(
                refresh_snapshot,
                trigger=IntervalTrigger(seconds=seconds),
                id=f"refresh_{source}",
                kwargs={"source": source, "time_range": self.time_range},
                replace_existing=True,
            )
            logger.debug("Registered refresh job: %s (every %ds)", source, seconds)

        self.scheduler.start()
        logger.info(
            "Scheduler started with %d refresh jobs (%s)",
            len(self.scheduler.get_jobs()),
            ", ".join(f"{s}={n}s" for s, n in self.intervals.items()),
        )

    async def stop(self) -> None:
        global _scheduler_manager
        self.scheduler.shutdown(wait=False)
        _scheduler_manager = None
        logger.info("Scheduler stopped")

    def set_time_range(self, days: int) -> None:
        """Switch the reporting window used by the periodic stats/analytics jobs."""
        self.time_range = days
        for source in RANGED_SOURCES:
            job_id = f"refresh_{source}"
            if self.scheduler.get_job(job_id) is not None:
                self.scheduler.modify_job(job_id, kwargs={"source": source, "time_range": days})
        logger.info("Reporting window set to %d days", days)

    async def trigger_refresh(self, time_range: int | None = None) -> None:
        """Queue an immediate refresh of every source."""
        from staffdesk.scheduler.jobs import refresh_all

        if time_range is not None and time_range != self.time_range:
            self.set_time_range(time_range)
        self.scheduler.add_job(
            refresh_all,
            id="manual_refresh",
            kwargs={"time_range": self.time_range},
            replace_existing=True,
        )
        logger.info("Manually triggered snapshot refresh")

    @property
    def running(self) -> bool:
        return self.scheduler.running
