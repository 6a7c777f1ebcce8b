"""HTTP client for the lost-and-found API's staff dashboard endpoints."""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Literal

import httpx

from staffdesk.config import settings

logger = logging.getLogger(__name__)

SnapshotSource = Literal["stats", "analytics", "activity", "attention"]

SNAPSHOT_SOURCES: tuple[SnapshotSource, ...] = ("stats", "analytics", "activity", "attention")

SOURCE_PATHS: dict[str, str] = {
    "stats": "/staff/dashboard/stats",
    "analytics": "/staff/dashboard/analytics",
    "activity": "/staff/dashboard/activity",
    "attention": "/staff/dashboard/attention",
}


def _source_params(
    source: str, time_range: int | None, activity_limit: int | None,
) -> dict[str, str]:
    if source in ("stats", "analytics"):
        return {"timeRange": str(time_range or settings.DEFAULT_TIME_RANGE_DAYS)}
    if source == "activity":
        return {"limit": str(activity_limit or settings.ACTIVITY_FETCH_LIMIT)}
    return {}


def _unwrap(body: Any) -> Any:
    """Strip the ``{"success": ..., "data": ...}`` envelope when present."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


async def fetch_snapshot(
    source: SnapshotSource,
    *,
    time_range: int | None = None,
    activity_limit: int | None = None,
    max_retries: int | None = None,
    timeout: float | None = None,
) -> Any:
    """Fetch one snapshot with retry and exponential backoff.

    Returns the unwrapped payload; raises the last httpx error once retries
    are exhausted.
    """
    if source not in SOURCE_PATHS:
        raise ValueError(f"Unknown snapshot source: {source}")

    url = settings.UPSTREAM_BASE_URL.rstrip("/") + SOURCE_PATHS[source]
    params = _source_params(source, time_range, activity_limit)
    headers = {"Accept": "application/json"}
    if settings.UPSTREAM_TOKEN:
        headers["Authorization"] = f"Bearer {settings.UPSTREAM_TOKEN}"
    if max_retries is None:
        max_retries = settings.UPSTREAM_MAX_RETRIES
    retries = max(1, max_retries)

    last_exc: Exception | None = None
    async with httpx.AsyncClient(
        timeout=settings.UPSTREAM_TIMEOUT if timeout is None else timeout,
        follow_redirects=True,
    ) as client:
        for attempt in range(retries):
            try:
                response = await client.get(url, headers=headers, params=params)
                response.raise_for_status()
                return _unwrap(response.json())
            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                last_exc = e
                if attempt + 1 >= retries:
                    break
                wait_time = 2**attempt + random.uniform(0, 1)
                logger.warning(
                    "Fetch %s failed (attempt %d/%d): %s. Retrying in %.1fs",
                    source, attempt + 1, retries, e, wait_time,
                )
                await asyncio.sleep(wait_time)

    raise last_exc  # type: ignore[misc]
