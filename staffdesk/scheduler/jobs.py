from __future__ import annotations

import asyncio
import logging

import httpx

from staffdesk.services import snapshot_cache
from staffdesk.services.upstream_client import SNAPSHOT_SOURCES, SnapshotSource, fetch_snapshot

logger = logging.getLogger(__name__)


async def refresh_snapshot(source: SnapshotSource, time_range: int | None = None) -> bool:
    """Fetch one source and replace its cached snapshot.

    On failure the previous snapshot stays in place and False is returned.
    """
    try:
        payload = await fetch_snapshot(source, time_range=time_range)
    except (httpx.HTTPStatusError, httpx.RequestError, ValueError) as e:
        logger.warning("Refresh of %s failed, keeping previous snapshot: %s", source, e)
        return False

    snapshot_cache.store_snapshot(source, payload)
    logger.debug("Refreshed %s snapshot", source)
    return True


async def refresh_all(time_range: int | None = None) -> dict[str, bool]:
    """Refresh every source concurrently; one failure does not block the others."""
    results = await asyncio.gather(*(refresh_snapshot(s, time_range) for s in SNAPSHOT_SOURCES))
    outcome = dict(zip(SNAPSHOT_SOURCES, results))
    logger.info(
        "Snapshot refresh complete: %d/%d sources updated",
        sum(outcome.values()), len(outcome),
    )
    return outcome
