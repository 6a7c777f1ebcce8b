"""Activity feed classification and formatting.

Maps each raw activity event to its icon, colour, message and relative time.
Unknown types and malformed events take ``FALLBACK_STYLE`` and never raise.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ValidationError

from staffdesk.schemas.dashboard import ActivityEntry, ActivityFeed
from staffdesk.schemas.snapshots import ActivityData, ActivityEvent, coerce
from staffdesk.services.dashboard.shared import relative_time, take, utc_now

logger = logging.getLogger(__name__)


class ActivityType(str, Enum):
    ITEM_REPORTED = "item_reported"
    CLAIM_SUBMITTED = "claim_submitted"
    ITEM_RETURNED = "item_returned"
    CLAIM_VERIFIED = "claim_verified"
    ITEM_EXPIRED = "item_expired"


@dataclass(frozen=True)
class ActivityStyle:
    icon_key: str
    color_key: str
    template: str  # str.format fields: item_type, item_title


ACTIVITY_STYLES: dict[ActivityType, ActivityStyle] = {
    ActivityType.ITEM_REPORTED: ActivityStyle(
        "package", "blue", 'New {item_type} item: "{item_title}"'
    ),
    ActivityType.CLAIM_SUBMITTED: ActivityStyle(
        "file-text", "yellow", 'Claim submitted for "{item_title}"'
    ),
    ActivityType.ITEM_RETURNED: ActivityStyle(
        "check-circle", "green", 'Item returned: "{item_title}"'
    ),
    ActivityType.CLAIM_VERIFIED: ActivityStyle(
        "check-circle", "green", 'Claim verified for "{item_title}"'
    ),
    ActivityType.ITEM_EXPIRED: ActivityStyle(
        "alert-circle", "red", 'Item expired: "{item_title}"'
    ),
}

FALLBACK_STYLE = ActivityStyle("package", "gray", "Unknown activity")

_missing = set(ActivityType) - set(ACTIVITY_STYLES)
if _missing:
    raise RuntimeError(f"ACTIVITY_STYLES has no entry for {sorted(t.value for t in _missing)}")


def style_for(activity_type: str) -> ActivityStyle:
    try:
        return ACTIVITY_STYLES[ActivityType(activity_type)]
    except ValueError:
        logger.debug("Unknown activity type %r, using fallback", activity_type)
        return FALLBACK_STYLE


def resolve_attribution(data: ActivityData) -> str | None:
    """Reporter name, else claimant name, else None."""
    for person in (data.reportedBy, data.claimedBy):
        if person is not None and person.name:
            return person.name
    return None


def format_activity(
    event: ActivityEvent | dict[str, Any] | None,
    now: datetime | None = None,
) -> ActivityEntry:
    """Classify one event into a display-ready entry.

    *now* is the instant relative times are measured from; the current UTC
    time is used when it is omitted.
    """
    try:
        activity = coerce(ActivityEvent, event)
    except ValidationError as e:
        logger.debug("Malformed activity event, using fallback: %s", e)
        timestamp = event.get("timestamp") if isinstance(event, Mapping) else None
        activity = ActivityEvent(timestamp=timestamp)
    data = activity.data
    style = style_for(activity.type)

    return ActivityEntry(
        type=activity.type,
        iconKey=style.icon_key,
        colorKey=style.color_key,
        message=style.template.format(item_type=data.itemType, item_title=data.itemTitle),
        relativeTime=relative_time(activity.timestamp, now),
        attribution=resolve_attribution(data),
        location=data.location or None,
        itemType=data.itemType,
        badgeKey="danger" if data.itemType == "lost" else "success",
    )


def build_activity_feed(
    events: list[ActivityEvent | dict[str, Any]] | None,
    now: datetime | None = None,
    limit: int = 10,
) -> ActivityFeed:
    """Format the first *limit* events, measuring every entry from one instant."""
    events = events or []
    reference = now or utc_now()
    head, has_more = take(events, limit)
    return ActivityFeed(
        entries=[format_activity(event, reference) for event in head],
        total=len(events),
        hasMore=has_more,
        isEmpty=not events,
    )
