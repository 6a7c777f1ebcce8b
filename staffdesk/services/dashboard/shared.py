"""Shared helpers for dashboard derivations: number display, instants, relative time."""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date, datetime, timezone
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_TIME = "Unknown time"

MINUTES_IN_DAY = 1440
MINUTES_IN_ALMOST_TWO_DAYS = 2520
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------


def format_number(value: float | int) -> str:
    """Render a number the way the console prints it (``85.0`` -> ``85``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def half_up(value: float) -> int:
    """Round half away from zero for positive values, like ``Math.round``."""
    return math.floor(value + 0.5)


def percent_of(part: float, whole: float) -> float:
    """Percentage of *part* in *whole*; a zero *whole* divides by 1."""
    return part * 100 / (whole or 1)


def take(items: Sequence[T], limit: int) -> tuple[list[T], bool]:
    """First *limit* items in existing order, plus whether any were cut off."""
    return list(items[:limit]), len(items) > limit


# ---------------------------------------------------------------------------
# Instants
# ---------------------------------------------------------------------------


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO string, epoch milliseconds, date or datetime.

    Naive values are taken as UTC.  Returns None instead of raising on
    anything unparsable.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        elif isinstance(value, str):
            text = value.strip()
            if text[-1:] in ("Z", "z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
        else:
            return None
    except (ValueError, TypeError, OverflowError, OSError) as e:
        logger.debug("Unparsable instant %r: %s", value, e)
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_display_date(value: Any) -> str | None:
    """Render *value* as ``M/D/YYYY``.

    An unparsable value is returned as its literal text, an absent one as None.
    """
    if value is None:
        return None
    parsed = parse_instant(value)
    if parsed is None:
        return str(value)
    return f"{parsed.month}/{parsed.day}/{parsed.year}"


# ---------------------------------------------------------------------------
# Relative time ("about 2 hours ago")
# ---------------------------------------------------------------------------


def _plural(template: str, count: int) -> str:
    text = template.format(count)
    return text if count == 1 else f"{text}s"


def _months_between(later: datetime, earlier: datetime) -> int:
    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if months > 0 and (later.day, later.timetz()) < (earlier.day, earlier.timetz()):
        months -= 1
    return months


def format_distance(later: datetime, earlier: datetime) -> str:
    """Human distance between two instants, *later* >= *earlier*."""
    seconds = int((later - earlier).total_seconds())
    minutes = half_up(seconds / 60)

    if minutes < 2:
        return "less than a minute" if minutes == 0 else "1 minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        return _plural("about {} hour", half_up(minutes / 60))
    if minutes < MINUTES_IN_ALMOST_TWO_DAYS:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        return _plural("{} day", half_up(minutes / MINUTES_IN_DAY))
    if minutes < MINUTES_IN_TWO_MONTHS:
        return _plural("about {} month", half_up(minutes / MINUTES_IN_MONTH))

    months = _months_between(later, earlier)
    if months < 12:
        return _plural("{} month", half_up(minutes / MINUTES_IN_MONTH))

    years, remainder = divmod(months, 12)
    if remainder < 3:
        return _plural("about {} year", years)
    if remainder < 9:
        return _plural("over {} year", years)
    return _plural("almost {} year", years + 1)


def relative_time(value: Any, now: datetime | None = None) -> str:
    """``"N units ago"`` for a parsable timestamp, ``"Unknown time"`` otherwise."""
    instant = parse_instant(value)
    if instant is None:
        return UNKNOWN_TIME

    reference = parse_instant(now) if now is not None else utc_now()
    if reference is None:
        reference = utc_now()
    try:
        instant = instant.astimezone(timezone.utc)
        reference = reference.astimezone(timezone.utc)
    except OverflowError as e:
        logger.debug("Instant %r out of range: %s", value, e)
        return UNKNOWN_TIME

    if instant > reference:
        return f"in {format_distance(instant, reference)}"
    return f"{format_distance(reference, instant)} ago"
