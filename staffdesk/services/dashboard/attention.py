"""Attention triage: merge the pending/expired/expiring queues into one view.

Each surface is computed from its own source.  ``counts`` feed the headline
total and summary lines, while the lists feed the previews.  The two are
never reconciled, so a stale count next to a fresh list is tolerated.
"""
from __future__ import annotations

import logging
from typing import Any

from staffdesk.schemas.dashboard import PerCategory, TriageAction, TriageItem, TriageView
from staffdesk.schemas.snapshots import AttentionItem, AttentionSnapshot, coerce
from staffdesk.services.dashboard.shared import format_display_date, take

logger = logging.getLogger(__name__)

PREVIEW_LIMITS: dict[str, int] = {
    "pendingClaims": 3,
    "expiredItems": 2,
    "expiringSoon": 2,
}


def _to_triage_item(item: AttentionItem, *, with_expiry: bool) -> TriageItem:
    raw_expiry = item.expiryDate
    return TriageItem(
        title=item.title,
        location=item.location,
        expiryDate=None if raw_expiry is None else str(raw_expiry),
        expiryDisplay=format_display_date(raw_expiry) if with_expiry else None,
    )


def _summary_lines(attention: AttentionSnapshot) -> list[str]:
    counts = attention.counts
    lines: list[str] = []
    if counts.pendingClaims > 0:
        lines.append(f"{counts.pendingClaims} claims need review")
    if counts.expired > 0:
        lines.append(f"{counts.expired} items have expired")
    if counts.expiringSoon > 0:
        lines.append(f"{counts.expiringSoon} items expiring soon")
    return lines


def _actions(attention: AttentionSnapshot) -> list[TriageAction]:
    counts = attention.counts
    actions: list[TriageAction] = []
    if counts.pendingClaims > 0:
        actions.append("review_claims")
    if counts.expired > 0 or counts.expiringSoon > 0:
        actions.append("manage_expired")
    actions.append("view_all_items")
    return actions


def derive_triage_view(attention: AttentionSnapshot | dict[str, Any] | None) -> TriageView:
    """Build the attention view with capped previews and overflow flags."""
    snapshot = coerce(AttentionSnapshot, attention)
    counts = snapshot.counts
    total = counts.pendingClaims + counts.expired + counts.expiringSoon

    previews: dict[str, list[TriageItem]] = {}
    overflow: dict[str, bool] = {}
    totals: dict[str, int] = {}
    for name, limit in PREVIEW_LIMITS.items():
        items: list[AttentionItem] = getattr(snapshot, name)
        head, overflow[name] = take(items, limit)
        previews[name] = [
            _to_triage_item(item, with_expiry=name != "pendingClaims") for item in head
        ]
        totals[name] = len(items)

    if totals["pendingClaims"] != counts.pendingClaims:
        logger.debug(
            "Pending claim count %d differs from list length %d",
            counts.pendingClaims, totals["pendingClaims"],
        )

    return TriageView(
        totalCount=total,
        needsAttention=total > 0,
        counts=counts,
        previews=PerCategory[list[TriageItem]](**previews),
        hasOverflow=PerCategory[bool](**overflow),
        listTotals=PerCategory[int](**totals),
        summaryLines=_summary_lines(snapshot),
        actions=_actions(snapshot),
    )
