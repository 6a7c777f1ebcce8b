"""In-process store for the latest upstream snapshots.

Each source is replaced wholesale when its fetch completes.  Sources are
never merged or reconciled with each other, so readers may see a fresh
activity list next to older stats.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Any


@dataclass(frozen=True)
class CachedSnapshot:
    payload: Any
    fetched_at: datetime


_snapshots: dict[str, CachedSnapshot] = {}
_lock = Lock()


def store_snapshot(source: str, payload: Any, fetched_at: datetime | None = None) -> CachedSnapshot:
    entry = CachedSnapshot(payload=payload, fetched_at=fetched_at or datetime.now(timezone.utc))
    with _lock:
        _snapshots[source] = entry
    return entry


def get_snapshot(source: str) -> CachedSnapshot | None:
    with _lock:
        return _snapshots.get(source)


def get_payload(source: str) -> Any:
    entry = get_snapshot(source)
    return entry.payload if entry is not None else None


def all_snapshots() -> dict[str, CachedSnapshot]:
    with _lock:
        return dict(_snapshots)


def clear_snapshots() -> None:
    with _lock:
        _snapshots.clear()
