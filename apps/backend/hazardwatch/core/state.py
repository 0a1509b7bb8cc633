"""
Shared monitoring state: the active hazards and the current hotspots.

Both are published as one immutable MonitorSnapshot. Writers build a new
snapshot and swap the reference under a lock (single writer); readers call
current() once and work on that object for the rest of the request, so a
concurrent ingestion or hotspot refresh can never change a list mid-pass.

A hotspot refresh that finishes after a newer one simply overwrites it.
Recomputation is idempotent, so last-writer-wins is safe.

Usage in a route:
    async def my_route(store: SnapshotStore = Depends(get_snapshot_store)):
        snapshot = store.current()
        assess_risk(location, snapshot.hazards)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable, Optional

from hazardwatch.models.hazard import Hazard
from hazardwatch.models.hotspot import Hotspot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonitorSnapshot:
    hazards: tuple[Hazard, ...] = ()
    hotspots: tuple[Hotspot, ...] = ()
    hazards_updated_at: Optional[datetime] = None
    hotspots_updated_at: Optional[datetime] = None


class SnapshotStore:
    """Holds the latest MonitorSnapshot and serialises writers."""

    def __init__(self) -> None:
        self._current = MonitorSnapshot()
        self._write_lock = threading.Lock()

    def current(self) -> MonitorSnapshot:
        return self._current

    def replace_hazards(self, hazards: Iterable[Hazard]) -> MonitorSnapshot:
        """Overwrite the whole hazard list with the latest ingestion cycle."""
        with self._write_lock:
            self._current = replace(
                self._current,
                hazards=tuple(hazards),
                hazards_updated_at=datetime.now(tz=timezone.utc),
            )
            logger.info("Published %d active hazard(s)", len(self._current.hazards))
            return self._current

    def replace_hotspots(self, hotspots: Iterable[Hotspot]) -> MonitorSnapshot:
        with self._write_lock:
            self._current = replace(
                self._current,
                hotspots=tuple(hotspots),
                hotspots_updated_at=datetime.now(tz=timezone.utc),
            )
            logger.debug("Published %d hotspot(s)", len(self._current.hotspots))
            return self._current

    def reset(self) -> None:
        with self._write_lock:
            self._current = MonitorSnapshot()


# Module-level singleton — routes reach it through get_snapshot_store()
snapshot_store = SnapshotStore()


def get_snapshot_store() -> SnapshotStore:
    """FastAPI dependency returning the shared snapshot store."""
    return snapshot_store
