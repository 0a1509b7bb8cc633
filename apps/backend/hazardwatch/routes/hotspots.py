"""
hotspots.py — Hotspot route.

Route:
  GET /api/v1/hotspots — recompute from the active window and return

When MongoDB is down the last published snapshot is returned instead of
an error, so the map keeps showing the most recent clusters.
"""

import logging

from fastapi import APIRouter, Depends

from hazardwatch.core.database import get_db
from hazardwatch.core.state import SnapshotStore, get_snapshot_store
from hazardwatch.models.hotspot import HotspotResponse
from hazardwatch.services.reports import refresh_hotspots

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/hotspots", tags=["hotspots"])


@router.get("", response_model=HotspotResponse)
async def get_hotspots(
    db=Depends(get_db),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    try:
        await refresh_hotspots(db, store)
    except Exception as exc:
        logger.warning("Hotspot recompute failed, serving last snapshot: %s", exc)

    snapshot = store.current()
    return HotspotResponse(
        hotspots=list(snapshot.hotspots),
        total=len(snapshot.hotspots),
        updated_at=snapshot.hotspots_updated_at,
    )
