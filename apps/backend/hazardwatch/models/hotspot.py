"""
hotspot.py — Pydantic models for hotspot aggregation.

A Hotspot is a grid cell (~0.1° × 0.1°) holding at least two reports from
the active window. Every field is derived from the cell's current member
reports; hotspots are never patched incrementally.

Severity rollup
───────────────
  severity_score = Σ member weights  (critical 4, high 3, medium 2, low 1)
  severity       = "critical" if score > 10
                   "high"     if score > 6
                   "medium"   otherwise
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


class Hotspot(BaseModel):
    """A geographic cluster of recent reports."""

    model_config = ConfigDict(frozen=True)

    id: str                 # grid cell key, e.g. "190_728"
    latitude: float         # centroid (mean of member latitudes)
    longitude: float        # centroid (mean of member longitudes)
    report_count: int
    severity: Literal["medium", "high", "critical"]
    severity_score: int
    hazard_types: list[str]
    last_update: datetime
    affected_people: int


class HotspotResponse(BaseModel):
    """Response shape for GET /api/v1/hotspots."""
    hotspots: list[Hotspot]
    total: int
    updated_at: Optional[datetime] = None
