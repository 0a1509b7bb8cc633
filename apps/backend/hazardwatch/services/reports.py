"""
reports.py — Report persistence helpers shared by routes and the refresh task.

Document shape in the `reports` collection:

  {
    "_id": ObjectId,
    "title": "Flooding on Marine Drive",
    "description": "urgent flood emergency near the coast",
    "type": "flood",
    "severity": "critical",
    "latitude": 19.0,
    "longitude": 72.8,
    "people_affected": 40,
    "timestamp": ISODate("2026-10-18T08:00:00Z"),
    "verified": false,
    "analysis": { "hazard_type": "flood", "urgency_level": 0.6, ... }
  }

Older or hand-imported documents may carry strings in numeric fields; they
are coerced here, and anything that still cannot be read is skipped with a
warning so one bad document never aborts a listing or a hotspot pass.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from hazardwatch.core.config import settings
from hazardwatch.core.state import SnapshotStore
from hazardwatch.models.hotspot import Hotspot
from hazardwatch.models.report import Report, ReportCreate, TextAnalysis
from hazardwatch.models.social import SocialPost
from hazardwatch.services.hotspots import ensure_utc, generate_hotspots
from hazardwatch.services.text_signals import analyze_text

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    try:
        return max(0, int(value))
    except (TypeError, ValueError, OverflowError):
        return None


# ── Conversion ────────────────────────────────────────────────────────────────

def new_report_doc(payload: ReportCreate, now: Optional[datetime] = None) -> dict:
    """Build the document to insert for a new submission, analysis attached."""
    timestamp = payload.timestamp or now or datetime.now(tz=timezone.utc)
    return {
        **payload.model_dump(exclude={"timestamp"}),
        "timestamp": ensure_utc(timestamp),
        "verified": False,
        "analysis": analyze_text(payload.description).model_dump(),
    }


def doc_to_report(doc: dict) -> Report:
    analysis_raw = doc.get("analysis")
    analysis = TextAnalysis(**analysis_raw) if isinstance(analysis_raw, dict) else TextAnalysis()

    return Report(
        id=str(doc["_id"]),
        title=doc.get("title"),
        description=doc.get("description") or "",
        type=doc.get("type"),
        severity=doc.get("severity") or "medium",
        latitude=_as_float(doc.get("latitude")),
        longitude=_as_float(doc.get("longitude")),
        people_affected=_as_int(doc.get("people_affected")),
        timestamp=ensure_utc(doc["timestamp"]),
        verified=bool(doc.get("verified", False)),
        analysis=analysis,
    )


def doc_to_post(doc: dict) -> SocialPost:
    return SocialPost(
        platform=doc.get("platform", "web"),
        content=doc.get("content", ""),
        engagement=_as_int(doc.get("engagement")) or 0,
        timestamp=ensure_utc(doc.get("timestamp") or datetime.now(tz=timezone.utc)),
    )


# ── Queries ───────────────────────────────────────────────────────────────────

def window_query(
    hours: int,
    severity: Optional[str] = None,
    hazard_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> dict:
    now = now or datetime.now(tz=timezone.utc)
    query: dict = {"timestamp": {"$gt": now - timedelta(hours=hours)}}
    if severity:
        query["severity"] = severity
    if hazard_type:
        query["type"] = hazard_type
    return query


async def load_reports(db, query: dict, newest_first: bool = False) -> list[Report]:
    """Run `query` against `reports`, skipping documents that fail to decode."""
    cursor = db["reports"].find(query).sort("timestamp", -1 if newest_first else 1)
    reports: list[Report] = []
    async for doc in cursor:
        try:
            reports.append(doc_to_report(doc))
        except Exception as exc:
            logger.warning("Skipping malformed report doc %s: %s", doc.get("_id"), exc)
    return reports


async def load_social_posts(db, query: Optional[dict] = None) -> list[SocialPost]:
    posts: list[SocialPost] = []
    async for doc in db["social_posts"].find(query or {}):
        try:
            posts.append(doc_to_post(doc))
        except Exception as exc:
            logger.warning("Skipping malformed social post doc %s: %s", doc.get("_id"), exc)
    return posts


# ── Hotspot refresh ───────────────────────────────────────────────────────────

async def refresh_hotspots(
    db,
    store: SnapshotStore,
    now: Optional[datetime] = None,
) -> list[Hotspot]:
    """
    Recompute hotspots from the active window and publish them.

    When the database is unavailable the current snapshot is left as is.
    """
    now = now or datetime.now(tz=timezone.utc)
    if db is None:
        return list(store.current().hotspots)

    hours = settings.hotspot_window_hours
    reports = await load_reports(db, window_query(hours, now=now))
    hotspots = generate_hotspots(reports, window=timedelta(hours=hours), now=now)
    store.replace_hotspots(hotspots)
    return hotspots
