"""
reports.py — Hazard report routes.

Routes:
  POST  /api/v1/reports              — submit a report
  GET   /api/v1/reports              — list reports in a time window
  GET   /api/v1/reports/{id}         — get a single report
  PATCH /api/v1/reports/{id}/verify  — moderation: mark verified / unverified

HOW A SUBMISSION FLOWS
──────────────────────
1. The description is analysed (text_signals.analyze_text) and the result is
   stored with the report. It is never recomputed afterwards.
2. Hotspots are recomputed over the active window and published.
3. The early-warning policy runs. Dispatch failures are returned in
   `alert.error`; the report stays stored either way.
"""

import logging
from typing import Literal, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from hazardwatch.core.config import settings
from hazardwatch.core.database import get_db
from hazardwatch.core.rate_limit import limiter
from hazardwatch.core.state import SnapshotStore, get_snapshot_store
from hazardwatch.models.report import (
    Report,
    ReportCreate,
    ReportCreateResponse,
    ReportListResponse,
)
from hazardwatch.services.alert_policy import evaluate_report, get_dispatcher
from hazardwatch.services.reports import (
    doc_to_report,
    load_reports,
    new_report_doc,
    refresh_hotspots,
    window_query,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


class VerifyRequest(BaseModel):
    verified: bool = True


def _validate_oid(report_id: str) -> ObjectId:
    try:
        return ObjectId(report_id)
    except InvalidId:
        raise HTTPException(status_code=422, detail="Invalid report ID format")


def _decode_stored(doc: dict) -> Report:
    """Convert a stored document, answering 422 when it cannot be read."""
    try:
        return doc_to_report(doc)
    except Exception as exc:
        logger.warning("Stored report %s is malformed: %s", doc.get("_id"), exc)
        raise HTTPException(status_code=422, detail="Stored report is malformed")


# ── Routes ────────────────────────────────────────────────────────────────────

@router.post("", response_model=ReportCreateResponse, status_code=201)
@limiter.limit(settings.report_rate_limit)
async def submit_report(
    request: Request,
    payload: ReportCreate,
    db=Depends(get_db),
    store: SnapshotStore = Depends(get_snapshot_store),
):
    """Analyse, store and evaluate a new hazard report."""
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")

    doc = new_report_doc(payload)
    result = await db["reports"].insert_one(doc)
    doc["_id"] = result.inserted_id
    report = doc_to_report(doc)
    logger.info(
        "Report %s stored (severity=%s, detected=%s)",
        report.id, report.severity, report.analysis.hazard_type,
    )

    try:
        hotspots = await refresh_hotspots(db, store)
    except Exception as exc:
        # The periodic refresh will catch up; the submission itself succeeded.
        logger.warning("Hotspot refresh after report %s failed: %s", report.id, exc)
        hotspots = list(store.current().hotspots)

    alert = await evaluate_report(report, get_dispatcher(db))

    return ReportCreateResponse(report=report, alert=alert, hotspot_count=len(hotspots))


@router.get("", response_model=ReportListResponse)
async def list_reports(
    hours: int = Query(default=24, ge=1, le=720, description="Lookback window in hours"),
    severity: Optional[Literal["low", "medium", "high", "critical"]] = Query(default=None),
    type: Optional[str] = Query(default=None, description="Reporter-chosen hazard type"),
    db=Depends(get_db),
):
    """Return reports from the last `hours`, newest first."""
    if db is None:
        return ReportListResponse(items=[], total=0, hours=hours)

    items = await load_reports(db, window_query(hours, severity, type), newest_first=True)
    return ReportListResponse(items=items, total=len(items), hours=hours)


@router.get("/{report_id}", response_model=Report)
async def get_report(report_id: str, db=Depends(get_db)):
    """Retrieve a single report by ID."""
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")

    oid = _validate_oid(report_id)
    doc = await db["reports"].find_one({"_id": oid})
    if not doc:
        raise HTTPException(status_code=404, detail="Report not found")

    return _decode_stored(doc)


@router.patch("/{report_id}/verify", response_model=Report)
async def verify_report(report_id: str, payload: VerifyRequest, db=Depends(get_db)):
    """Set the moderation flag. No other report field can be changed."""
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")

    oid = _validate_oid(report_id)
    doc = await db["reports"].find_one({"_id": oid})
    if not doc:
        raise HTTPException(status_code=404, detail="Report not found")

    report = _decode_stored({**doc, "verified": payload.verified})
    await db["reports"].update_one({"_id": oid}, {"$set": {"verified": payload.verified}})
    return report
