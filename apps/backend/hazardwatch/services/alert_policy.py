"""
alert_policy.py — Early-warning trigger and dispatch for new reports.

A report triggers an early warning when it is marked critical by the
reporter, or when its description reads as urgent:

    severity == "critical"  or  analysis.urgency_level > 0.7

Dispatch is fire-and-forget: one attempt, no retry, no acknowledgement.
A failing channel is reported back in the AlertOutcome and logged; the
report itself is already stored by then and stays stored.

Channels (settings.alert_channel):
  log    — LogDispatcher, writes the warning to the application log
  mongo  — MongoDispatcher, logs and appends to the `warnings` collection
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Protocol

from hazardwatch.core.config import settings
from hazardwatch.models.alert import EarlyWarning
from hazardwatch.models.hazard import GeoPoint
from hazardwatch.models.report import AlertOutcome, Report

logger = logging.getLogger(__name__)

URGENCY_TRIGGER = 0.7


def should_trigger_early_warning(report: Report) -> bool:
    return report.severity == "critical" or report.analysis.urgency_level > URGENCY_TRIGGER


def _location(report: Report) -> Optional[GeoPoint]:
    if report.latitude is None or report.longitude is None:
        return None
    return GeoPoint(lat=report.latitude, lng=report.longitude)


def build_early_warning(report: Report) -> EarlyWarning:
    hazard_type = report.type
    if not hazard_type and report.analysis.hazard_type != "none":
        hazard_type = report.analysis.hazard_type
    subject = report.title or report.description or "no description"
    return EarlyWarning(
        id=uuid.uuid4().hex,
        severity=report.severity,
        hazard_type=hazard_type,
        location=_location(report),
        message=f"{report.severity.capitalize()} {hazard_type or 'hazard'} reported: {subject}",
        source_report_id=report.id,
        timestamp=datetime.now(tz=timezone.utc),
    )


# ── Channels ──────────────────────────────────────────────────────────────────

class AlertDispatcher(Protocol):
    async def dispatch(self, warning: EarlyWarning) -> None: ...


class LogDispatcher:
    """Writes the warning to the log. SMS / push gateways plug in here."""

    async def dispatch(self, warning: EarlyWarning) -> None:
        logger.warning(
            "EARLY WARNING TRIGGERED: %s (report=%s, location=%s)",
            warning.message,
            warning.source_report_id,
            warning.location,
        )


class MongoDispatcher(LogDispatcher):
    """Logs the warning and appends it to the `warnings` collection."""

    def __init__(self, db):
        self._db = db

    async def dispatch(self, warning: EarlyWarning) -> None:
        await super().dispatch(warning)
        await self._db["warnings"].insert_one(warning.model_dump())


def get_dispatcher(db=None) -> AlertDispatcher:
    if settings.alert_channel == "mongo" and db is not None:
        return MongoDispatcher(db)
    return LogDispatcher()


# ── Evaluation ────────────────────────────────────────────────────────────────

async def dispatch_early_warning(
    warning: EarlyWarning,
    dispatcher: AlertDispatcher,
) -> Optional[str]:
    """Single delivery attempt. Returns an error string on failure, else None."""
    try:
        await dispatcher.dispatch(warning)
    except Exception as exc:
        logger.error("Early warning %s could not be dispatched: %s", warning.id, exc)
        return str(exc) or exc.__class__.__name__
    return None


async def evaluate_report(report: Report, dispatcher: AlertDispatcher) -> AlertOutcome:
    """Apply the trigger policy to a stored report and dispatch if it fires."""
    if not should_trigger_early_warning(report):
        return AlertOutcome(triggered=False)

    warning = build_early_warning(report)
    error = await dispatch_early_warning(warning, dispatcher)
    return AlertOutcome(
        triggered=True,
        dispatched=error is None,
        warning=warning,
        error=error,
    )
