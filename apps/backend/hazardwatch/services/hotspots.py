"""
hotspots.py — Grid-cell aggregation of recent reports into hotspots.

Reports inside the lookback window are bucketed by

    cell = f"{floor(latitude * 10)}_{floor(longitude * 10)}"

which gives rectangular cells of roughly 0.1° × 0.1° (~11 km at the
equator, narrower in longitude towards the poles). Two reports a few metres
apart can land in neighbouring cells; this is a coarse bucketing, not
radius-based clustering.

Cells with fewer than MIN_REPORTS members produce no hotspot.

generate_hotspots() is a full recompute: the same input always yields the
same output, and nothing from a previous run is reused. It is called after
every report mutation and by the periodic refresh task in main.py.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from hazardwatch.models.hotspot import Hotspot
from hazardwatch.models.report import Report

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = timedelta(hours=24)
MIN_REPORTS = 2
CELL_SCALE = 10  # cells per degree

SEVERITY_WEIGHTS = {"critical": 4, "high": 3, "medium": 2, "low": 1}
DEFAULT_SEVERITY_WEIGHT = 1

# (exclusive lower bound, category), checked in order
_SEVERITY_THRESHOLDS = [
    (10, "critical"),
    (6,  "high"),
]


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by Motor) as UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def cell_key(latitude: float, longitude: float) -> str:
    return f"{math.floor(latitude * CELL_SCALE)}_{math.floor(longitude * CELL_SCALE)}"


def severity_category(score: int) -> str:
    for threshold, category in _SEVERITY_THRESHOLDS:
        if score > threshold:
            return category
    return "medium"


def _people(value) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def _has_coordinates(report: Report) -> bool:
    return (
        report.latitude is not None
        and report.longitude is not None
        and math.isfinite(report.latitude)
        and math.isfinite(report.longitude)
    )


def _build_hotspot(key: str, members: list[Report]) -> Hotspot:
    count = len(members)
    score = sum(SEVERITY_WEIGHTS.get(r.severity, DEFAULT_SEVERITY_WEIGHT) for r in members)
    return Hotspot(
        id=key,
        latitude=sum(r.latitude for r in members) / count,
        longitude=sum(r.longitude for r in members) / count,
        report_count=count,
        severity=severity_category(score),
        severity_score=score,
        hazard_types=sorted({r.type for r in members if r.type}),
        last_update=max(ensure_utc(r.timestamp) for r in members),
        affected_people=sum(_people(r.people_affected) for r in members),
    )


def generate_hotspots(
    reports: Iterable[Report],
    window: timedelta = DEFAULT_WINDOW,
    now: Optional[datetime] = None,
) -> list[Hotspot]:
    """
    Aggregate the reports from the last `window` into hotspots.

    Reports without coordinates are skipped. Output order follows the
    first appearance of each cell in `reports`.
    """
    now = ensure_utc(now) if now else datetime.now(tz=timezone.utc)

    cells: dict[str, list[Report]] = {}
    skipped = 0
    for report in reports:
        if not _has_coordinates(report):
            skipped += 1
            continue
        if now - ensure_utc(report.timestamp) >= window:
            continue
        cells.setdefault(cell_key(report.latitude, report.longitude), []).append(report)

    if skipped:
        logger.debug("Hotspot pass skipped %d report(s) without coordinates", skipped)

    return [
        _build_hotspot(key, members)
        for key, members in cells.items()
        if len(members) >= MIN_REPORTS
    ]
