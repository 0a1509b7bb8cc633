"""
risk_model.py — Proximity-weighted marine risk for a location.

Each active hazard contributes to one factor, scaled by how close it is:

    proximity = max(0, 1 - distance_km / 100)

    storm       += proximity × (0.8 if severity == "high" else 0.5)
    waves       += proximity × (0.7 if severity == "high" else 0.4)
    wind        += proximity × 0.3
    visibility  += proximity × 0.2

    overall_risk = min(1, storm + waves + wind + visibility)

Hazard types outside those four add nothing. That may not be what every
feed expects, so they are logged at DEBUG level to make the gap visible.

USAGE
─────
    from hazardwatch.services.risk_model import assess_risk

    risk = assess_risk(GeoPoint(lat=19.0, lng=72.8), snapshot.hazards)
    # risk.risk_level       → "low" | "medium" | "high"
    # risk.recommendations  → advisory list for that level
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Iterable

from hazardwatch.models.hazard import GeoPoint, Hazard, RiskAssessment

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0
DECAY_RADIUS_KM = 100.0

# factor → (weight when severity is "high", weight otherwise)
_FACTOR_WEIGHTS: dict[str, tuple[float, float]] = {
    "storm":      (0.8, 0.5),
    "waves":      (0.7, 0.4),
    "wind":       (0.3, 0.3),
    "visibility": (0.2, 0.2),
}

HIGH_RISK = 0.7
MEDIUM_RISK = 0.4

_RECOMMENDATIONS = {
    "high": [
        "Avoid all marine activities",
        "Small vessels should return to harbor immediately",
        "Monitor weather updates continuously",
        "Prepare emergency supplies",
    ],
    "medium": [
        "Exercise caution in marine activities",
        "Monitor weather conditions closely",
        "Ensure safety equipment is ready",
        "Consider postponing non-essential trips",
    ],
    "low": [
        "Normal marine activities permitted",
        "Standard safety precautions advised",
        "Monitor routine weather updates",
    ],
}


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    h = min(1.0, h)  # rounding near antipodes
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def proximity(distance_km: float) -> float:
    return max(0.0, 1 - distance_km / DECAY_RADIUS_KM)


def compute_risk_level(overall_risk: float) -> str:
    if overall_risk > HIGH_RISK:
        return "high"
    if overall_risk > MEDIUM_RISK:
        return "medium"
    return "low"


def recommendations_for(overall_risk: float) -> list[str]:
    return list(_RECOMMENDATIONS[compute_risk_level(overall_risk)])


def risk_factors(location: GeoPoint, hazards: Iterable[Hazard]) -> dict[str, float]:
    factors = {name: 0.0 for name in _FACTOR_WEIGHTS}
    for hazard in hazards:
        weights = _FACTOR_WEIGHTS.get(hazard.type)
        if weights is None:
            logger.debug("Ignoring hazard of unrecognised type %r", hazard.type)
            continue
        if hazard.location is None:
            logger.debug("Ignoring %s hazard without a location", hazard.type)
            continue
        high, other = weights
        weight = high if hazard.severity == "high" else other
        factors[hazard.type] += proximity(haversine_km(location, hazard.location)) * weight
    return factors


def assess_risk(
    location: GeoPoint,
    hazards: Iterable[Hazard],
    timeframe_hours: int = 24,
) -> RiskAssessment:
    """
    Risk at `location` from the given active hazards.

    `timeframe_hours` does not change the score yet; it is echoed back so
    clients can already send it.
    """
    factors = risk_factors(location, hazards)
    overall = min(1.0, sum(factors.values()))
    return RiskAssessment(
        overall_risk=overall,
        risk_level=compute_risk_level(overall),
        factors=factors,
        recommendations=recommendations_for(overall),
        timeframe_hours=timeframe_hours,
        timestamp=datetime.now(tz=timezone.utc),
    )
