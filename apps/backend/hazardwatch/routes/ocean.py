"""
ocean.py — Marine hazard ingestion and risk-assessment routes.

Routes:
  POST /api/v1/ocean/weather          — derive hazards from station readings
  PUT  /api/v1/ocean/hazards          — publish an explicit hazard list
  GET  /api/v1/ocean/hazards          — current hazard snapshot
  POST /api/v1/ocean/risk-assessment  — risk for a location

Both ingestion routes REPLACE the active hazard list; nothing is merged with
the previous cycle. Risk queries read one snapshot for the whole computation.

  curl -X POST http://localhost:8000/api/v1/ocean/risk-assessment \
       -H 'Content-Type: application/json' \
       -d '{"latitude": 19.0, "longitude": 72.8, "timeframe": 24}'
"""

import logging

from fastapi import APIRouter, Depends

from hazardwatch.core.state import SnapshotStore, get_snapshot_store
from hazardwatch.models.hazard import (
    GeoPoint,
    Hazard,
    HazardSnapshotResponse,
    RiskAssessment,
    RiskRequest,
    WeatherIngestRequest,
)
from hazardwatch.services.risk_model import assess_risk
from hazardwatch.services.weather import derive_hazards

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ocean", tags=["ocean"])


def _snapshot_response(store: SnapshotStore) -> HazardSnapshotResponse:
    snapshot = store.current()
    return HazardSnapshotResponse(
        hazards=list(snapshot.hazards),
        updated_at=snapshot.hazards_updated_at,
    )


@router.post("/weather", response_model=HazardSnapshotResponse)
async def ingest_weather(
    payload: WeatherIngestRequest,
    store: SnapshotStore = Depends(get_snapshot_store),
):
    hazards = derive_hazards(payload.readings)
    logger.info("Weather cycle: %d reading(s) → %d hazard(s)", len(payload.readings), len(hazards))
    store.replace_hazards(hazards)
    return _snapshot_response(store)


@router.put("/hazards", response_model=HazardSnapshotResponse)
async def replace_hazards(
    hazards: list[Hazard],
    store: SnapshotStore = Depends(get_snapshot_store),
):
    store.replace_hazards(hazards)
    return _snapshot_response(store)


@router.get("/hazards", response_model=HazardSnapshotResponse)
async def get_hazards(store: SnapshotStore = Depends(get_snapshot_store)):
    return _snapshot_response(store)


@router.post("/risk-assessment", response_model=RiskAssessment)
async def risk_assessment(
    payload: RiskRequest,
    store: SnapshotStore = Depends(get_snapshot_store),
):
    location = GeoPoint(lat=payload.latitude, lng=payload.longitude)
    return assess_risk(location, store.current().hazards, payload.timeframe)
