"""
hazard.py — Environmental hazards and the risk model's request/response shapes.

Hazard instances are frozen: the active-hazard list is replaced wholesale on
every ingestion cycle and never edited in place.

Known hazard types: storm | waves | wind | visibility. Other type strings are
accepted so upstream feeds are not rejected, but they carry no risk weight.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class GeoPoint(BaseModel):
    """Lat/lng coordinates."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Hazard(BaseModel):
    """A currently active environmental hazard."""

    model_config = ConfigDict(frozen=True)

    type: str
    severity: Literal["medium", "high"] = "medium"
    location: Optional[GeoPoint] = None
    description: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))


class WeatherReading(BaseModel):
    """One station's current conditions, as delivered by the weather feed."""

    location: GeoPoint
    wind_speed: float = Field(..., ge=0, description="km/h")
    wave_height: float = Field(default=0.0, ge=0, description="metres")
    visibility: float = Field(default=10.0, ge=0, description="km")
    timestamp: Optional[datetime] = None


class WeatherIngestRequest(BaseModel):
    """Request body for POST /api/v1/ocean/weather."""
    readings: list[WeatherReading]


class HazardSnapshotResponse(BaseModel):
    hazards: list[Hazard]
    updated_at: Optional[datetime] = None


class RiskRequest(BaseModel):
    """Request body for POST /api/v1/ocean/risk-assessment."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    timeframe: int = Field(default=24, ge=1, le=168, description="Hours")


class RiskAssessment(BaseModel):
    """Risk estimate for a location. Computed per query, never stored."""
    overall_risk: float = Field(..., ge=0.0, le=1.0)
    risk_level: Literal["low", "medium", "high"]
    factors: dict[str, float]
    recommendations: list[str]
    timeframe_hours: int
    timestamp: datetime
