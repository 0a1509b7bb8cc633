"""
weather.py — Turn station weather readings into active hazards.

Thresholds per reading:
  wind_speed  > 50 km/h → storm       (high above 70 km/h)
  wave_height > 3 m     → waves       (high above 4 m)
  visibility  < 3 km    → visibility  (always medium)

The derived list is the complete new hazard set: callers publish it with
SnapshotStore.replace_hazards(), which discards the previous cycle.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from hazardwatch.models.hazard import Hazard, WeatherReading

STORM_WIND_KMH = 50.0
SEVERE_STORM_WIND_KMH = 70.0
WAVE_HEIGHT_M = 3.0
SEVERE_WAVE_HEIGHT_M = 4.0
LOW_VISIBILITY_KM = 3.0


def hazards_from_reading(reading: WeatherReading) -> list[Hazard]:
    ts = reading.timestamp or datetime.now(tz=timezone.utc)
    hazards: list[Hazard] = []

    if reading.wind_speed > STORM_WIND_KMH:
        hazards.append(Hazard(
            type="storm",
            severity="high" if reading.wind_speed > SEVERE_STORM_WIND_KMH else "medium",
            description=f"High wind speeds detected: {reading.wind_speed:.1f} km/h",
            location=reading.location,
            timestamp=ts,
        ))

    if reading.wave_height > WAVE_HEIGHT_M:
        hazards.append(Hazard(
            type="waves",
            severity="high" if reading.wave_height > SEVERE_WAVE_HEIGHT_M else "medium",
            description=f"Dangerous wave heights: {reading.wave_height:.1f}m",
            location=reading.location,
            timestamp=ts,
        ))

    if reading.visibility < LOW_VISIBILITY_KM:
        hazards.append(Hazard(
            type="visibility",
            severity="medium",
            description=f"Poor visibility conditions: {reading.visibility:.1f}km",
            location=reading.location,
            timestamp=ts,
        ))

    return hazards


def derive_hazards(readings: Iterable[WeatherReading]) -> list[Hazard]:
    return [hazard for reading in readings for hazard in hazards_from_reading(reading)]
