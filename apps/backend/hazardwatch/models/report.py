"""
report.py — Pydantic schemas for hazard reports.

TextAnalysis       — keyword-signal analysis attached to every report
ReportCreate       — what the reporting client sends
Report             — stored report (analysis attached at creation)
ReportListResponse — GET /api/v1/reports payload
AlertOutcome       — result of the early-warning evaluation for a new report
ReportCreateResponse — POST /api/v1/reports payload
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from hazardwatch.models.alert import EarlyWarning


Severity = Literal["low", "medium", "high", "critical"]
Sentiment = Literal["positive", "negative", "neutral"]
HazardCategory = Literal["flood", "storm", "fire", "earthquake", "tsunami", "accident", "none"]


# ── Text analysis ─────────────────────────────────────────────────────────────

class TextAnalysis(BaseModel):
    """Keyword signals extracted from a report description or social post."""
    hazard_type: HazardCategory = "none"
    urgency_level: float = Field(default=0.0, ge=0.0, le=1.0)
    sentiment: Sentiment = "neutral"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    matched_keywords: list[str] = Field(default_factory=list)


class AnalyzeTextRequest(BaseModel):
    """Payload for POST /api/v1/nlp/analyze."""
    text: str = Field(..., max_length=50_000)


# ── Request ───────────────────────────────────────────────────────────────────

class ReportCreate(BaseModel):
    """Payload for POST /api/v1/reports."""
    title: Optional[str] = Field(default=None, max_length=200)
    description: str = Field(default="", max_length=10_000)
    # Reporter-chosen category; unverified, may disagree with the analysis
    type: Optional[str] = Field(default=None, max_length=50)
    severity: Severity = "medium"
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    people_affected: Optional[int] = Field(default=None, ge=0)
    # Defaults to server time when omitted
    timestamp: Optional[datetime] = None


# ── Report ────────────────────────────────────────────────────────────────────

class Report(BaseModel):
    """A stored hazard report."""
    id: str
    title: Optional[str] = None
    description: str = ""
    type: Optional[str] = None
    severity: str = "medium"
    # Optional so legacy or partially-synced documents still load;
    # the hotspot aggregator skips reports without coordinates.
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    people_affected: Optional[int] = None
    timestamp: datetime
    verified: bool = False
    analysis: TextAnalysis = Field(default_factory=TextAnalysis)


class ReportListResponse(BaseModel):
    items: list[Report]
    total: int
    hours: int


# ── Create response ───────────────────────────────────────────────────────────

class AlertOutcome(BaseModel):
    """Whether the new report raised an early warning, and how dispatch went."""
    triggered: bool
    dispatched: bool = False
    warning: Optional[EarlyWarning] = None
    error: Optional[str] = None


class ReportCreateResponse(BaseModel):
    """Response body for POST /api/v1/reports."""
    report: Report
    alert: AlertOutcome
    hotspot_count: int
