"""
nlp.py — Text analysis routes.

Routes:
  POST /api/v1/nlp/analyze   — keyword signals for a single text
  GET  /api/v1/nlp/insights  — aggregate statistics over recently stored texts
"""

import logging

from fastapi import APIRouter, Depends, Query

from hazardwatch.core.database import get_db
from hazardwatch.models.insights import NlpInsights
from hazardwatch.models.report import AnalyzeTextRequest, TextAnalysis
from hazardwatch.services.insights import build_insights
from hazardwatch.services.reports import load_reports, load_social_posts, window_query
from hazardwatch.services.text_signals import analyze_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/nlp", tags=["nlp"])


@router.post("/analyze", response_model=TextAnalysis)
async def analyze(payload: AnalyzeTextRequest):
    """Run the keyword extractor on `text`. Pure computation, nothing stored."""
    return analyze_text(payload.text)


@router.get("/insights", response_model=NlpInsights)
async def insights(
    hours: int = Query(default=168, ge=1, le=720, description="Lookback window in hours"),
    db=Depends(get_db),
):
    """Keyword frequency, type and sentiment distributions over the last `hours`; 24 h urgency trend."""
    reports, posts = [], []
    if db is not None:
        query = window_query(hours)
        try:
            reports = await load_reports(db, query)
            posts = await load_social_posts(db, query)
        except Exception as exc:
            logger.warning("Insights DB query failed: %s", exc)
    return build_insights(reports, posts)
