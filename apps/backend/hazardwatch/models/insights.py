"""
insights.py — Aggregate text-analysis statistics for the dashboard.
"""

from pydantic import BaseModel


class KeywordCount(BaseModel):
    word: str
    count: int


class UrgencyTrends(BaseModel):
    total: int      # reports in the last 24 h
    critical: int
    high: int


class NlpInsights(BaseModel):
    """Response shape for GET /api/v1/nlp/insights."""
    total_analyzed: int
    keyword_frequency: list[KeywordCount]
    hazard_types: dict[str, int]
    sentiment_distribution: dict[str, int]
    urgency_trends: UrgencyTrends
