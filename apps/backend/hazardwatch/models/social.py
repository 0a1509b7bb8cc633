"""
social.py — Social-media posts and their relevance scoring.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from hazardwatch.models.report import TextAnalysis


class SocialPost(BaseModel):
    """A raw post from a social feed."""
    platform: str = Field(default="web", max_length=50)
    content: str = Field(default="", max_length=10_000)
    engagement: int = Field(default=0, ge=0)  # likes + shares + replies
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))


class AnalyzedPost(SocialPost):
    """A post that passed the confidence gate, with its scores attached."""
    analysis: TextAnalysis
    relevance_score: float


class SocialAnalyzeRequest(BaseModel):
    """Request body for POST /api/v1/social/analyze."""
    posts: list[SocialPost] = Field(..., max_length=500)


class SocialAnalyzeResponse(BaseModel):
    analyzed: int   # posts that passed the confidence gate
    relevant: int   # of those, posts above the relevance threshold
    posts: list[AnalyzedPost]


class SocialFeedResponse(BaseModel):
    posts: list[AnalyzedPost]
