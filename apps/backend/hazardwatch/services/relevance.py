"""
relevance.py — Relevance scoring for social-media posts.

    relevance = confidence × (1 + engagement / 100) × (urgency_level + 0.5)

process_posts() drops posts whose confidence is at or below
CONFIDENCE_GATE: those texts carry too little hazard vocabulary to be
about a hazard at all. Posts that pass can still score low; the social
route only stores the ones above RELEVANT_THRESHOLD.
"""

from __future__ import annotations

from typing import Iterable

from hazardwatch.models.report import TextAnalysis
from hazardwatch.models.social import AnalyzedPost, SocialPost
from hazardwatch.services.text_signals import analyze_text

CONFIDENCE_GATE = 0.3
RELEVANT_THRESHOLD = 0.5
_ENGAGEMENT_SCALE = 100.0
_URGENCY_BASE = 0.5


def relevance_from_analysis(analysis: TextAnalysis, engagement: int) -> float:
    return (
        analysis.confidence
        * (1 + engagement / _ENGAGEMENT_SCALE)
        * (analysis.urgency_level + _URGENCY_BASE)
    )


def score_post(post: SocialPost) -> float:
    """Relevance of a single post (no confidence gate applied)."""
    return relevance_from_analysis(analyze_text(post.content), post.engagement)


def process_posts(posts: Iterable[SocialPost]) -> list[AnalyzedPost]:
    """Analyse and score a batch, keeping posts above the confidence gate."""
    results: list[AnalyzedPost] = []
    for post in posts:
        analysis = analyze_text(post.content)
        if analysis.confidence <= CONFIDENCE_GATE:
            continue
        results.append(AnalyzedPost(
            **post.model_dump(),
            analysis=analysis,
            relevance_score=relevance_from_analysis(analysis, post.engagement),
        ))
    return results


def is_relevant(post: AnalyzedPost) -> bool:
    return post.relevance_score > RELEVANT_THRESHOLD
