"""
insights.py — Dashboard statistics over stored reports and social posts.

All functions are pure; the /api/v1/nlp/insights route loads the documents
and hands them in.
"""

from __future__ import annotations

import re
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from hazardwatch.models.insights import KeywordCount, NlpInsights, UrgencyTrends
from hazardwatch.models.report import Report
from hazardwatch.models.social import SocialPost
from hazardwatch.services.hotspots import ensure_utc

TOP_KEYWORDS = 20
MIN_KEYWORD_LENGTH = 4
_WORD_RE = re.compile(r"\b\w+\b")


def keyword_frequency(texts: Iterable[str], limit: int = TOP_KEYWORDS) -> list[KeywordCount]:
    """Most frequent words of 4+ characters across `texts`."""
    counts: Counter[str] = Counter()
    for text in texts:
        counts.update(w for w in _WORD_RE.findall(text.lower()) if len(w) >= MIN_KEYWORD_LENGTH)
    return [KeywordCount(word=w, count=c) for w, c in counts.most_common(limit)]


def hazard_type_distribution(reports: Iterable[Report]) -> dict[str, int]:
    """Counts by reporter-chosen type ("unspecified" when missing)."""
    return dict(Counter(r.type or "unspecified" for r in reports))


def sentiment_distribution(reports: Iterable[Report]) -> dict[str, int]:
    dist = {"positive": 0, "negative": 0, "neutral": 0}
    for r in reports:
        dist[r.analysis.sentiment] += 1
    return dist


def urgency_trends(reports: Iterable[Report], now: Optional[datetime] = None) -> UrgencyTrends:
    now = ensure_utc(now) if now else datetime.now(tz=timezone.utc)
    recent = [r for r in reports if now - ensure_utc(r.timestamp) < timedelta(hours=24)]
    return UrgencyTrends(
        total=len(recent),
        critical=sum(1 for r in recent if r.severity == "critical"),
        high=sum(1 for r in recent if r.severity == "high"),
    )


def build_insights(
    reports: list[Report],
    posts: list[SocialPost],
    now: Optional[datetime] = None,
) -> NlpInsights:
    texts = [r.description for r in reports] + [p.content for p in posts]
    return NlpInsights(
        total_analyzed=len(texts),
        keyword_frequency=keyword_frequency(texts),
        hazard_types=hazard_type_distribution(reports),
        sentiment_distribution=sentiment_distribution(reports),
        urgency_trends=urgency_trends(reports, now),
    )
