"""
text_signals.py — Rule-based hazard signal extraction from free text.

Every report description and social post goes through analyze_text()
before it is stored or scored. The classifier is keyword driven on purpose:
results are deterministic and each one can be explained by the keywords
that produced it (returned in matched_keywords).

USAGE
─────
    from hazardwatch.services.text_signals import analyze_text

    analysis = analyze_text("urgent flood emergency near the coast")
    # analysis.hazard_type    → "flood"
    # analysis.urgency_level  → 0.6   (urgent, emergency)
    # analysis.confidence     → 0.4   (flood + accident:emergency)
    # analysis.sentiment      → "negative"

SCORING
───────
  hazard_type   first category (in HAZARD_KEYWORDS order) with any keyword
                contained in the text. Later categories never override it,
                even when they match more keywords.
  confidence    0.2 per matched hazard keyword, across all categories,
                clamped to [0, 1]
  urgency_level 0.3 per matched urgency keyword, capped at 1
  sentiment     whole-word counts of negative vs positive words
"""

from __future__ import annotations

import re
from collections import Counter

from hazardwatch.models.report import TextAnalysis

# ── Keyword tables ────────────────────────────────────────────────────────────
# Matching is substring containment on the lower-cased text, so "wave" also
# fires on "waves" and "rain" on "rainfall".

HAZARD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "flood":      ("flood", "flooding", "water", "rain", "overflow", "submerged"),
    "storm":      ("storm", "cyclone", "hurricane", "wind", "tornado"),
    "fire":       ("fire", "burning", "smoke", "flames", "wildfire"),
    "earthquake": ("earthquake", "tremor", "shake", "seismic"),
    "tsunami":    ("tsunami", "wave", "surge", "coastal"),
    "accident":   ("accident", "crash", "collision", "emergency"),
}

URGENCY_KEYWORDS: tuple[str, ...] = ("urgent", "emergency", "critical", "immediate", "help", "rescue")

NEGATIVE_WORDS: frozenset[str] = frozenset({"danger", "disaster", "severe", "critical", "emergency"})
POSITIVE_WORDS: frozenset[str] = frozenset({"safe", "help", "rescue", "support"})

# ── Weights ───────────────────────────────────────────────────────────────────

KEYWORD_CONFIDENCE = 0.2
URGENCY_STEP = 0.3

_WORD_RE = re.compile(r"\b\w+\b")


def _contained(text: str, keywords: tuple[str, ...]) -> list[str]:
    return [kw for kw in keywords if kw in text]


def _sentiment(text: str) -> str:
    counts = Counter(_WORD_RE.findall(text))
    negative = sum(counts[w] for w in NEGATIVE_WORDS)
    positive = sum(counts[w] for w in POSITIVE_WORDS)
    if negative > positive:
        return "negative"
    if positive > negative:
        return "positive"
    return "neutral"


def analyze_text(text: str | None) -> TextAnalysis:
    """
    Extract hazard type, urgency, sentiment and confidence from `text`.

    Never raises. None, non-string and blank input return the zero-signal
    analysis (hazard_type "none", everything else zero / neutral).
    """
    if not isinstance(text, str) or not text.strip():
        return TextAnalysis()

    lowered = text.lower()

    hazard_type = "none"
    confidence = 0.0
    matched: list[str] = []

    for category, keywords in HAZARD_KEYWORDS.items():
        matches = _contained(lowered, keywords)
        if not matches:
            continue
        if hazard_type == "none":
            hazard_type = category
        confidence += len(matches) * KEYWORD_CONFIDENCE
        matched.extend(matches)

    urgency_matches = _contained(lowered, URGENCY_KEYWORDS)
    urgency_level = min(len(urgency_matches) * URGENCY_STEP, 1.0)
    matched.extend(urgency_matches)

    return TextAnalysis(
        hazard_type=hazard_type,
        urgency_level=urgency_level,
        sentiment=_sentiment(lowered),
        confidence=max(0.0, min(confidence, 1.0)),
        # "emergency" is both an accident and an urgency keyword
        matched_keywords=list(dict.fromkeys(matched)),
    )
