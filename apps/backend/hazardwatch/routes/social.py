"""
social.py — Social-media relevance routes.

Routes:
  POST /api/v1/social/analyze — score a batch of posts; store the relevant ones
  GET  /api/v1/social/feed    — scored sample feed

Posts at or below the confidence gate are dropped from the response.
Of the remaining posts, those with relevance_score > 0.5 are stored in the
`social_posts` collection (when MongoDB is reachable) and counted as
`relevant`.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from hazardwatch.core.config import settings
from hazardwatch.core.database import get_db
from hazardwatch.core.rate_limit import limiter
from hazardwatch.models.social import (
    SocialAnalyzeRequest,
    SocialAnalyzeResponse,
    SocialFeedResponse,
    SocialPost,
)
from hazardwatch.services.relevance import is_relevant, process_posts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/social", tags=["social"])


# ── Sample feed ───────────────────────────────────────────────────────────────
# Placeholder until a platform connector pushes posts into /analyze.

_SAMPLE_POSTS = [
    ("Twitter",   "Heavy rainfall in Mumbai causing flooding #MumbaiRains #Emergency", 150),
    ("Facebook",  "Cyclone warning issued for Odisha coast. Please stay safe!",         89),
    ("Instagram", "Forest fire spreading near Dehradun. Authorities responding.",       67),
]


@router.post("/analyze", response_model=SocialAnalyzeResponse)
@limiter.limit(settings.social_rate_limit)
async def analyze_posts(request: Request, payload: SocialAnalyzeRequest, db=Depends(get_db)):
    analyzed = process_posts(payload.posts)
    relevant = [p for p in analyzed if is_relevant(p)]

    if db is not None and relevant:
        try:
            await db["social_posts"].insert_many([p.model_dump() for p in relevant])
        except Exception as exc:
            # Scoring still succeeded; storage is best effort.
            logger.warning("Storing %d relevant post(s) failed: %s", len(relevant), exc)

    return SocialAnalyzeResponse(analyzed=len(analyzed), relevant=len(relevant), posts=analyzed)


@router.get("/feed", response_model=SocialFeedResponse)
async def social_feed():
    now = datetime.now(tz=timezone.utc)
    posts = [
        SocialPost(platform=platform, content=content, engagement=engagement, timestamp=now)
        for platform, content, engagement in _SAMPLE_POSTS
    ]
    return SocialFeedResponse(posts=process_posts(posts))
