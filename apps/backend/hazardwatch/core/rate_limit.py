"""
rate_limit.py — Global rate limiter instance.

Uses slowapi (a Starlette-compatible wrapper around the `limits` library).
Requests are keyed by client IP address.

Limited routes:
  POST /api/v1/reports         — settings.report_rate_limit
  POST /api/v1/social/analyze  — settings.social_rate_limit

Usage in routes:
    @router.post("/some-endpoint")
    @limiter.limit(settings.report_rate_limit)
    async def my_endpoint(request: Request, payload: MyRequest):
        ...
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)
