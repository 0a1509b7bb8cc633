"""
Health check endpoint.

Used by Docker HEALTHCHECK, load balancers and the reporting web app to
check API connectivity.

Returns status + DB connectivity so callers can distinguish between
"API down" and "API up but DB unreachable". Also reports how many hazards
and hotspots are currently published.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from hazardwatch.core import database as db_module
from hazardwatch.core.state import snapshot_store

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str  # Always "ok" if the API process is alive
    version: str
    database: str  # "connected" | "disconnected"
    environment: str
    active_hazards: int
    hotspots: int


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check() -> HealthResponse:
    """
    Returns the liveness status of the API and its database connection.

    The API is considered healthy (HTTP 200) even when the database is
    disconnected.
    """
    from hazardwatch.core.config import settings

    db_status = "disconnected"
    try:
        # Access via module reference so tests can patch db_module.db_client
        if db_module.db_client.client is not None:
            await db_module.db_client.client.admin.command("ping")
            db_status = "connected"
    except Exception as exc:
        logger.warning("DB ping failed: %s", exc)

    snapshot = snapshot_store.current()
    return HealthResponse(
        status="ok",
        version="0.1.0",
        database=db_status,
        environment=settings.environment,
        active_hazards=len(snapshot.hazards),
        hotspots=len(snapshot.hotspots),
    )
