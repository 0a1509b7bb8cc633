"""
HazardWatch API — Application entry point.

Bootstraps FastAPI, wires up middleware, registers route groups,
manages the MongoDB connection lifecycle and runs the periodic
hotspot refresh.

Extension points:
  - Add new route groups with app.include_router() below
  - Change startup behaviour in the lifespan context manager
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from hazardwatch.core.config import settings
from hazardwatch.core.database import close_mongo_connection, connect_to_mongo, get_db
from hazardwatch.core.rate_limit import limiter
from hazardwatch.core.state import snapshot_store
from hazardwatch.routes.health import router as health_router
from hazardwatch.routes.hotspots import router as hotspots_router
from hazardwatch.routes.nlp import router as nlp_router
from hazardwatch.routes.ocean import router as ocean_router
from hazardwatch.routes.reports import router as reports_router
from hazardwatch.routes.social import router as social_router
from hazardwatch.services.reports import refresh_hotspots

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Periodic hotspot refresh ──────────────────────────────────────────────────
async def _refresh_hotspots_forever(interval: int) -> None:
    """Recompute hotspots every `interval` seconds so stale reports age out."""
    while True:
        try:
            hotspots = await refresh_hotspots(get_db(), snapshot_store)
            logger.debug("Periodic refresh published %d hotspot(s)", len(hotspots))
        except Exception as exc:
            logger.warning("Periodic hotspot refresh failed: %s", exc)
        await asyncio.sleep(interval)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage startup and shutdown lifecycle.

    Code before `yield` runs on startup; code after runs on shutdown.
    """
    logger.info("Starting HazardWatch API (env: %s)", settings.environment)
    await connect_to_mongo()

    refresher = None
    if settings.hotspot_refresh_seconds > 0:
        refresher = asyncio.create_task(_refresh_hotspots_forever(settings.hotspot_refresh_seconds))

    yield

    logger.info("Shutting down HazardWatch API")
    if refresher is not None:
        refresher.cancel()
        try:
            await refresher
        except asyncio.CancelledError:
            pass
    await close_mongo_connection()


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="HazardWatch API",
    description=(
        "Hazard report ingestion, keyword-based text signals, hotspot "
        "aggregation and proximity-weighted marine risk assessment."
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
# Routes opt in with @limiter.limit(...) + a request: Request parameter.
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ─── Middleware ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(reports_router)
app.include_router(hotspots_router)
app.include_router(nlp_router)
app.include_router(social_router)
app.include_router(ocean_router)


@app.get("/", tags=["root"])
async def root():
    """API root — basic metadata."""
    return {
        "name": "HazardWatch API",
        "version": "0.1.0",
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }
