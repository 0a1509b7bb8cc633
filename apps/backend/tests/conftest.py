"""
pytest configuration and shared fixtures for the HazardWatch API tests.

Tests must not require a live MongoDB. We achieve this by:
  1. Patching connect_to_mongo / close_mongo_connection to no-ops so
     FastAPI's lifespan doesn't try to reach a real database.
  2. Setting db_client.client = None (disconnected) so the health check
     reports "disconnected" — a valid test-mode state.
  3. Overriding get_db with an in-memory FakeDB where a route needs storage.

The shared snapshot store and the rate limiter's counters are reset before
every test so state never leaks between tests.
"""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

# Set env vars BEFORE importing the app so Settings picks them up correctly
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("HOTSPOT_REFRESH_SECONDS", "0")


# ── In-memory Mongo stand-in ──────────────────────────────────────────────────

class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    def sort(self, field, direction=1):
        self._docs = sorted(self._docs, key=lambda d: d.get(field), reverse=direction < 0)
        return self

    async def __aiter__(self):
        for doc in self._docs:
            yield doc


class FakeCollection:
    def __init__(self):
        self._docs = {}

    async def insert_one(self, doc):
        oid = doc.get("_id") or ObjectId()
        self._docs[str(oid)] = {**doc, "_id": oid}
        result = MagicMock()
        result.inserted_id = oid
        return result

    async def insert_many(self, docs):
        ids = [(await self.insert_one(doc)).inserted_id for doc in docs]
        result = MagicMock()
        result.inserted_ids = ids
        return result

    async def find_one(self, query):
        for doc in self._docs.values():
            if self._matches(doc, query):
                return doc
        return None

    async def update_one(self, query, update):
        for key, doc in self._docs.items():
            if self._matches(doc, query):
                self._docs[key] = {**doc, **update.get("$set", {})}
                return

    def find(self, query=None):
        query = query or {}
        return FakeCursor([d for d in self._docs.values() if self._matches(d, query)])

    @property
    def docs(self):
        return list(self._docs.values())

    @staticmethod
    def _matches(doc, query):
        for k, v in query.items():
            if isinstance(v, dict) and "$gt" in v:
                if doc.get(k) is None or not doc[k] > v["$gt"]:
                    return False
            elif doc.get(k) != v:
                return False
        return True


class FakeDB:
    def __init__(self):
        self._cols = {}

    def __getitem__(self, name):
        if name not in self._cols:
            self._cols[name] = FakeCollection()
        return self._cols[name]


def make_report_doc(**overrides):
    """A stored report document as the submission route would write it."""
    doc = {
        "title": None,
        "description": "water rising on the road",
        "type": "flood",
        "severity": "medium",
        "latitude": 19.01,
        "longitude": 72.81,
        "people_affected": 0,
        "timestamp": datetime.now(tz=timezone.utc) - timedelta(minutes=5),
        "verified": False,
        "analysis": {
            "hazard_type": "flood",
            "urgency_level": 0.0,
            "sentiment": "neutral",
            "confidence": 0.2,
            "matched_keywords": ["water"],
        },
    }
    doc.update(overrides)
    return doc


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
async def mock_db():
    """
    Patch the MongoDB lifecycle for every test.

    Tests that need storage override get_db with FakeDB (see db_client fixture).
    """
    with (
        patch("hazardwatch.core.database.connect_to_mongo", new_callable=AsyncMock),
        patch("hazardwatch.core.database.close_mongo_connection", new_callable=AsyncMock),
    ):
        import hazardwatch.core.database as db_module

        original_client = db_module.db_client.client
        original_db = db_module.db_client.db

        db_module.db_client.client = None
        db_module.db_client.db = None

        yield

        db_module.db_client.client = original_client
        db_module.db_client.db = original_db


@pytest.fixture(autouse=True)
def reset_shared_state():
    from hazardwatch.core.rate_limit import limiter
    from hazardwatch.core.state import snapshot_store

    snapshot_store.reset()
    try:
        limiter._limiter.storage.reset()
    except Exception:
        pass  # Some storage backends don't support reset — safe to ignore.
    yield
    snapshot_store.reset()


@pytest.fixture()
async def client(mock_db):  # noqa: ARG001 — mock_db must run first
    """HTTPX async test client wired to the FastAPI app, no database."""
    from hazardwatch.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def fake_db():
    return FakeDB()


@pytest.fixture()
async def db_client(fake_db):
    """HTTPX client with get_db overridden by the in-memory FakeDB."""
    from hazardwatch.core.database import get_db
    from hazardwatch.main import app

    app.dependency_overrides[get_db] = lambda: fake_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def report_doc():
    """Factory for stored report documents: report_doc(severity="critical", ...)."""
    return make_report_doc
