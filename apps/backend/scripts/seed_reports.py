#!/usr/bin/env python3
"""
seed_reports.py — Populate MongoDB with sample hazard reports for local development.

Usage (from the repo root, with the package installed):
    python apps/backend/scripts/seed_reports.py           # replace existing seed data
    python apps/backend/scripts/seed_reports.py --append  # add without clearing first

Prerequisites:
    • MONGO_URI env var set (or .env file present)
    • MongoDB reachable from this machine

Every document goes through the same path as POST /api/v1/reports
(new_report_doc), so the stored text analysis matches what the API
would have attached.

What this script creates
────────────────────────
  reports   ← 14 reports around Mumbai, Chennai and Kolkata, spread over
              the last 20 hours so they fall inside the hotspot window
  indexes   ← timestamp / severity indexes used by the list and hotspot
              queries
"""

import argparse
import asyncio
import random
from datetime import datetime, timedelta, timezone

import certifi
from motor.motor_asyncio import AsyncIOMotorClient

from hazardwatch.core.config import settings
from hazardwatch.models.report import ReportCreate
from hazardwatch.services.hotspots import generate_hotspots
from hazardwatch.services.reports import doc_to_report, new_report_doc

# ── Seed reports ──────────────────────────────────────────────────────────────
# Columns: title, description, type, severity, lat, lng, people_affected
_RAW = [
    # ── Mumbai ────────────────────────────────────────────────────────────────
    ("Marine Drive flooded",   "urgent flood emergency near the coast",              "flood",   "critical", 19.02, 72.82, 40),
    ("Colaba waterlogging",    "water overflow on the main road, cars submerged",    "flood",   "high",     19.03, 72.83, 12),
    ("Worli sea face",         "high wave surge hitting the promenade",              "tsunami", "high",     19.01, 72.81, 0),
    ("Dadar underpass",        "heavy rain, underpass closed",                       "flood",   "medium",   19.04, 72.84, 5),
    # ── Chennai ───────────────────────────────────────────────────────────────
    ("Marina beach wind",      "strong wind and storm warning, fishermen return",    "storm",   "high",     13.05, 80.28, 30),
    ("Adyar river level",      "river water rising fast, help needed",               "flood",   "critical", 13.01, 80.25, 60),
    ("Besant Nagar",           "coastal surge reported near the beach",              "tsunami", "medium",   13.00, 80.27, 0),
    # ── Kolkata ───────────────────────────────────────────────────────────────
    ("Howrah bridge traffic",  "accident on the bridge approach",                    "accident", "medium",  22.58, 88.34, 3),
    ("Salt Lake fire",         "smoke and flames from a warehouse, rescue underway", "fire",    "critical", 22.58, 88.41, 8),
    ("Park Street tree fall",  "cyclone winds brought down trees",                  "storm",   "high",     22.55, 88.35, 0),
    ("Sealdah flooding",       "flooding near the station after rainfall",           "flood",   "medium",   22.56, 88.37, 20),
    # ── Isolated reports (never form a hotspot alone) ─────────────────────────
    ("Goa beach",              "lifeguards report safe conditions",                  None,      "low",      15.49, 73.82, 0),
    ("Vizag harbour",          "minor tremor felt, no damage",                       "earthquake", "low",   17.69, 83.29, 0),
    ("Puri coast",             "coastal wave height normal",                         None,      "low",      19.80, 85.83, 0),
]


def _make_report(row: tuple, hours_ago: float) -> dict:
    """Convert a seed row into a stored report document."""
    title, description, type_, severity, lat, lng, people = row
    payload = ReportCreate(
        title=title,
        description=description,
        type=type_,
        severity=severity,
        # ±0.005° jitter so reruns do not stack reports on the exact same point
        latitude=lat + random.uniform(-0.005, 0.005),
        longitude=lng + random.uniform(-0.005, 0.005),
        people_affected=people,
        timestamp=datetime.now(tz=timezone.utc) - timedelta(hours=hours_ago),
    )
    return new_report_doc(payload)


async def create_indexes(db) -> None:
    """Idempotent index creation — safe to run multiple times."""
    print("  Creating indexes…")

    # reports: time window + severity filter (list route, hotspot refresh)
    await db["reports"].create_index(
        [("timestamp", -1), ("severity", 1)],
        name="ts_desc_severity_asc",
        background=True,
    )
    # reports: reporter-chosen type filter
    await db["reports"].create_index(
        [("type", 1), ("timestamp", -1)],
        name="type_asc_ts_desc",
        background=True,
    )
    await db["social_posts"].create_index([("timestamp", -1)], name="ts_desc", background=True)
    await db["warnings"].create_index([("timestamp", -1)], name="ts_desc", background=True)
    print("  Indexes OK")


async def seed(append: bool = False) -> None:
    client = AsyncIOMotorClient(settings.mongo_uri, tlsCAFile=certifi.where())
    db = client[settings.mongo_db_name]

    try:
        await client.admin.command("ping")
        print(f"Connected to MongoDB ({settings.mongo_db_name})")
    except Exception as exc:
        print(f"ERROR: Cannot connect to MongoDB: {exc}")
        return

    if not append:
        print("\nClearing existing reports…")
        result = await db["reports"].delete_many({})
        print(f"  Deleted {result.deleted_count} existing documents")

    print("\nInserting reports…")
    step = 20.0 / len(_RAW)
    docs = [_make_report(row, hours_ago=i * step + 0.5) for i, row in enumerate(_RAW)]
    result = await db["reports"].insert_many(docs)
    print(f"  Inserted {len(result.inserted_ids)} reports")

    print("\nEnsuring indexes…")
    await create_indexes(db)

    # ── Verify ────────────────────────────────────────────────────────────────
    reports = [doc_to_report(d) async for d in db["reports"].find({})]
    hotspots = generate_hotspots(reports, window=timedelta(hours=settings.hotspot_window_hours))

    print("\n✓ Done")
    print(f"  reports total : {len(reports)}")
    print(f"  hotspots      : {len(hotspots)}")
    for h in hotspots:
        print(f"    {h.id:<10} {h.severity:<8} reports={h.report_count} score={h.severity_score}")

    client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed HazardWatch sample reports into MongoDB")
    parser.add_argument(
        "--append",
        action="store_true",
        help="Add reports without clearing existing data first",
    )
    args = parser.parse_args()

    print(f"HazardWatch Report Seeder  (db: {settings.mongo_db_name})")
    print(f"Mode: {'append' if args.append else 'replace'}\n")

    asyncio.run(seed(append=args.append))
