"""
test_hotspots.py — Grid-cell hotspot aggregation.
"""

from datetime import datetime, timedelta, timezone

import pytest

from hazardwatch.models.report import Report
from hazardwatch.services.hotspots import cell_key, generate_hotspots, severity_category

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

_seq = iter(range(1_000_000))


def _report(lat=19.01, lng=72.81, severity="medium", minutes_ago=10, **kw):
    return Report(
        id=f"r{next(_seq)}",
        latitude=lat,
        longitude=lng,
        severity=severity,
        timestamp=NOW - timedelta(minutes=minutes_ago),
        **kw,
    )


class TestCellKey:

    def test_positive(self):
        assert cell_key(19.05, 72.87) == "190_728"

    def test_negative_floors_down(self):
        assert cell_key(-33.86, 151.21) == "-339_1512"


class TestSeverityCategory:

    @pytest.mark.parametrize("score,expected", [
        (2,  "medium"),
        (6,  "medium"),
        (7,  "high"),
        (10, "high"),
        (11, "critical"),
    ])
    def test_thresholds(self, score, expected):
        assert severity_category(score) == expected


class TestGenerateHotspots:

    def test_single_report_is_not_a_hotspot(self):
        assert generate_hotspots([_report()], now=NOW) == []

    def test_two_critical_reports_score_eight_is_high(self):
        hotspots = generate_hotspots(
            [_report(severity="critical"), _report(severity="critical")], now=NOW,
        )
        assert len(hotspots) == 1
        assert hotspots[0].severity_score == 8
        assert hotspots[0].severity == "high"

    def test_three_critical_reports_are_critical(self):
        hotspots = generate_hotspots([_report(severity="critical") for _ in range(3)], now=NOW)
        assert hotspots[0].severity_score == 12
        assert hotspots[0].severity == "critical"

    def test_unknown_severity_weighs_one(self):
        hotspots = generate_hotspots(
            [_report(severity="catastrophic"), _report(severity="low")], now=NOW,
        )
        assert hotspots[0].severity_score == 2
        assert hotspots[0].severity == "medium"

    def test_reports_in_different_cells_stay_apart(self):
        reports = [_report(lat=19.01), _report(lat=19.02), _report(lat=19.31), _report(lat=19.32)]
        hotspots = generate_hotspots(reports, now=NOW)
        assert [h.id for h in hotspots] == ["190_728", "193_728"]
        assert all(h.report_count == 2 for h in hotspots)

    def test_centroid_is_mean(self):
        hotspots = generate_hotspots(
            [_report(lat=19.01, lng=72.81), _report(lat=19.07, lng=72.85)], now=NOW,
        )
        assert hotspots[0].latitude == pytest.approx(19.04)
        assert hotspots[0].longitude == pytest.approx(72.83)

    def test_window_excludes_old_reports(self):
        reports = [_report(minutes_ago=10), _report(minutes_ago=24 * 60 + 1)]
        assert generate_hotspots(reports, now=NOW) == []

    def test_report_exactly_at_window_edge_is_excluded(self):
        reports = [_report(minutes_ago=10), _report(minutes_ago=24 * 60)]
        assert generate_hotspots(reports, now=NOW) == []

    def test_custom_window(self):
        reports = [_report(minutes_ago=10), _report(minutes_ago=90)]
        assert generate_hotspots(reports, window=timedelta(hours=1), now=NOW) == []
        assert len(generate_hotspots(reports, window=timedelta(hours=2), now=NOW)) == 1

    def test_rollups(self):
        reports = [
            _report(type="flood", people_affected=10, minutes_ago=30),
            _report(type="storm", people_affected=None, minutes_ago=5),
            _report(type="flood", people_affected=3, minutes_ago=50),
            _report(type=None, minutes_ago=20),
        ]
        (hotspot,) = generate_hotspots(reports, now=NOW)
        assert hotspot.report_count == 4
        assert hotspot.hazard_types == ["flood", "storm"]
        assert hotspot.affected_people == 13
        assert hotspot.last_update == NOW - timedelta(minutes=5)

    def test_reports_without_coordinates_are_skipped(self):
        reports = [_report(), _report(lat=None), _report(lng=None)]
        assert generate_hotspots(reports, now=NOW) == []

    def test_naive_timestamps_treated_as_utc(self):
        naive = Report(id="n1", latitude=19.01, longitude=72.81,
                       timestamp=(NOW - timedelta(minutes=1)).replace(tzinfo=None))
        hotspots = generate_hotspots([naive, _report()], now=NOW)
        assert hotspots[0].report_count == 2
        assert hotspots[0].last_update.tzinfo is not None

    def test_idempotent(self):
        reports = [
            _report(severity="high", type="flood", people_affected=4),
            _report(severity="critical", type="tsunami"),
            _report(lat=-12.3, lng=45.6),
            _report(lat=-12.31, lng=45.61, severity="low"),
        ]
        assert generate_hotspots(reports, now=NOW) == generate_hotspots(reports, now=NOW)

    def test_empty_input(self):
        assert generate_hotspots([], now=NOW) == []
