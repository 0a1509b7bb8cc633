"""
test_text_signals.py — Unit tests for the keyword-based text signal extractor.

Run:
    pytest apps/backend/tests/test_text_signals.py -v
"""

import pytest

from hazardwatch.services.text_signals import HAZARD_KEYWORDS, analyze_text


class TestZeroSignal:

    @pytest.mark.parametrize("text", ["", "   ", None, 42, ["flood"]])
    def test_blank_or_malformed_text(self, text):
        analysis = analyze_text(text)
        assert analysis.hazard_type == "none"
        assert analysis.urgency_level == 0
        assert analysis.sentiment == "neutral"
        assert analysis.confidence == 0
        assert analysis.matched_keywords == []

    def test_text_without_keywords(self):
        analysis = analyze_text("Lovely evening at the market")
        assert analysis.hazard_type == "none"
        assert analysis.confidence == 0


class TestHazardType:

    def test_flood_keyword(self):
        assert analyze_text("The river is flooding the village").hazard_type == "flood"

    def test_case_insensitive(self):
        assert analyze_text("CYCLONE approaching").hazard_type == "storm"

    def test_substring_match(self):
        """'wave' is contained in 'waves'."""
        assert analyze_text("giant waves at the pier").hazard_type == "tsunami"

    def test_first_category_wins_over_more_matches(self):
        """Flood (1 match) is declared before fire (3 matches) and wins."""
        analysis = analyze_text("smoke and flames, wildfire near the flood barrier")
        assert analysis.hazard_type == "flood"

    def test_storm_before_accident(self):
        assert analyze_text("crash caused by tornado").hazard_type == "storm"

    def test_category_order_is_fixed(self):
        assert list(HAZARD_KEYWORDS) == [
            "flood", "storm", "fire", "earthquake", "tsunami", "accident",
        ]


class TestConfidence:

    def test_one_keyword(self):
        assert analyze_text("tremor felt downtown").confidence == pytest.approx(0.2)

    def test_accumulates_across_categories(self):
        # flood: flood ; accident: emergency
        assert analyze_text("flood emergency").confidence == pytest.approx(0.4)

    def test_repetition_counts_once(self):
        """Keywords are tested for containment, not counted."""
        assert analyze_text("fire fire fire fire").confidence == pytest.approx(0.2)

    def test_clamped_to_one(self):
        text = "flood flooding water rain overflow submerged storm cyclone fire smoke"
        assert analyze_text(text).confidence == 1.0

    @pytest.mark.parametrize("text", [
        "flood " * 500,
        " ".join(kw for kws in HAZARD_KEYWORDS.values() for kw in kws),
        "urgent emergency critical immediate help rescue " * 20,
    ])
    def test_bounds_hold_for_any_text(self, text):
        analysis = analyze_text(text)
        assert 0.0 <= analysis.confidence <= 1.0
        assert 0.0 <= analysis.urgency_level <= 1.0


class TestUrgency:

    @pytest.mark.parametrize("text,expected", [
        ("calm seas", 0.0),
        ("urgent", 0.3),
        ("urgent help needed", 0.6),
        ("urgent help, immediate rescue", 1.0),
        ("urgent emergency critical immediate help rescue", 1.0),
    ])
    def test_urgency_steps(self, text, expected):
        assert analyze_text(text).urgency_level == pytest.approx(expected)

    def test_keyword_in_both_sets_counts_in_both(self):
        analysis = analyze_text("emergency")
        assert analysis.hazard_type == "accident"
        assert analysis.confidence == pytest.approx(0.2)
        assert analysis.urgency_level == pytest.approx(0.3)
        assert analysis.matched_keywords == ["emergency"]


class TestSentiment:

    def test_negative(self):
        assert analyze_text("severe disaster at the port").sentiment == "negative"

    def test_positive(self):
        assert analyze_text("everyone is safe, support arrived").sentiment == "positive"

    def test_tie_is_neutral(self):
        assert analyze_text("danger but safe now").sentiment == "neutral"

    def test_counts_occurrences(self):
        """Two 'safe' outweigh one 'danger'."""
        assert analyze_text("danger passed, safe and safe again").sentiment == "positive"

    def test_whole_words_only(self):
        """'dangerous' and 'unsafe' are not the words 'danger' and 'safe'."""
        assert analyze_text("dangerous but unsafe").sentiment == "neutral"


class TestScenario:

    def test_urgent_coastal_flood(self):
        analysis = analyze_text("urgent flood emergency near the coast")
        assert analysis.hazard_type == "flood"
        assert analysis.urgency_level == pytest.approx(0.6)
        assert analysis.confidence == pytest.approx(0.4)
        assert analysis.sentiment == "negative"
        assert analysis.matched_keywords == ["flood", "emergency", "urgent"]

    def test_deterministic(self):
        text = "Storm surge and heavy rain, help needed"
        assert analyze_text(text) == analyze_text(text)
