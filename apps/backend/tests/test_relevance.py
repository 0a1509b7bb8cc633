"""
test_relevance.py — Social post relevance scoring and the confidence gate.
"""

import pytest

from hazardwatch.models.social import SocialPost
from hazardwatch.services.relevance import is_relevant, process_posts, score_post


def _post(content, engagement=0, platform="Twitter"):
    return SocialPost(platform=platform, content=content, engagement=engagement)


class TestScorePost:

    def test_formula(self):
        # confidence 0.4 (flood + emergency), urgency 0.3 (emergency)
        post = _post("flood emergency", engagement=50)
        assert score_post(post) == pytest.approx(0.4 * 1.5 * 0.8)

    def test_zero_engagement(self):
        # confidence 0.2, urgency 0
        assert score_post(_post("storm")) == pytest.approx(0.2 * 1.0 * 0.5)

    def test_irrelevant_text_scores_zero(self):
        assert score_post(_post("great coffee today", engagement=1000)) == 0

    def test_engagement_raises_score(self):
        low = score_post(_post("flood and storm", engagement=0))
        high = score_post(_post("flood and storm", engagement=300))
        assert high == pytest.approx(low * 4)


class TestProcessPosts:

    def test_gate_drops_weak_signal(self):
        """Confidence 0.2 is below the gate; 0.4 passes."""
        posts = [
            _post("storm"),                       # 0.2
            _post("flood and storm"),             # 0.4
        ]
        result = process_posts(posts)
        assert [p.content for p in result] == ["flood and storm"]

    def test_gate_is_on_confidence_not_relevance(self):
        """A post can pass the gate and still be below the relevance threshold."""
        result = process_posts([_post("flood and storm")])
        assert len(result) == 1
        assert result[0].relevance_score == pytest.approx(0.2)
        assert not is_relevant(result[0])

    def test_relevant_post(self):
        post = _post("Heavy rainfall in Mumbai causing flooding #MumbaiRains #Emergency", 150)
        (result,) = process_posts([post])
        assert result.analysis.hazard_type == "flood"
        assert is_relevant(result)

    def test_preserves_post_fields(self):
        (result,) = process_posts([_post("flood and storm", engagement=7, platform="Facebook")])
        assert result.platform == "Facebook"
        assert result.engagement == 7

    def test_empty_batch(self):
        assert process_posts([]) == []

    def test_order_preserved(self):
        posts = [_post("flood and storm"), _post("fire and smoke"), _post("quiet day")]
        assert [p.content for p in process_posts(posts)] == ["flood and storm", "fire and smoke"]
