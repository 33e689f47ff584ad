"""
Tests for composite scoring.

Tests cover:
- Individual sub-score rules
- Level thresholds
- Deterministic strongest/weakest selection
- Weighted totals with default and custom weights
"""

import pytest

from content_analyzer.config import ScoreWeights
from content_analyzer.scoring.composite import (
    DIMENSIONS,
    CompositeScorer,
    content_quality_score,
    dimension_scores,
    engagement_score,
    get_level,
    readability_score,
    strongest_and_weakest,
    title_score,
    trend_relevance_score,
    visual_score,
)
from content_analyzer.scoring.readability import analyze_readability
from content_analyzer.scoring.text_features import analyze_text
from content_analyzer.scoring.title_features import analyze_title
from content_analyzer.types import (
    Keyword,
    KeywordCategory,
    ScoreBreakdown,
    ScoreLevel,
    Trend,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def breakdown():
    """A breakdown with a tie for the strongest dimension."""
    return ScoreBreakdown(
        content_quality=60,
        engagement=80,
        visual=30,
        title=80,
        readability=70,
        trend_relevance=60,
    )


def _keyword(word, relevance=0.01, trend=Trend.STABLE):
    return Keyword(
        word=word,
        frequency=2,
        relevance=relevance,
        trend=trend,
        category=KeywordCategory.TOPIC,
    )


# =============================================================================
# Sub-scores
# =============================================================================


class TestSubScores:
    """Tests for the six sub-score rules."""

    def test_empty_text_base_scores(self):
        """Empty text earns only the base scores."""
        text = analyze_text("")

        assert content_quality_score(text) == 60.0
        assert engagement_score(text) == 50.0

    def test_content_quality_rewards(self):
        """Length, intro plus conclusion, and a CTA all add points."""
        body = "大家好 " + "word " * 120 + "希望 点赞"
        assert content_quality_score(analyze_text(body)) == 100.0

    def test_engagement_rewards(self):
        """CTA, title question, emotional title and second person add up."""
        text = analyze_text("you should comment below", "Amazing trip?")
        assert engagement_score(text) == 100.0

    def test_visual_without_images(self):
        assert visual_score([]) == 30.0

    def test_title_score(self):
        """Length 10-30, a number and high clarity."""
        assert title_score(analyze_title("5个提升工作效率的小技巧")) == 85.0

    def test_title_score_with_power_word(self):
        assert title_score(analyze_title("限时免费的10个神器推荐清单")) == 100.0

    def test_readability_score_for_empty_text(self):
        """Very easy text with no complex words."""
        assert readability_score(analyze_readability("")) == 90.0

    def test_trend_relevance(self):
        """Rising and highly relevant keywords add points."""
        keywords = [
            _keyword("ai", relevance=0.1, trend=Trend.RISING),
            _keyword("ml", relevance=0.01),
        ]
        assert trend_relevance_score(keywords) == 67.0

    def test_trend_relevance_is_bounded(self):
        keywords = [_keyword(f"w{i}", relevance=0.1, trend=Trend.RISING) for i in range(10)]
        assert trend_relevance_score(keywords) == 100.0


# =============================================================================
# Levels and selection
# =============================================================================


class TestGetLevel:
    """Tests for level thresholds."""

    @pytest.mark.parametrize(
        "total,level",
        [
            (100, ScoreLevel.EXCELLENT),
            (85, ScoreLevel.EXCELLENT),
            (84.999, ScoreLevel.GOOD),
            (70, ScoreLevel.GOOD),
            (69.9, ScoreLevel.AVERAGE),
            (50, ScoreLevel.AVERAGE),
            (49.999, ScoreLevel.POOR),
            (0, ScoreLevel.POOR),
        ],
    )
    def test_thresholds_are_inclusive(self, total, level):
        assert get_level(total) == level


class TestStrongestAndWeakest:
    """Tests for deterministic dimension selection."""

    def test_first_maximum_wins(self, breakdown):
        """Engagement and title tie; engagement comes first."""
        assert strongest_and_weakest(breakdown) == ("engagement", "visual")

    def test_all_equal(self):
        """With no spread both ends are the first dimension."""
        flat = ScoreBreakdown(**{name: 50 for name in DIMENSIONS})
        assert strongest_and_weakest(flat) == ("content_quality", "content_quality")

    def test_dimension_scores_order(self, breakdown):
        assert [name for name, _ in dimension_scores(breakdown)] == list(DIMENSIONS)


# =============================================================================
# Weighted totals
# =============================================================================


class TestCompositeScorer:
    """Tests for CompositeScorer."""

    def test_default_weights(self, breakdown):
        scorer = CompositeScorer()
        assert scorer.weighted_total(breakdown) == pytest.approx(64.0)

    def test_custom_weights(self, breakdown):
        weights = ScoreWeights(
            content_quality=0.0,
            engagement=0.0,
            visual=1.0,
            title=0.0,
            readability=0.0,
            trend_relevance=0.0,
        )
        assert CompositeScorer(weights).weighted_total(breakdown) == pytest.approx(30.0)

    def test_score_for_empty_post(self):
        """An empty post with no images scores each dimension at its base."""
        scorer = CompositeScorer()
        result = scorer.score(analyze_text(""), [], analyze_readability(""), [])

        assert result.breakdown.content_quality == 60.0
        assert result.breakdown.visual == 30.0
        assert result.breakdown.readability == 90.0
        assert result.weakest == "visual"
        assert result.strongest == "readability"
        assert result.level == ScoreLevel.AVERAGE
        assert "weakest in visuals (30)" in result.reasoning
