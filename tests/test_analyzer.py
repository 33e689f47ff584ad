"""
Tests for the ContentAnalyzer.

Tests cover:
- End-to-end analysis of posts with and without images
- Partial and total image failures
- Suggestions derived from the analysis
- Content validation and health checks
"""

import pytest
from PIL import Image as PILImage

from content_analyzer.analyzer import ContentAnalyzer
from content_analyzer.config import AnalysisSettings, ScoreWeights
from content_analyzer.exceptions import ImageAnalysisError
from content_analyzer.providers import LexiconProvider
from content_analyzer.types import (
    Content,
    Image,
    Priority,
    ScoreLevel,
    SentimentLabel,
    SuggestionType,
)
from content_analyzer.utils.logging import content_id_var


# =============================================================================
# Analysis
# =============================================================================


class TestAnalyze:
    """Tests for ContentAnalyzer.analyze."""

    def test_sample_post(self, analyzer, sample_content):
        result = analyzer.analyze(sample_content)

        assert result.content_id == "post-001"
        assert result.title == sample_content.title
        assert 0 <= result.overall_score.total <= 100
        assert result.text_analysis.title.length == 12
        assert result.text_analysis.call_to_actions
        assert result.overall_score.breakdown.engagement >= 70
        assert result.overall_score.breakdown.visual == 30.0
        assert result.sentiment.overall == SentimentLabel.POSITIVE
        assert result.image_analysis == []

    def test_sample_post_suggestions(self, analyzer, sample_content):
        """Long unbroken CJK runs read as hard text; no images is flagged."""
        suggestions = analyzer.analyze(sample_content).suggestions

        assert [s.type for s in suggestions] == [SuggestionType.READABILITY, SuggestionType.VISUAL]
        assert suggestions[1].priority == Priority.HIGH
        assert suggestions[1].impact == "40-60% more engagement"

    def test_empty_post(self, analyzer):
        """Empty text still produces a complete result."""
        result = analyzer.analyze(Content(id="empty"))

        assert result.readability.reading_time == 30
        assert result.readability.flesch_score == pytest.approx(206.835)
        assert result.overall_score.breakdown.content_quality == 60.0
        assert result.overall_score.breakdown.visual == 30.0
        assert result.sentiment.overall == SentimentLabel.NEUTRAL
        assert result.keywords == []
        assert [s.type for s in result.suggestions] == [
            SuggestionType.TITLE,
            SuggestionType.STRUCTURE,
            SuggestionType.ENGAGEMENT,
            SuggestionType.VISUAL,
        ]

    def test_engagement_suggestion_has_examples(self, analyzer):
        result = analyzer.analyze(Content(id="quiet", title="A quiet afternoon", text="Just tea."))
        engagement = [s for s in result.suggestions if s.type == SuggestionType.ENGAGEMENT]

        assert len(engagement) == 1
        assert engagement[0].priority == Priority.HIGH
        assert len(engagement[0].examples) == 3

    def test_result_is_deterministic(self, analyzer, sample_content):
        """Same input, no AI and no images: every computed part matches."""
        first = analyzer.analyze(sample_content)
        second = analyzer.analyze(sample_content)

        assert first.text_analysis == second.text_analysis
        assert first.readability == second.readability
        assert first.keywords == second.keywords
        assert first.sentiment == second.sentiment
        assert first.overall_score == second.overall_score
        assert first.suggestions == second.suggestions

    def test_perfect_post_has_no_suggestions(self, analyzer, tmp_path, make_image):
        make_image("cover.png")
        content = Content(
            id="perfect",
            title="5个提升工作效率的神器",
            text="Hello friends. Today I share a few tips. They help a lot. Leave a comment below.",
            images=[Image(path="cover.png")],
            file_path=str(tmp_path / "perfect.json"),
        )

        result = analyzer.analyze(content)

        assert result.readability.flesch_score >= 50
        assert result.suggestions == []

    def test_context_is_cleared(self, analyzer, sample_content):
        analyzer.analyze(sample_content)
        assert content_id_var.get() is None

    def test_custom_weights(self, settings, sample_content):
        weights = ScoreWeights(
            content_quality=0.0,
            engagement=0.0,
            visual=1.0,
            title=0.0,
            readability=0.0,
            trend_relevance=0.0,
        )
        custom = settings.model_copy(update={"analysis": AnalysisSettings(score_weights=weights)})

        result = ContentAnalyzer(custom, provider=LexiconProvider()).analyze(sample_content)

        assert result.overall_score.total == pytest.approx(30.0)
        assert result.overall_score.level == ScoreLevel.POOR


# =============================================================================
# Images
# =============================================================================


class TestImages:
    """Tests for image handling during analysis."""

    def test_images_relative_to_content_file(self, analyzer, content_with_images):
        result = analyzer.analyze(content_with_images)

        assert len(result.image_analysis) == 2
        mean = sum(i.score for i in result.image_analysis) / 2
        assert result.overall_score.breakdown.visual == pytest.approx(mean)
        assert all(s.type != SuggestionType.VISUAL for s in result.suggestions)

    def test_one_failing_image_is_skipped(self, analyzer, tmp_path, make_image):
        make_image("ok.png")
        content = Content(
            id="mixed",
            images=[Image(path="ok.png"), Image(path="missing.png")],
            file_path=str(tmp_path / "mixed.json"),
        )

        result = analyzer.analyze(content)

        assert len(result.image_analysis) == 1
        assert result.image_analysis[0].image_path.endswith("ok.png")

    def test_oversized_image_does_not_stop_siblings(self, analyzer, tmp_path, make_image, monkeypatch):
        make_image("small.png", size=(20, 20))
        make_image("huge.png", size=(300, 200))
        monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 1000)
        content = Content(
            id="bomb",
            images=[Image(path="huge.png"), Image(path="small.png")],
            file_path=str(tmp_path / "bomb.json"),
        )

        result = analyzer.analyze(content)

        assert [i.image_path for i in result.image_analysis] == [str(tmp_path / "small.png")]

    def test_all_images_failing_raises(self, analyzer, tmp_path):
        content = Content(
            id="broken",
            images=[Image(path="missing.png")],
            file_path=str(tmp_path / "broken.json"),
        )

        with pytest.raises(ImageAnalysisError):
            analyzer.analyze(content)

    def test_context_cleared_after_failure(self, analyzer, tmp_path):
        content = Content(id="broken", images=[Image(path="missing.png")], file_path=str(tmp_path / "x.json"))

        with pytest.raises(ImageAnalysisError):
            analyzer.analyze(content)

        assert content_id_var.get() is None

    def test_relative_path_without_file_uses_content_dir(self, analyzer, settings):
        path = analyzer.resolve_image_path(Content(id="c"), Image(path="a.png"))
        assert path == settings.paths.content_dir / "a.png"

    def test_url_only_image_has_no_path(self, analyzer):
        assert analyzer.resolve_image_path(Content(id="c"), Image(url="https://example.com/a.png")) is None


# =============================================================================
# Validation and health
# =============================================================================


class TestValidateContent:
    """Tests for ContentAnalyzer.validate_content."""

    def test_short_text(self, analyzer, sample_content):
        issues = analyzer.validate_content(sample_content)
        assert issues == ["Text is too short: 6 words (minimum 50)"]

    def test_passing_content(self, analyzer):
        content = Content(id="ok", title="A fine title", text="word " * 60)
        assert analyzer.validate_content(content) == []

    def test_long_text_and_missing_title(self, analyzer):
        issues = analyzer.validate_content(Content(id="long", text="word " * 1001))

        assert issues[0].startswith("Text is too long: 1001 words")
        assert issues[1] == "Title is missing"

    def test_title_too_long(self, analyzer):
        content = Content(id="t", title="x" * 101, text="word " * 60)
        assert analyzer.validate_content(content) == ["Title is too long: 101 characters (maximum 100)"]

    def test_image_issues(self, analyzer, tmp_path):
        content = Content(
            id="img",
            title="Title",
            text="word " * 60,
            images=[Image(path="missing.png"), Image(url="https://example.com/a.png")],
            file_path=str(tmp_path / "img.json"),
        )

        issues = analyzer.validate_content(content)

        assert issues[0].startswith("Image 1: Image not found")
        assert issues[1] == "Image 2 has no local path"


class TestHealth:
    """Tests for health and service info."""

    def test_health_check(self, analyzer):
        assert analyzer.health_check() == {
            "image_formats_configured": True,
            "image_size_limit_valid": True,
            "remote_ai_active": False,
        }
        assert analyzer.is_healthy() is True

    def test_service_info(self, analyzer):
        info = analyzer.get_service_info()

        assert info["ai_provider"] == "local"
        assert info["ai_model"] is None
        assert ".png" in info["image_supported_formats"]
        assert info["score_weights"]["content_quality"] == 0.25

    def test_remote_service_info(self, settings, openai_settings, mock_openai):
        remote = settings.model_copy(update={"ai": openai_settings})
        analyzer = ContentAnalyzer(remote)

        info = analyzer.get_service_info()

        assert info["ai_provider"] == "openai"
        assert info["ai_model"] == "gpt-4o-mini"
        assert analyzer.health_check()["remote_ai_active"] is True

    def test_remote_failure_falls_back(self, settings, openai_settings, mock_openai, sample_content):
        """A failing remote provider never fails the analysis."""
        mock_openai.return_value.chat.completions.create.side_effect = Exception("connection reset")
        analyzer = ContentAnalyzer(settings.model_copy(update={"ai": openai_settings}))

        result = analyzer.analyze(sample_content)

        assert result.sentiment.overall == SentimentLabel.POSITIVE
        assert result.sentiment.confidence == pytest.approx(0.6)
