"""
Tests for title feature extraction.
"""

import pytest

from content_analyzer.scoring.title_features import analyze_title, has_question


class TestTitleFeatures:
    """Tests for analyze_title."""

    def test_numbered_chinese_title(self):
        """Length is counted in code points and digits are detected."""
        result = analyze_title("5个提升工作效率的小技巧")

        assert result.length == 12
        assert result.has_numbers is True
        assert result.has_questions is False
        assert result.power_words == []
        assert result.clickbait_score == pytest.approx(0.2)
        assert result.clarity_score == pytest.approx(1.0)

    def test_empty_title(self):
        """An empty title is short and vague."""
        result = analyze_title("")

        assert result.length == 0
        assert result.clickbait_score == 0.0
        assert result.clarity_score == pytest.approx(0.6)

    def test_high_intensity_clickbait(self):
        """Questions, power words and intensity phrases add up."""
        result = analyze_title("你不知道的独家秘密？")

        assert result.has_questions is True
        assert result.power_words == ["独家", "秘密"]
        assert result.clickbait_score == pytest.approx(0.85)

    def test_clickbait_is_clamped(self):
        """Every signal together saturates at 1."""
        assert analyze_title("3个你不知道的独家秘密？").clickbait_score == 1.0

    def test_long_title_loses_clarity(self):
        """Titles over 50 characters lose clarity."""
        assert analyze_title("a" * 60).clarity_score == pytest.approx(0.7)

    def test_emoji_detection(self):
        """Emoticons and miscellaneous symbols count as emoji."""
        assert analyze_title("Happy day \U0001F600").has_emoji is True
        assert analyze_title("Sunny ☀").has_emoji is True
        assert analyze_title("Plain title").has_emoji is False

    def test_power_words_match_whole_words(self):
        """'free' does not match inside 'freedom'."""
        assert analyze_title("Freedom tips").power_words == []
        assert analyze_title("Free tips").power_words == ["free"]

    def test_power_words_in_vocabulary_order(self):
        """Matches are reported in vocabulary order."""
        assert analyze_title("Secret and exclusive deal").power_words == ["exclusive", "secret"]

    def test_emotional_words(self):
        """Emotional words are matched case-insensitively."""
        assert analyze_title("An AMAZING trip").emotional_words == ["amazing"]


class TestHasQuestion:
    """Tests for question detection."""

    @pytest.mark.parametrize("text", ["Why?", "为什么？"])
    def test_question_marks(self, text):
        """ASCII and full-width question marks are recognised."""
        assert has_question(text) is True

    def test_no_question(self):
        assert has_question("Statement.") is False
