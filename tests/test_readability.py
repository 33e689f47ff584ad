"""
Tests for readability scoring.
"""

import pytest

from content_analyzer.scoring.readability import analyze_readability, estimate_reading_time


class TestAnalyzeReadability:
    """Tests for analyze_readability."""

    def test_empty_text(self):
        """Empty text scores the formula constant and the minimum reading time."""
        metrics = analyze_readability("")

        assert metrics.flesch_score == pytest.approx(206.835)
        assert metrics.avg_sentence_length == 0.0
        assert metrics.avg_word_length == 0.0
        assert metrics.reading_time == 30
        assert metrics.grade == "easy"

    def test_short_sentences(self):
        """Averages include trailing punctuation in word length."""
        metrics = analyze_readability("The cat sat. The dog ran.")

        assert metrics.avg_sentence_length == pytest.approx(3.0)
        assert metrics.avg_word_length == pytest.approx(20 / 6)
        assert metrics.flesch_score == pytest.approx(206.835 - 3.045 - 60.0)
        assert metrics.complex_word_ratio == 0.0
        assert metrics.grade == "easy"

    def test_medium_grade(self):
        """Ten seven-letter words in one sentence land in the medium band."""
        metrics = analyze_readability(" ".join(["example"] * 10))

        assert metrics.flesch_score == pytest.approx(70.685)
        assert metrics.complex_word_ratio == 1.0
        assert metrics.grade == "medium"

    def test_hard_grade(self):
        """Long words push the score below 50, even negative."""
        metrics = analyze_readability("Internationalization considerations notwithstanding")

        assert metrics.flesch_score < 0
        assert metrics.grade == "hard"


class TestReadingTime:
    """Tests for estimate_reading_time."""

    @pytest.mark.parametrize(
        "words,seconds",
        [(0, 30), (125, 30), (130, 31), (200, 48), (250, 60), (1000, 240)],
    )
    def test_reading_time(self, words, seconds):
        """250 words per minute, rounded, with a 30 second floor."""
        assert estimate_reading_time(words) == seconds
