"""
Tests for writing style classification.
"""

import pytest

from content_analyzer.scoring.style import classify_style


class TestTone:
    """Tests for tone classification."""

    def test_empty_text(self):
        """Empty text is casual, neutral and third person."""
        style = classify_style("")

        assert style.tone == "casual"
        assert style.formality == 0.5
        assert style.complexity == 0.0
        assert style.person_perspective == "third"
        assert style.authenticity == pytest.approx(0.8)

    def test_enthusiastic(self):
        """More than three distinct emotional words is enthusiastic."""
        style = classify_style("amazing wonderful fantastic incredible day")
        assert style.tone == "enthusiastic"

    def test_formal(self):
        """Sentence-final punctuation without questions reads as formal."""
        assert classify_style("The results are clear. Therefore we proceed.").tone == "formal"

    def test_exclamation_is_casual(self):
        """Exclamations end sentences but do not read as formal."""
        assert classify_style("What a trip! 太棒了！").tone == "casual"

    def test_question_is_casual(self):
        """A question keeps the tone casual."""
        assert classify_style("Is this clear. What now?").tone == "casual"


class TestPerspective:
    """Tests for person perspective."""

    def test_second_person(self):
        """'think' does not count as the pronoun 'i'."""
        assert classify_style("haha what do you think?").person_perspective == "second"

    def test_first_person_wins_ties(self):
        assert classify_style("I love you").person_perspective == "first"

    def test_chinese_pronouns(self):
        """CJK pronouns match as substrings."""
        assert classify_style("我觉得你会喜欢我的推荐").person_perspective == "first"


class TestScores:
    """Tests for formality, complexity and authenticity."""

    def test_formality_rewards_formal_words(self):
        style = classify_style("The results are clear. Therefore we proceed.")
        assert style.formality == pytest.approx(0.5 + 1 / 7)

    def test_formality_is_clamped(self):
        """A single casual word drives formality to zero."""
        assert classify_style("lol").formality == 0.0

    def test_complexity(self):
        """Short plain words give low complexity."""
        assert classify_style("abc").complexity == pytest.approx(0.18)

    def test_authenticity(self):
        """Personal phrases add and marketing phrases subtract."""
        style = classify_style("I think this is guaranteed and absolutely 100% true")
        assert style.authenticity == pytest.approx(0.55)
