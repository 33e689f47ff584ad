"""
Readability scoring from sentence and word length.
"""

import math

from ..types.analysis import ReadabilityMetrics
from .text_utils import split_sentences, split_words, word_length_stats

WORDS_PER_MINUTE = 250
MIN_READING_TIME = 30


def _grade(score: float) -> str:
    if score > 80:
        return "easy"
    if score < 50:
        return "hard"
    return "medium"


def estimate_reading_time(word_count: int) -> int:
    """Reading time in seconds, never below MIN_READING_TIME."""
    seconds = math.floor(word_count / WORDS_PER_MINUTE * 60 + 0.5)
    return max(MIN_READING_TIME, seconds)


def analyze_readability(text: str) -> ReadabilityMetrics:
    """
    Score text readability.

    Uses a simplified Flesch reading ease that substitutes average word
    length for syllables per word:
        206.835 - 1.015 * (words / sentences) - 84.6 * (avg word length / 4.7)

    Args:
        text: Content to analyze.

    Returns:
        ReadabilityMetrics with the score, averages and reading time.
    """
    words = split_words(text)
    sentences = split_sentences(text)

    avg_sentence_length = len(words) / max(len(sentences), 1)
    avg_word_length, complex_ratio = word_length_stats(words)

    flesch = 206.835 - 1.015 * avg_sentence_length - 84.6 * (avg_word_length / 4.7)

    return ReadabilityMetrics(
        flesch_score=flesch,
        avg_sentence_length=avg_sentence_length,
        avg_word_length=avg_word_length,
        complex_word_ratio=complex_ratio,
        reading_time=estimate_reading_time(len(words)),
        grade=_grade(flesch),
    )
