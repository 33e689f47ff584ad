"""
Composite scoring.

Combines text, title, readability, keyword and image analysis into six
sub-scores, a weighted total and a qualitative level. Dimensions are
always scanned in DIMENSIONS order so ties resolve the same way on every
run: the first dimension reaching the maximum (or minimum) wins.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ..config import ScoreWeights
from ..types.analysis import (
    ImageAnalysis,
    Keyword,
    OverallScore,
    ReadabilityMetrics,
    ScoreBreakdown,
    ScoreLevel,
    TextAnalysis,
    TitleAnalysis,
    Trend,
)
from .text_utils import clamp

DIMENSIONS: Tuple[str, ...] = (
    "content_quality",
    "engagement",
    "visual",
    "title",
    "readability",
    "trend_relevance",
)

DIMENSION_LABELS: Dict[str, str] = {
    "content_quality": "content quality",
    "engagement": "engagement",
    "visual": "visuals",
    "title": "title",
    "readability": "readability",
    "trend_relevance": "trend relevance",
}

NO_IMAGE_SCORE = 30.0


def _bound(score: float) -> float:
    return clamp(score, 0.0, 100.0)


def content_quality_score(text: TextAnalysis) -> float:
    """Base 60; rewards 100-800 words, an intro plus conclusion, and a CTA."""
    score = 60.0
    if 100 <= text.word_count <= 800:
        score += 20
    if text.structure.has_intro and text.structure.has_conclusion:
        score += 15
    if text.call_to_actions:
        score += 5
    return _bound(score)


def engagement_score(text: TextAnalysis) -> float:
    """Base 50; rewards CTAs, title questions, emotional titles and addressing the reader."""
    score = 50.0
    if text.call_to_actions:
        score += 20
    if text.title.has_questions:
        score += 15
    if text.title.emotional_words:
        score += 10
    if text.style.person_perspective == "second":
        score += 5
    return _bound(score)


def visual_score(images: Sequence[ImageAnalysis]) -> float:
    """Mean image score, or NO_IMAGE_SCORE without images."""
    if not images:
        return NO_IMAGE_SCORE
    return _bound(sum(image.score for image in images) / len(images))


def title_score(title: TitleAnalysis) -> float:
    """Base 50; rewards 10-30 characters, numbers, power words and clarity."""
    score = 50.0
    if 10 <= title.length <= 30:
        score += 20
    if title.has_numbers:
        score += 10
    if title.power_words:
        score += 15
    if title.clarity_score > 0.8:
        score += 5
    return _bound(score)


def readability_score(metrics: ReadabilityMetrics) -> float:
    """Base 50; tiered Flesch bonus plus sentence length and plain-word bonuses."""
    score = 50.0
    if metrics.flesch_score > 70:
        score += 30
    elif metrics.flesch_score > 50:
        score += 20
    elif metrics.flesch_score > 30:
        score += 10
    if 10 <= metrics.avg_sentence_length <= 20:
        score += 10
    if metrics.complex_word_ratio < 0.2:
        score += 10
    return _bound(score)


def trend_relevance_score(keywords: Sequence[Keyword]) -> float:
    """Base 60; +5 per rising keyword, +2 per keyword with relevance above 0.05."""
    score = 60.0
    for keyword in keywords:
        if keyword.trend == Trend.RISING:
            score += 5
        if keyword.relevance > 0.05:
            score += 2
    return _bound(score)


def get_level(total: float) -> ScoreLevel:
    """Convert a total score to a level; thresholds are inclusive."""
    if total >= 85:
        return ScoreLevel.EXCELLENT
    elif total >= 70:
        return ScoreLevel.GOOD
    elif total >= 50:
        return ScoreLevel.AVERAGE
    else:
        return ScoreLevel.POOR


def strongest_and_weakest(breakdown: ScoreBreakdown) -> Tuple[str, str]:
    """Return the first highest and first lowest dimension names."""
    strongest = weakest = DIMENSIONS[0]
    for name in DIMENSIONS[1:]:
        value = getattr(breakdown, name)
        if value > getattr(breakdown, strongest):
            strongest = name
        if value < getattr(breakdown, weakest):
            weakest = name
    return strongest, weakest


class CompositeScorer:
    """
    Weighted composite scorer.

    Weights come from configuration and are validated there; the scorer
    applies them as given.
    """

    def __init__(self, weights: Optional[ScoreWeights] = None):
        self.weights = weights or ScoreWeights()

    def breakdown(
        self,
        text: TextAnalysis,
        images: Sequence[ImageAnalysis],
        readability: ReadabilityMetrics,
        keywords: Sequence[Keyword],
    ) -> ScoreBreakdown:
        """Compute the six sub-scores."""
        return ScoreBreakdown(
            content_quality=content_quality_score(text),
            engagement=engagement_score(text),
            visual=visual_score(images),
            title=title_score(text.title),
            readability=readability_score(readability),
            trend_relevance=trend_relevance_score(keywords),
        )

    def weighted_total(self, breakdown: ScoreBreakdown) -> float:
        """Weighted sum of the sub-scores, bounded to [0, 100]."""
        total = sum(
            getattr(breakdown, name) * getattr(self.weights, name)
            for name in DIMENSIONS
        )
        return _bound(total)

    def score(
        self,
        text: TextAnalysis,
        images: Sequence[ImageAnalysis],
        readability: ReadabilityMetrics,
        keywords: Sequence[Keyword],
    ) -> OverallScore:
        """
        Calculate the overall score.

        Args:
            text: Text analysis of the content.
            images: Successfully analyzed images.
            readability: Readability metrics.
            keywords: Extracted keywords.

        Returns:
            OverallScore with total, breakdown, level and reasoning.
        """
        breakdown = self.breakdown(text, images, readability, keywords)
        total = self.weighted_total(breakdown)
        strongest, weakest = strongest_and_weakest(breakdown)

        reasoning = (
            f"Overall score {total:.1f}; strongest in {DIMENSION_LABELS[strongest]} "
            f"({getattr(breakdown, strongest):.0f}), weakest in {DIMENSION_LABELS[weakest]} "
            f"({getattr(breakdown, weakest):.0f})."
        )

        return OverallScore(
            total=total,
            breakdown=breakdown,
            level=get_level(total),
            strongest=strongest,
            weakest=weakest,
            reasoning=reasoning,
        )


def dimension_scores(breakdown: ScoreBreakdown) -> List[Tuple[str, float]]:
    """List (dimension, score) pairs in DIMENSIONS order."""
    return [(name, getattr(breakdown, name)) for name in DIMENSIONS]
