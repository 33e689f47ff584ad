"""
Type definitions for content analysis results.

This module defines the records produced by the scoring engine: text
features, sentiment, keywords, readability, image metrics, the composite
score and improvement suggestions. Every record is frozen; an
AnalysisResult is assembled once per Content and never mutated.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


EMOTIONS = ("joy", "sadness", "anger", "fear", "surprise")


class ScoreLevel(str, Enum):
    """Score classification levels."""

    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"


class Priority(str, Enum):
    """Suggestion priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SuggestionType(str, Enum):
    """Dimension a suggestion addresses."""

    TITLE = "title"
    STRUCTURE = "structure"
    ENGAGEMENT = "engagement"
    READABILITY = "readability"
    VISUAL = "visual"


class SentimentLabel(str, Enum):
    """Overall sentiment polarity."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Trend(str, Enum):
    """Keyword popularity trend."""

    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"


class KeywordCategory(str, Enum):
    """Coarse keyword category."""

    TOPIC = "topic"
    EMOTION = "emotion"
    ACTION = "action"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Text analysis
# =============================================================================


class TitleAnalysis(_Frozen):
    """Title feature analysis."""

    length: int = Field(..., ge=0, description="Title length in code points")
    has_numbers: bool = Field(default=False, description="Title contains a digit")
    has_emoji: bool = Field(default=False, description="Title contains an emoji")
    has_questions: bool = Field(default=False, description="Title contains a question mark")
    emotional_words: List[str] = Field(default_factory=list, description="Matched emotional words")
    power_words: List[str] = Field(default_factory=list, description="Matched power words")
    clickbait_score: float = Field(..., ge=0, le=1, description="Clickbait propensity")
    clarity_score: float = Field(..., ge=0, le=1, description="Title clarity")


class ContentStructure(_Frozen):
    """Structural markers of a post body."""

    has_intro: bool = Field(default=False, description="Opens with an introduction")
    has_conclusion: bool = Field(default=False, description="Closes with a conclusion")
    has_bullet_points: bool = Field(default=False, description="Contains list items")
    section_count: int = Field(default=1, ge=1, description="Number of sections")
    structure: str = Field(default="linear", description="list, qa, story or linear")


class WritingStyle(_Frozen):
    """Writing style classification."""

    tone: str = Field(..., description="enthusiastic, formal or casual")
    formality: float = Field(..., ge=0, le=1, description="Formality level")
    complexity: float = Field(..., ge=0, le=1, description="Lexical complexity")
    person_perspective: str = Field(..., description="first, second or third")
    authenticity: float = Field(..., ge=0, le=1, description="Authenticity signal")


class TextAnalysis(_Frozen):
    """Aggregate of text, title, structure and style features."""

    word_count: int = Field(..., ge=0, description="Whitespace-delimited word count")
    char_count: int = Field(..., ge=0, description="Character count in code points")
    paragraph_count: int = Field(..., ge=0, description="Number of paragraphs")
    sentence_count: int = Field(..., ge=0, description="Number of sentences")
    title: TitleAnalysis = Field(..., description="Title analysis")
    structure: ContentStructure = Field(..., description="Structure analysis")
    style: WritingStyle = Field(..., description="Writing style analysis")
    hashtags: List[str] = Field(default_factory=list, description="Extracted hashtags")
    mentions: List[str] = Field(default_factory=list, description="Extracted mentions")
    call_to_actions: List[str] = Field(default_factory=list, description="Matched CTA phrases")


# =============================================================================
# Sentiment, keywords, readability
# =============================================================================


class SentimentAnalysis(_Frozen):
    """Sentiment polarity and emotion scores."""

    overall: SentimentLabel = Field(..., description="Overall polarity")
    score: float = Field(..., ge=-1, le=1, description="Polarity score")
    emotions: Dict[str, float] = Field(
        default_factory=dict,
        validate_default=True,
        description="Per-emotion intensity (joy, sadness, anger, fear, surprise)",
    )
    confidence: float = Field(..., ge=0, le=1, description="Confidence of the analysis")

    @field_validator("emotions")
    @classmethod
    def validate_emotions(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Fill in every known emotion and bound each to [0, 1]."""
        emotions = {}
        for name in EMOTIONS:
            value = float(v.get(name, 0.0))
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"emotion '{name}' must be within [0, 1], got {value}")
            emotions[name] = value
        return emotions


class Keyword(_Frozen):
    """A frequently used word."""

    word: str = Field(..., min_length=1, description="Normalized keyword")
    frequency: int = Field(..., ge=2, description="Occurrences in the text")
    relevance: float = Field(..., ge=0, le=1, description="frequency / total word count")
    trend: Trend = Field(default=Trend.STABLE, description="Popularity trend")
    category: KeywordCategory = Field(default=KeywordCategory.TOPIC, description="Keyword category")


class ReadabilityMetrics(_Frozen):
    """Readability analysis results."""

    flesch_score: float = Field(..., description="Simplified Flesch reading ease")
    avg_sentence_length: float = Field(..., ge=0, description="Average words per sentence")
    avg_word_length: float = Field(..., ge=0, description="Average characters per word")
    complex_word_ratio: float = Field(..., ge=0, le=1, description="Share of words longer than 6 characters")
    reading_time: int = Field(..., ge=30, description="Estimated reading time in seconds")
    grade: str = Field(..., description="easy, medium or hard")


# =============================================================================
# Images
# =============================================================================


class ImageInfo(_Frozen):
    """Basic image file information."""

    width: int = Field(..., ge=0, description="Width in pixels")
    height: int = Field(..., ge=0, description="Height in pixels")
    size: int = Field(..., ge=0, description="File size in bytes")
    format: str = Field(..., description="Image format")


class VisualElements(_Frozen):
    """Colour and tone statistics."""

    dominant_colors: List[str] = Field(default_factory=list, description="Hex colours, most frequent first")
    brightness: float = Field(..., ge=0, le=1, description="Mean luminance")
    contrast: float = Field(..., ge=0, le=1, description="Luminance spread")
    saturation: float = Field(..., ge=0, le=1, description="Mean saturation")


class Composition(_Frozen):
    """Composition heuristics."""

    rule_of_thirds: bool = Field(default=False, description="Aspect ratio suits rule-of-thirds framing")
    symmetry: bool = Field(default=False, description="Near-square, symmetric framing")
    balance_score: float = Field(..., ge=0, le=1, description="Left/right luminance balance")


class ImageQuality(_Frozen):
    """Technical quality metrics."""

    resolution: str = Field(..., description="WIDTHxHEIGHT")
    resolution_score: float = Field(..., ge=0, le=1, description="Score from pixel count")
    sharpness: float = Field(..., ge=0, le=1, description="Edge strength")
    noise_level: float = Field(..., ge=0, le=1, description="Estimated noise")
    exposure_score: float = Field(..., ge=0, le=1, description="Closeness to mid exposure")
    overall_quality: float = Field(..., ge=0, le=1, description="Weighted quality")


class ImageStyle(_Frozen):
    """Style classification."""

    style: str = Field(..., description="landscape, portrait or modern")
    mood: str = Field(..., description="Overall mood")


class ImageAnalysis(_Frozen):
    """Per-image analysis with a scalar score."""

    image_path: str = Field(..., description="Analyzed image path")
    info: ImageInfo = Field(..., description="File information")
    visual: VisualElements = Field(..., description="Visual elements")
    composition: Composition = Field(..., description="Composition analysis")
    quality: ImageQuality = Field(..., description="Quality analysis")
    style: ImageStyle = Field(..., description="Style analysis")
    score: float = Field(..., ge=0, le=100, description="Composite image score")


# =============================================================================
# Scores and suggestions
# =============================================================================


class ScoreBreakdown(_Frozen):
    """The six weighted sub-scores."""

    content_quality: float = Field(..., ge=0, le=100, description="Length, structure and CTA presence")
    engagement: float = Field(..., ge=0, le=100, description="Interaction drivers")
    visual: float = Field(..., ge=0, le=100, description="Image quality")
    title: float = Field(..., ge=0, le=100, description="Title attractiveness")
    readability: float = Field(..., ge=0, le=100, description="Ease of reading")
    trend_relevance: float = Field(..., ge=0, le=100, description="Keyword trend fit")


class OverallScore(_Frozen):
    """Weighted total score with explanation."""

    total: float = Field(..., ge=0, le=100, description="Weighted total score")
    breakdown: ScoreBreakdown = Field(..., description="Sub-scores")
    level: ScoreLevel = Field(..., description="Score classification")
    strongest: str = Field(..., description="Highest scoring dimension")
    weakest: str = Field(..., description="Lowest scoring dimension")
    reasoning: str = Field(..., description="One-line explanation")


class Suggestion(_Frozen):
    """A structured improvement suggestion."""

    type: SuggestionType = Field(..., description="Dimension addressed")
    priority: Priority = Field(..., description="Suggestion priority")
    current: str = Field(..., description="Current state")
    suggestion: str = Field(..., description="Recommended change")
    reasoning: str = Field(..., description="Why the change is recommended")
    examples: List[str] = Field(default_factory=list, description="Example phrasings")
    impact: str = Field(..., description="Expected impact")


class AnalysisResult(_Frozen):
    """Complete analysis of one Content."""

    content_id: str = Field(..., description="Analyzed content identifier")
    overall_score: OverallScore = Field(..., description="Composite score")
    text_analysis: TextAnalysis = Field(..., description="Text features")
    image_analysis: List[ImageAnalysis] = Field(default_factory=list, description="Per-image analysis")
    suggestions: List[Suggestion] = Field(default_factory=list, description="Improvement suggestions")
    keywords: List[Keyword] = Field(default_factory=list, description="Extracted keywords")
    sentiment: SentimentAnalysis = Field(..., description="Sentiment analysis")
    readability: ReadabilityMetrics = Field(..., description="Readability metrics")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Analysis timestamp",
    )
    title: Optional[str] = Field(default=None, description="Analyzed content title")
