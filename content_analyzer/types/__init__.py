"""
Type definitions for the content analyzer.
"""

from .analysis import (
    EMOTIONS,
    AnalysisResult,
    Composition,
    ContentStructure,
    ImageAnalysis,
    ImageInfo,
    ImageQuality,
    ImageStyle,
    Keyword,
    KeywordCategory,
    OverallScore,
    Priority,
    ReadabilityMetrics,
    ScoreBreakdown,
    ScoreLevel,
    SentimentAnalysis,
    SentimentLabel,
    Suggestion,
    SuggestionType,
    TextAnalysis,
    TitleAnalysis,
    Trend,
    VisualElements,
    WritingStyle,
)
from .content import Content, Engagement, Image

__all__ = [
    "EMOTIONS",
    "AnalysisResult",
    "Composition",
    "Content",
    "ContentStructure",
    "Engagement",
    "Image",
    "ImageAnalysis",
    "ImageInfo",
    "ImageQuality",
    "ImageStyle",
    "Keyword",
    "KeywordCategory",
    "OverallScore",
    "Priority",
    "ReadabilityMetrics",
    "ScoreBreakdown",
    "ScoreLevel",
    "SentimentAnalysis",
    "SentimentLabel",
    "Suggestion",
    "SuggestionType",
    "TextAnalysis",
    "TitleAnalysis",
    "Trend",
    "VisualElements",
    "WritingStyle",
]
