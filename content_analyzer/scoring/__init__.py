"""
Content scoring module.

This module provides the scoring engine: text, title and style features,
keywords, readability, the weighted composite score and suggestions.
"""

from .composite import DIMENSIONS, CompositeScorer, get_level, strongest_and_weakest
from .keywords import extract_keywords
from .readability import analyze_readability
from .style import classify_style
from .suggestions import generate_suggestions
from .text_features import analyze_structure, analyze_text, extract_call_to_actions
from .title_features import analyze_title

__all__ = [
    "DIMENSIONS",
    "CompositeScorer",
    "analyze_readability",
    "analyze_structure",
    "analyze_text",
    "analyze_title",
    "classify_style",
    "extract_call_to_actions",
    "extract_keywords",
    "generate_suggestions",
    "get_level",
    "strongest_and_weakest",
]
