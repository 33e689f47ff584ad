"""
Content analyzer: scoring and improvement suggestions for social-media posts.
"""

from .analyzer import ContentAnalyzer
from .config import Settings, get_settings, load_settings
from .exceptions import (
    ConfigurationError,
    ContentAnalyzerError,
    ContentParseError,
    ImageAnalysisError,
    ImageValidationError,
    ProviderError,
)
from .types import AnalysisResult, Content

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "ConfigurationError",
    "Content",
    "ContentAnalyzer",
    "ContentAnalyzerError",
    "ContentParseError",
    "ImageAnalysisError",
    "ImageValidationError",
    "ProviderError",
    "Settings",
    "get_settings",
    "load_settings",
]
