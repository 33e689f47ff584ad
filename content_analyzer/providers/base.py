"""
Sentiment provider interface.

A provider answers three questions about a post: its sentiment, advice
derived from an analysis result, and its topics. Implementations must
never raise from these methods; remote implementations fall back to the
local lexicon on any failure.
"""

from abc import ABC, abstractmethod
from typing import List

from ..types.analysis import AnalysisResult, SentimentAnalysis

MAX_TOPICS = 5


class SentimentProvider(ABC):
    """Common capability interface for sentiment, advice and topics."""

    name: str = "base"

    @property
    def is_remote(self) -> bool:
        """Whether calls leave the process (and should be rate limited)."""
        return False

    @abstractmethod
    def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        """Return polarity, per-emotion scores and confidence for text."""

    @abstractmethod
    def generate_advice(self, result: AnalysisResult) -> str:
        """Return improvement advice for an analysis result."""

    @abstractmethod
    def extract_topics(self, text: str) -> List[str]:
        """Return up to MAX_TOPICS topics for text."""
