"""
Title feature extraction.

Scores a title's length, numbers, emoji, questions and vocabulary, and
derives the clickbait and clarity heuristics.
"""

import re
from typing import Tuple

from ..types.analysis import TitleAnalysis
from .text_utils import clamp, contains_any, find_terms

EMOTIONAL_WORDS: Tuple[str, ...] = (
    "惊喜", "震撼", "感动", "激动", "兴奋", "满足", "幸福", "快乐",
    "担心", "焦虑", "害怕", "紧张", "愤怒", "失望", "沮丧",
    "amazing", "wonderful", "fantastic", "incredible", "awesome",
    "heartbreaking", "thrilling", "terrifying",
)

POWER_WORDS: Tuple[str, ...] = (
    "独家", "限时", "免费", "秘密", "揭秘", "内幕", "独特", "创新",
    "突破", "革命", "颠覆", "神器", "必备", "推荐", "精选",
    "exclusive", "limited", "secret", "unique", "breakthrough",
    "free", "proven", "ultimate", "essential",
)

HIGH_INTENSITY_PHRASES: Tuple[str, ...] = (
    "你不知道", "震惊",
    "you won't believe", "shocking",
)

EMOJI_PATTERN = re.compile(
    "[\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"   # symbols and pictographs
    "\U0001F680-\U0001F6FF"   # transport and map
    "\u2600-\u26FF"           # miscellaneous symbols
    "\u2700-\u27BF]"          # dingbats
)

NUMBER_PATTERN = re.compile(r"\d")


def has_question(text: str) -> bool:
    """Check for an ASCII or full-width question mark."""
    return "?" in text or "？" in text


def _clickbait_score(has_numbers: bool, has_questions: bool, has_power: bool, title: str) -> float:
    score = 0.0
    if has_numbers:
        score += 0.2
    if has_questions:
        score += 0.15
    if has_power:
        score += 0.3
    if contains_any(title, HIGH_INTENSITY_PHRASES):
        score += 0.4
    return clamp(score)


def _clarity_score(length: int, has_numbers: bool, has_power: bool) -> float:
    score = 1.0
    if length > 50:
        score -= 0.2
    if length < 5:
        score -= 0.3
    if not has_numbers and not has_power:
        score -= 0.1
    return clamp(score)


def analyze_title(title: str) -> TitleAnalysis:
    """
    Extract title features.

    Args:
        title: Title to analyze (may be empty).

    Returns:
        TitleAnalysis with length in code points, matched vocabulary and
        clickbait/clarity scores in [0, 1].
    """
    length = len(title)
    has_numbers = bool(NUMBER_PATTERN.search(title))
    has_questions = has_question(title)
    emotional_words = find_terms(title, EMOTIONAL_WORDS)
    power_words = find_terms(title, POWER_WORDS)

    return TitleAnalysis(
        length=length,
        has_numbers=has_numbers,
        has_emoji=bool(EMOJI_PATTERN.search(title)),
        has_questions=has_questions,
        emotional_words=emotional_words,
        power_words=power_words,
        clickbait_score=_clickbait_score(has_numbers, has_questions, bool(power_words), title),
        clarity_score=_clarity_score(length, has_numbers, bool(power_words)),
    )
