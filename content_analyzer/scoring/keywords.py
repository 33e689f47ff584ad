"""
Frequency-based keyword extraction.
"""

import re
from typing import Dict, FrozenSet, List, Tuple

from ..types.analysis import Keyword, KeywordCategory, Trend
from .text_utils import split_words

STOPWORDS: FrozenSet[str] = frozenset({
    "的", "是", "在", "我", "你", "他", "了", "和", "就", "都", "而", "及",
    "与", "或", "但", "为", "也", "不", "可以", "这个", "那个", "什么", "怎么",
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
    "of", "with", "by", "is", "are", "was", "were", "be", "it", "this", "that",
})

EMOTION_MARKERS: Tuple[str, ...] = (
    "好", "棒", "差", "爱", "恨", "喜欢", "讨厌",
    "love", "hate", "great", "awful", "happy", "sad",
)

ACTION_MARKERS: Tuple[str, ...] = (
    "做", "买", "用", "看", "听", "学", "教",
    "buy", "learn", "teach", "watch", "make", "try",
)

MIN_FREQUENCY = 2

_NON_WORD = re.compile(r"[\W_]+")


def categorize(word: str) -> KeywordCategory:
    """Assign a coarse category by substring match."""
    if any(marker in word for marker in EMOTION_MARKERS):
        return KeywordCategory.EMOTION
    if any(marker in word for marker in ACTION_MARKERS):
        return KeywordCategory.ACTION
    return KeywordCategory.TOPIC


def extract_keywords(text: str) -> List[Keyword]:
    """
    Extract words used at least twice.

    Tokens are lower-cased, stripped of non-letter/non-digit characters and
    filtered for stopwords and single characters. Relevance is relative to
    the token count before filtering.

    Args:
        text: Post text.

    Returns:
        Keywords in order of first occurrence.
    """
    tokens = split_words(text.lower())
    total = len(tokens)

    frequencies: Dict[str, int] = {}
    for token in tokens:
        word = _NON_WORD.sub("", token)
        if len(word) <= 1 or word in STOPWORDS:
            continue
        frequencies[word] = frequencies.get(word, 0) + 1

    return [
        Keyword(
            word=word,
            frequency=count,
            relevance=count / total,
            trend=Trend.STABLE,
            category=categorize(word),
        )
        for word, count in frequencies.items()
        if count >= MIN_FREQUENCY
    ]
