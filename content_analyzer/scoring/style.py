"""
Writing style classification from word-level heuristics.
"""

import re
from typing import Tuple

from ..types.analysis import WritingStyle
from .text_utils import clamp, count_term, find_terms, split_words, word_length_stats
from .title_features import EMOTIONAL_WORDS, has_question

FORMAL_WORDS: Tuple[str, ...] = (
    "因此", "然而", "此外", "综上所述", "鉴于", "据此",
    "therefore", "however", "furthermore", "moreover", "consequently", "thus",
)

CASUAL_WORDS: Tuple[str, ...] = (
    "哈哈", "嗯", "呀", "哦", "额", "咋样",
    "haha", "lol", "gonna", "wanna", "yeah", "omg",
)

FIRST_PERSON: Tuple[str, ...] = ("我", "i", "me", "my", "mine", "myself")
SECOND_PERSON: Tuple[str, ...] = ("你", "您", "you", "your", "yours", "yourself")

PERSONAL_PHRASES: Tuple[str, ...] = (
    "我觉得", "我认为", "我的经验", "亲身体验", "我发现",
    "i think", "i believe", "in my experience", "i found", "personally",
)

MARKETING_PHRASES: Tuple[str, ...] = (
    "绝对", "百分百", "保证", "必定", "一定能",
    "guaranteed", "100%", "absolutely", "best ever",
)

# Full stops only; text ending in "!" or "！" stays casual
SENTENCE_FINAL = re.compile(r"[。.](?=\s|$)")


def _tone(text: str) -> str:
    if len(find_terms(text, EMOTIONAL_WORDS)) > 3:
        return "enthusiastic"
    if SENTENCE_FINAL.search(text) and not has_question(text):
        return "formal"
    return "casual"


def _perspective(text: str) -> str:
    # First person wins ties; no pronouns at all reads as third person.
    first = sum(count_term(text, t) for t in FIRST_PERSON)
    second = sum(count_term(text, t) for t in SECOND_PERSON)
    if first == 0 and second == 0:
        return "third"
    if first >= second:
        return "first"
    return "second"


def _formality(text: str, word_count: int) -> float:
    if word_count == 0:
        return 0.5
    formal = sum(count_term(text, w) for w in FORMAL_WORDS)
    casual = sum(count_term(text, w) for w in CASUAL_WORDS)
    return clamp(0.5 + (formal - casual) / word_count)


def _authenticity(text: str) -> float:
    score = 0.8
    score += 0.05 * len(find_terms(text, PERSONAL_PHRASES))
    score -= 0.1 * len(find_terms(text, MARKETING_PHRASES))
    return clamp(score)


def classify_style(text: str) -> WritingStyle:
    """
    Classify tone, perspective, formality, complexity and authenticity.

    Args:
        text: Full post text.

    Returns:
        WritingStyle with every ratio bounded to [0, 1].
    """
    words = split_words(text)
    avg_length, complex_ratio = word_length_stats(words)
    complexity = clamp(0.6 * (avg_length / 10) + 0.4 * complex_ratio) if words else 0.0

    return WritingStyle(
        tone=_tone(text),
        formality=_formality(text, len(words)),
        complexity=complexity,
        person_perspective=_perspective(text),
        authenticity=_authenticity(text),
    )
