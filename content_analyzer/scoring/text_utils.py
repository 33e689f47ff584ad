"""
Text primitives shared by the scoring modules.

Vocabulary matching is case-insensitive. Terms written in ASCII letters
match on word boundaries; other terms (CJK and the like) match as
substrings, since those scripts do not separate words with spaces.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern, Tuple

COMPLEX_WORD_LENGTH = 6

_ASCII_TERM = re.compile(r"^[a-z0-9' ]+$")


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Bound a value to [low, high]."""
    return max(low, min(high, value))


def split_words(text: str) -> List[str]:
    """Split on runs of whitespace."""
    return text.split()


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence-ending punctuation, dropping empty segments."""
    return [s.strip() for s in re.split(r"[.!?]+", text) if s.strip()]


def word_length_stats(words: List[str]) -> Tuple[float, float]:
    """
    Compute average word length and the share of complex words.

    A complex word is longer than COMPLEX_WORD_LENGTH characters.

    Returns:
        (average length, complex word ratio); (0.0, 0.0) for no words.
    """
    if not words:
        return 0.0, 0.0
    total_length = sum(len(w) for w in words)
    complex_words = sum(1 for w in words if len(w) > COMPLEX_WORD_LENGTH)
    return total_length / len(words), complex_words / len(words)


@lru_cache(maxsize=512)
def _term_pattern(term: str) -> Pattern:
    if _ASCII_TERM.match(term):
        return re.compile(r"(?<![a-z0-9_])" + re.escape(term) + r"(?![a-z0-9_])")
    return re.compile(re.escape(term))


def count_term(text: str, term: str) -> int:
    """Count non-overlapping occurrences of a vocabulary term in text."""
    term = term.lower()
    if not term:
        return 0
    return len(_term_pattern(term).findall(text.lower()))


def find_terms(text: str, vocabulary: Iterable[str]) -> List[str]:
    """Return the vocabulary entries present in text, in vocabulary order."""
    lowered = text.lower()
    return [term for term in vocabulary if _term_pattern(term.lower()).search(lowered)]


def contains_any(text: str, vocabulary: Iterable[str]) -> bool:
    """Check whether any vocabulary entry occurs in text."""
    return bool(find_terms(text, vocabulary))
