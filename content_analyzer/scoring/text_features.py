"""
Text feature extraction for social-media posts.

This module provides:
- Word, character, sentence and paragraph counts
- Hashtag, mention and call-to-action extraction
- Structural markers (intro, conclusion, bullet lists, sections)

Every function is a pure function of its input and never fails; empty
text produces an all-zero analysis.
"""

import re
from typing import List, Pattern, Tuple

from ..types.analysis import ContentStructure, TextAnalysis
from .style import classify_style
from .text_utils import contains_any, split_sentences, split_words
from .title_features import analyze_title, has_question

# CTA phrases, matched against lower-cased text in this order
CTA_PATTERNS: List[str] = [
    r"点击.*链接",
    r"立即.*",
    r"马上.*",
    r"赶快.*",
    r"快来.*",
    r"关注我",
    r"点赞.*",
    r"评论.*",
    r"分享.*",
    r"收藏.*",
    r"了解更多",
    r"查看更多",
    r"阅读全文",
    r"click\s+(?:the\s+)?link",
    r"follow\s+me",
    r"read\s+more",
    r"learn\s+more",
    r"comment\s+below",
    r"leave\s+a\s+comment",
    r"share\s+(?:this|with)",
    r"like\s+and\s+subscribe",
    r"sign\s+up",
    r"don'?t\s+miss",
]

_CTA_REGEXES: List[Pattern] = [re.compile(p) for p in CTA_PATTERNS]

HASHTAG_PATTERN = re.compile(r"#\w+")
MENTION_PATTERN = re.compile(r"@\w+")
NUMBERED_ITEM = re.compile(r"^\d+\.")

INTRO_WORDS: Tuple[str, ...] = (
    "大家好", "hello", "今天", "最近", "分享", "介绍",
    "hi everyone", "today", "recently", "let me",
)

CONCLUSION_WORDS: Tuple[str, ...] = (
    "总结", "总之", "最后", "综上", "结论", "希望", "感谢",
    "in conclusion", "to sum up", "finally", "thanks", "thank you", "hope",
)

BULLET_PREFIXES = ("-", "*", "•")

EDGE_WINDOW = 100
SECTION_LINE_LIMIT = 50


def count_paragraphs(text: str) -> int:
    """Count blank-line separated paragraphs."""
    return len([p for p in re.split(r"\n\s*\n", text.strip()) if p.strip()])


def count_sections(text: str) -> int:
    """
    Count sections: 1 plus one per heading line.

    A heading line starts with '#' or is a short line written entirely in
    upper case.
    """
    sections = 1
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.startswith("#"):
            sections += 1
        elif len(line) < SECTION_LINE_LIMIT and line == line.upper() and line != line.lower():
            sections += 1
    return sections


def extract_hashtags(text: str) -> List[str]:
    """Extract #hashtags (Unicode-aware)."""
    return HASHTAG_PATTERN.findall(text)


def extract_mentions(text: str) -> List[str]:
    """Extract @mentions (Unicode-aware)."""
    return MENTION_PATTERN.findall(text)


def extract_call_to_actions(text: str) -> List[str]:
    """
    Find call-to-action phrases.

    Matches from every pattern are concatenated in pattern order.
    Overlapping patterns may report the same phrase more than once.
    """
    lowered = text.lower()
    matches: List[str] = []
    for regex in _CTA_REGEXES:
        matches.extend(regex.findall(lowered))
    return matches


def has_bullet_points(text: str) -> bool:
    """Check for list item lines."""
    for line in text.splitlines():
        line = line.strip()
        if line.startswith(BULLET_PREFIXES) or NUMBERED_ITEM.match(line):
            return True
    return False


def analyze_structure(text: str) -> ContentStructure:
    """Detect intro, conclusion, bullets and sections."""
    has_intro = contains_any(text[:EDGE_WINDOW], INTRO_WORDS)
    has_conclusion = contains_any(text[-EDGE_WINDOW:], CONCLUSION_WORDS) if text else False
    bullets = has_bullet_points(text)

    if bullets:
        structure = "list"
    elif has_question(text):
        structure = "qa"
    elif has_intro and has_conclusion:
        structure = "story"
    else:
        structure = "linear"

    return ContentStructure(
        has_intro=has_intro,
        has_conclusion=has_conclusion,
        has_bullet_points=bullets,
        section_count=count_sections(text),
        structure=structure,
    )


def analyze_text(text: str, title: str = "") -> TextAnalysis:
    """
    Extract all text features of a post.

    Args:
        text: Post body.
        title: Post title.

    Returns:
        TextAnalysis with counts, title, structure and style analysis.
    """
    return TextAnalysis(
        word_count=len(split_words(text)),
        char_count=len(text),
        paragraph_count=count_paragraphs(text),
        sentence_count=len(split_sentences(text)),
        title=analyze_title(title),
        structure=analyze_structure(text),
        style=classify_style(text),
        hashtags=extract_hashtags(text),
        mentions=extract_mentions(text),
        call_to_actions=extract_call_to_actions(text),
    )
