"""
Local lexicon provider.

Deterministic sentiment, advice and topics used when no remote provider is
configured and as the fallback when a remote call fails.
"""

from typing import Dict, List, Tuple

from ..scoring.composite import DIMENSION_LABELS, dimension_scores
from ..scoring.text_utils import count_term, contains_any
from ..types.analysis import EMOTIONS, AnalysisResult, SentimentAnalysis, SentimentLabel
from .base import MAX_TOPICS, SentimentProvider

POSITIVE_WORDS: Tuple[str, ...] = (
    "好", "棒", "优秀", "喜欢", "爱", "开心", "满意", "推荐",
    "amazing", "great", "excellent", "wonderful", "fantastic", "love", "happy",
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    "差", "坏", "糟糕", "讨厌", "恨", "失望", "不满", "后悔",
    "terrible", "awful", "horrible", "disappointing", "hate", "sad",
)

EMOTION_CUES: Dict[str, Tuple[str, ...]] = {
    "joy": ("开心", "快乐", "高兴", "幸福", "happy", "joy", "glad"),
    "sadness": ("难过", "伤心", "悲伤", "sad", "upset"),
    "anger": ("生气", "愤怒", "angry", "furious"),
    "fear": ("害怕", "担心", "恐惧", "afraid", "scared", "worried"),
    "surprise": ("惊讶", "惊喜", "没想到", "surprised", "wow"),
}

TOPIC_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("美食", ("美食", "餐厅", "好吃", "菜谱", "food", "recipe", "restaurant")),
    ("旅行", ("旅行", "旅游", "景点", "travel", "trip", "vacation")),
    ("科技", ("科技", "技术", "手机", "电脑", "人工智能", "tech", "software", "ai")),
    ("时尚", ("时尚", "穿搭", "服装", "fashion", "outfit")),
    ("生活", ("生活", "日常", "life", "daily")),
    ("健康", ("健康", "运动", "健身", "health", "fitness", "workout")),
    ("教育", ("教育", "学习", "课程", "education", "learning", "course")),
    ("娱乐", ("娱乐", "电影", "音乐", "movie", "music", "game")),
)

DEFAULT_TOPIC = "其他"

POLARITY_SCORE = 0.6
EMOTION_SCORE = 0.7
LEXICON_CONFIDENCE = 0.6


class LexiconProvider(SentimentProvider):
    """Word-list based provider with no external calls."""

    name = "local"

    def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        positive = sum(count_term(text, w) for w in POSITIVE_WORDS)
        negative = sum(count_term(text, w) for w in NEGATIVE_WORDS)

        if positive > negative:
            overall, score = SentimentLabel.POSITIVE, POLARITY_SCORE
        elif negative > positive:
            overall, score = SentimentLabel.NEGATIVE, -POLARITY_SCORE
        else:
            overall, score = SentimentLabel.NEUTRAL, 0.0

        emotions = {
            emotion: EMOTION_SCORE if contains_any(text, EMOTION_CUES[emotion]) else 0.0
            for emotion in EMOTIONS
        }

        return SentimentAnalysis(
            overall=overall,
            score=score,
            emotions=emotions,
            confidence=LEXICON_CONFIDENCE,
        )

    def generate_advice(self, result: AnalysisResult) -> str:
        score = result.overall_score
        lines = [
            "## Content Improvement Advice",
            "",
            f"**Overall score:** {score.total:.1f} ({score.level.value})",
            "",
            "### Score Breakdown",
        ]
        for name, value in dimension_scores(score.breakdown):
            lines.append(f"- {DIMENSION_LABELS[name].capitalize()}: {value:.0f}")

        lines.append("")
        if result.suggestions:
            lines.append("### Recommended Changes")
            for i, suggestion in enumerate(result.suggestions, 1):
                lines.append(
                    f"{i}. **{suggestion.type.value.capitalize()}** ({suggestion.priority.value}): "
                    f"{suggestion.suggestion}. Expected impact: {suggestion.impact}."
                )
        else:
            lines.append("No changes needed; the post scores well on every checked dimension.")

        return "\n".join(lines)

    def extract_topics(self, text: str) -> List[str]:
        topics = [topic for topic, keywords in TOPIC_KEYWORDS if contains_any(text, keywords)]
        return topics[:MAX_TOPICS] or [DEFAULT_TOPIC]
