"""
Suggestion generation.

Each check below is evaluated independently, in a fixed order, and emits
at most one structured Suggestion. Rendering suggestions as prose is left
to the report layer and the AI providers.
"""

from typing import List, Optional

from ..types.analysis import AnalysisResult, Priority, Suggestion, SuggestionType

TITLE_TARGET = 70
READABILITY_TARGET = 50

ENGAGEMENT_EXAMPLES: List[str] = [
    "你遇到过类似情况吗？",
    "快来评论区分享你的经验",
    "觉得有用请点个赞",
]


def _title_suggestion(result: AnalysisResult) -> Optional[Suggestion]:
    score = result.overall_score.breakdown.title
    if score >= TITLE_TARGET:
        return None
    return Suggestion(
        type=SuggestionType.TITLE,
        priority=Priority.HIGH,
        current=f"Title score is only {score:.0f}",
        suggestion="Use a title of 10-30 characters with a concrete number or a strong hook word",
        reasoning=(
            f"A title scoring {score:.0f} is below the {TITLE_TARGET} point target; "
            "specific, quantified titles stand out in a feed"
        ),
        impact="15-25% higher click-through rate",
    )


def _structure_suggestion(result: AnalysisResult) -> Optional[Suggestion]:
    if result.text_analysis.structure.has_intro:
        return None
    quality = result.overall_score.breakdown.content_quality
    return Suggestion(
        type=SuggestionType.STRUCTURE,
        priority=Priority.MEDIUM,
        current="No opening introduction detected",
        suggestion="Open with a short hook that tells readers what the post covers",
        reasoning=f"Content quality is {quality:.0f}; a clear opening keeps readers past the first lines",
        impact="About 20% higher completion rate",
    )


def _engagement_suggestion(result: AnalysisResult) -> Optional[Suggestion]:
    if result.text_analysis.call_to_actions:
        return None
    engagement = result.overall_score.breakdown.engagement
    return Suggestion(
        type=SuggestionType.ENGAGEMENT,
        priority=Priority.HIGH,
        current="No call to action found",
        suggestion="End with a question or an explicit invitation to like, comment or share",
        reasoning=f"Engagement score is {engagement:.0f}; posts that ask for interaction receive more of it",
        examples=list(ENGAGEMENT_EXAMPLES),
        impact="About 30% more interactions",
    )


def _readability_suggestion(result: AnalysisResult) -> Optional[Suggestion]:
    flesch = result.readability.flesch_score
    if flesch >= READABILITY_TARGET:
        return None
    return Suggestion(
        type=SuggestionType.READABILITY,
        priority=Priority.MEDIUM,
        current=f"Readability score is {flesch:.1f}",
        suggestion="Split long sentences and prefer shorter, everyday words",
        reasoning=f"Current readability is {flesch:.1f}; aim for 60 or higher",
        impact="Easier reading and longer time on page",
    )


def _visual_suggestion(result: AnalysisResult) -> Optional[Suggestion]:
    if result.image_analysis:
        return None
    visual = result.overall_score.breakdown.visual
    return Suggestion(
        type=SuggestionType.VISUAL,
        priority=Priority.HIGH,
        current="No images attached",
        suggestion="Add at least one high-quality image related to the topic",
        reasoning=f"Visual score is {visual:.0f} without images",
        impact="40-60% more engagement",
    )


CHECKS = (
    _title_suggestion,
    _structure_suggestion,
    _engagement_suggestion,
    _readability_suggestion,
    _visual_suggestion,
)


def generate_suggestions(result: AnalysisResult) -> List[Suggestion]:
    """
    Map score deficits to prioritized suggestions.

    Args:
        result: Analysis result (its own suggestions are ignored).

    Returns:
        Suggestions in check order: title, structure, engagement,
        readability, visual. Empty when nothing needs improvement.
    """
    suggestions = []
    for check in CHECKS:
        suggestion = check(result)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions
