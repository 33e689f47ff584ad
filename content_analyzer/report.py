"""
Report export.

Writes analysis results, with optional AI advice and topics, to JSON or CSV
files in the output directory. The JSON summary also carries batch
analytics: best and worst content, recurring issues, traits of high
scorers, merged keywords and batch-wide recommendations.
"""

import csv
import json
import logging
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from .scoring.composite import DIMENSIONS, dimension_scores
from .types.analysis import AnalysisResult, Keyword, Priority, ScoreLevel

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ReportEntry(BaseModel):
    """One analyzed content item as it appears in a report."""

    result: AnalysisResult = Field(..., description="Analysis result")
    advice: Optional[str] = Field(default=None, description="Provider advice")
    topics: List[str] = Field(default_factory=list, description="Provider topics")
    issues: List[str] = Field(default_factory=list, description="Validation issues")


class GlobalRecommendation(BaseModel):
    """A recommendation that applies across several content items."""

    category: str = Field(..., description="Dimension addressed")
    priority: Priority = Field(..., description="Recommendation priority")
    description: str = Field(..., description="What to change across the batch")
    affected_content: List[str] = Field(default_factory=list, description="Affected content ids")
    expected_impact: str = Field(..., description="Expected impact")


WEAK_SCORE = 60
HARD_TO_READ = 50
HIGH_SCORE = 80
TOP_KEYWORDS = 20

# (label, predicate) pairs evaluated per result, in report order
ISSUE_CHECKS: List[Tuple[str, Callable[[AnalysisResult], bool]]] = [
    ("Weak titles", lambda r: r.overall_score.breakdown.title < WEAK_SCORE),
    ("Few engagement drivers", lambda r: r.overall_score.breakdown.engagement < WEAK_SCORE),
    ("Low visual quality", lambda r: r.overall_score.breakdown.visual < WEAK_SCORE),
    ("Hard to read", lambda r: r.readability.flesch_score < HARD_TO_READ),
    ("Missing call to action", lambda r: not r.text_analysis.call_to_actions),
]

SUCCESS_CHECKS: List[Tuple[str, Callable[[AnalysisResult], bool]]] = [
    ("Numbers in titles", lambda r: r.text_analysis.title.has_numbers),
    ("Question titles", lambda r: r.text_analysis.title.has_questions),
    ("Engaging openings", lambda r: r.text_analysis.structure.has_intro),
    ("Calls to action", lambda r: bool(r.text_analysis.call_to_actions)),
]


def best_and_worst(results: Sequence[AnalysisResult]) -> Tuple[Optional[str], Optional[str]]:
    """Content ids of the highest and lowest totals; the first entry wins ties."""
    if not results:
        return None, None
    best = worst = results[0]
    for result in results[1:]:
        if result.overall_score.total > best.overall_score.total:
            best = result
        if result.overall_score.total < worst.overall_score.total:
            worst = result
    return best.content_id, worst.content_id


def find_common_issues(results: Sequence[AnalysisResult]) -> List[Dict[str, Any]]:
    """Issues shared by more than a third of the results."""
    threshold = len(results) // 3
    issues = []
    for label, check in ISSUE_CHECKS:
        count = sum(1 for r in results if check(r))
        if count > threshold:
            issues.append({"issue": label, "count": count})
    return issues


def find_success_patterns(results: Sequence[AnalysisResult]) -> List[str]:
    """Traits shared by more than half of the results scoring above HIGH_SCORE."""
    high = [r for r in results if r.overall_score.total > HIGH_SCORE]
    if not high:
        return []
    threshold = len(high) // 2
    return [label for label, check in SUCCESS_CHECKS if sum(1 for r in high if check(r)) > threshold]


def merge_keywords(results: Sequence[AnalysisResult], limit: int = TOP_KEYWORDS) -> List[Keyword]:
    """
    Merge keywords across results.

    Frequencies add up and relevance is averaged with each repeat. The
    first occurrence keeps its trend and category.
    """
    merged: Dict[str, Keyword] = {}
    for result in results:
        for keyword in result.keywords:
            existing = merged.get(keyword.word)
            if existing is None:
                merged[keyword.word] = keyword
                continue
            merged[keyword.word] = existing.model_copy(
                update={
                    "frequency": existing.frequency + keyword.frequency,
                    "relevance": (existing.relevance + keyword.relevance) / 2,
                }
            )
    ranked = sorted(merged.values(), key=lambda k: k.frequency, reverse=True)
    return ranked[:limit]


def global_recommendations(results: Sequence[AnalysisResult]) -> List[GlobalRecommendation]:
    """Recommendations for problems that recur across the batch."""
    count = len(results)
    weak_titles = [r.content_id for r in results if r.overall_score.breakdown.title < WEAK_SCORE]
    weak_engagement = [r.content_id for r in results if r.overall_score.breakdown.engagement < WEAK_SCORE]
    no_images = [r.content_id for r in results if not r.image_analysis]

    recommendations = []
    if len(weak_titles) > count // 3:
        recommendations.append(
            GlobalRecommendation(
                category="title",
                priority=Priority.HIGH,
                description="Many titles lack pull; settle on a shared title formula with numbers and hook words",
                affected_content=weak_titles,
                expected_impact="20-30% higher overall click-through rate",
            )
        )
    if len(weak_engagement) > count // 3:
        recommendations.append(
            GlobalRecommendation(
                category="engagement",
                priority=Priority.HIGH,
                description="Most posts give readers no reason to respond; close each one with a question or invitation",
                affected_content=weak_engagement,
                expected_impact="40-50% more reader interaction",
            )
        )
    if len(no_images) > count // 2:
        recommendations.append(
            GlobalRecommendation(
                category="visual",
                priority=Priority.MEDIUM,
                description="Many posts ship without images; plan visuals alongside the text",
                affected_content=no_images,
                expected_impact="30-40% more attention in the feed",
            )
        )
    return recommendations


def summarize(entries: Sequence[ReportEntry]) -> Dict[str, Any]:
    """
    Aggregate a batch of results.

    Returns:
        Dictionary with the count, average total, per-dimension averages,
        level distribution, best and worst content, common issues, success
        patterns, top keywords and global recommendations.
    """
    results = [e.result for e in entries]
    count = len(results)
    best, worst = best_and_worst(results)
    analytics = {
        "best_performing": best,
        "need_improvement": worst,
        "common_issues": find_common_issues(results),
        "success_patterns": find_success_patterns(results),
        "top_keywords": [k.model_dump(mode="json") for k in merge_keywords(results)],
        "recommendations": [r.model_dump(mode="json") for r in global_recommendations(results)],
    }
    if count == 0:
        return {
            "content_count": 0,
            "average_total": 0.0,
            "average_breakdown": {name: 0.0 for name in DIMENSIONS},
            "level_distribution": {level.value: 0 for level in ScoreLevel},
            **analytics,
        }

    totals = [r.overall_score.total for r in results]
    breakdown_sums = {name: 0.0 for name in DIMENSIONS}
    for result in results:
        for name, value in dimension_scores(result.overall_score.breakdown):
            breakdown_sums[name] += value

    levels = Counter(r.overall_score.level.value for r in results)
    return {
        "content_count": count,
        "average_total": round(sum(totals) / count, 2),
        "average_breakdown": {name: round(total / count, 2) for name, total in breakdown_sums.items()},
        "level_distribution": {level.value: levels.get(level.value, 0) for level in ScoreLevel},
        **analytics,
    }


def _report_path(output_dir: PathLike, suffix: str, timestamp: Optional[datetime]) -> Path:
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = (timestamp or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S")
    return directory / f"analysis_report_{stamp}.{suffix}"


def write_json_report(
    entries: Sequence[ReportEntry],
    output_dir: PathLike,
    timestamp: Optional[datetime] = None,
) -> Path:
    """
    Write a JSON report with a summary and every entry.

    Returns:
        Path of the written file.
    """
    path = _report_path(output_dir, "json", timestamp)
    report = {
        "generated_at": (timestamp or datetime.now(timezone.utc)).isoformat(),
        "summary": summarize(entries),
        "results": [entry.model_dump(mode="json") for entry in entries],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, ensure_ascii=False, indent=2)

    logger.info(f"Wrote JSON report to {path}")
    return path


CSV_COLUMNS = [
    "content_id",
    "title",
    "total",
    "level",
    *DIMENSIONS,
    "word_count",
    "flesch_score",
    "sentiment",
    "keywords",
    "topics",
    "suggestion_count",
]


def write_csv_report(
    entries: Sequence[ReportEntry],
    output_dir: PathLike,
    timestamp: Optional[datetime] = None,
) -> Path:
    """
    Write a CSV report with one row per content item.

    Returns:
        Path of the written file.
    """
    path = _report_path(output_dir, "csv", timestamp)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for entry in entries:
            result = entry.result
            score = result.overall_score
            row = {
                "content_id": result.content_id,
                "title": result.title or "",
                "total": f"{score.total:.1f}",
                "level": score.level.value,
                "word_count": result.text_analysis.word_count,
                "flesch_score": f"{result.readability.flesch_score:.1f}",
                "sentiment": result.sentiment.overall.value,
                "keywords": " ".join(k.word for k in result.keywords),
                "topics": " ".join(entry.topics),
                "suggestion_count": len(result.suggestions),
            }
            for name, value in dimension_scores(score.breakdown):
                row[name] = f"{value:.1f}"
            writer.writerow(row)

    logger.info(f"Wrote CSV report to {path}")
    return path
