"""
Content analyzer.

Wires the scoring engine, the AI provider and the image analyzer together
to turn one Content into one AnalysisResult.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Settings
from .exceptions import ImageAnalysisError, ImageError
from .images import ImageAnalyzer
from .providers import SentimentProvider, create_provider
from .scoring import (
    CompositeScorer,
    analyze_readability,
    analyze_text,
    extract_keywords,
    generate_suggestions,
)
from .scoring.text_utils import split_words
from .types.analysis import AnalysisResult, ImageAnalysis
from .types.content import Content, Image
from .utils.logging import Timer, clear_content_context, set_content_context

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 100


class ContentAnalyzer:
    """
    Analyzes content and produces scored, explained results.

    Components are built once from the settings; the analyzer keeps no
    state between analyze() calls.

    Args:
        settings: Immutable application settings.
        provider: Sentiment provider (defaults to the configured one).
        image_analyzer: Image analyzer (defaults to a Pillow analyzer).
    """

    def __init__(
        self,
        settings: Settings,
        provider: Optional[SentimentProvider] = None,
        image_analyzer: Optional[ImageAnalyzer] = None,
    ):
        self.settings = settings
        self.provider = provider or create_provider(settings.ai)
        self.image_analyzer = image_analyzer or ImageAnalyzer(settings.image)
        self.scorer = CompositeScorer(settings.analysis.score_weights)

    def resolve_image_path(self, content: Content, image: Image) -> Optional[Path]:
        """
        Resolve an image reference to a local path.

        Relative paths are taken relative to the content file's directory,
        or to the content directory when the content has no source file.
        """
        if not image.path:
            return None
        path = Path(image.path)
        if path.is_absolute():
            return path
        base = Path(content.file_path).parent if content.file_path else self.settings.paths.content_dir
        return base / path

    def analyze_images(self, content: Content) -> List[ImageAnalysis]:
        """
        Analyze every image of a content item.

        Failing images are logged and skipped.

        Raises:
            ImageAnalysisError: If the content has images and all of them fail.
        """
        if not content.images:
            return []

        analyses = []
        for image in content.images:
            path = self.resolve_image_path(content, image)
            if path is None:
                logger.warning(f"Skipping image without local path: {image.url or '(empty)'}")
                continue
            try:
                analyses.append(self.image_analyzer.analyze(path))
            except ImageError as e:
                logger.warning(
                    f"Image analysis failed for {path}: {e.message}",
                    extra={"error_code": e.error_code.value},
                )

        if not analyses:
            raise ImageAnalysisError(
                f"All {len(content.images)} image(s) of content '{content.id}' failed analysis",
                path=content.file_path or None,
            )
        return analyses

    def analyze(self, content: Content) -> AnalysisResult:
        """
        Analyze a single content item.

        Args:
            content: Content to analyze.

        Returns:
            The complete AnalysisResult.

        Raises:
            ImageAnalysisError: If the content has images and none can be analyzed.
        """
        set_content_context(content_id=content.id)
        try:
            with Timer("analyze_content", logger, logging.INFO):
                text_analysis = analyze_text(content.text, content.title)
                readability = analyze_readability(content.text)
                keywords = extract_keywords(content.text)
                sentiment = self.provider.analyze_sentiment(f"{content.title}\n\n{content.text}".strip())
                images = self.analyze_images(content)

                overall = self.scorer.score(text_analysis, images, readability, keywords)
                result = AnalysisResult(
                    content_id=content.id,
                    title=content.title,
                    overall_score=overall,
                    text_analysis=text_analysis,
                    image_analysis=images,
                    keywords=keywords,
                    sentiment=sentiment,
                    readability=readability,
                )
                result = result.model_copy(update={"suggestions": generate_suggestions(result)})

            logger.info(
                f"Content '{content.id}' scored {overall.total:.1f} ({overall.level.value})",
                extra={"total": round(overall.total, 1), "suggestions": len(result.suggestions)},
            )
            return result
        finally:
            clear_content_context()

    def validate_content(self, content: Content) -> List[str]:
        """
        Check content against the recommended limits.

        Returns:
            Human-readable issues; empty when the content passes.
        """
        issues = []
        analysis = self.settings.analysis

        word_count = len(split_words(content.text))
        if word_count < analysis.min_word_count:
            issues.append(
                f"Text is too short: {word_count} words (minimum {analysis.min_word_count})"
            )
        elif word_count > analysis.max_word_count:
            issues.append(
                f"Text is too long: {word_count} words (maximum {analysis.max_word_count})"
            )

        if not content.title.strip():
            issues.append("Title is missing")
        elif len(content.title) > MAX_TITLE_LENGTH:
            issues.append(f"Title is too long: {len(content.title)} characters (maximum {MAX_TITLE_LENGTH})")

        for i, image in enumerate(content.images, 1):
            path = self.resolve_image_path(content, image)
            if path is None:
                issues.append(f"Image {i} has no local path")
                continue
            try:
                self.image_analyzer.validate(path)
            except ImageError as e:
                issues.append(f"Image {i}: {e.message}")

        return issues

    def health_check(self) -> Dict[str, bool]:
        """Report the status of each service."""
        image = self.settings.image
        return {
            "image_formats_configured": bool(image.image_supported_ext),
            "image_size_limit_valid": image.image_max_size > 0,
            "remote_ai_active": self.provider.is_remote,
        }

    def is_healthy(self) -> bool:
        """Image checks must pass; a remote AI provider is optional."""
        status = self.health_check()
        return status["image_formats_configured"] and status["image_size_limit_valid"]

    def get_service_info(self) -> Dict[str, Any]:
        """Describe the configured services without exposing secrets."""
        return {
            "ai_provider": self.provider.name,
            "ai_model": self.settings.ai.model if self.provider.is_remote else None,
            "remote_ai_active": self.provider.is_remote,
            "image_supported_formats": self.image_analyzer.supported_formats,
            "image_max_size": self.settings.image.image_max_size,
            "score_weights": self.settings.analysis.score_weights.model_dump(),
        }
