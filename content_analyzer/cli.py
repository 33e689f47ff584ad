"""
Command-line entry point.

Analyzes every content file in the content directory and writes reports
to the output directory.
"""

import argparse
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from .analyzer import ContentAnalyzer
from .config import Settings, load_settings
from .exceptions import ConfigurationError, ContentAnalyzerError, ContentParseError
from .loader import load_content_dir
from .providers import LexiconProvider
from .report import ReportEntry, write_csv_report, write_json_report
from .utils.logging import set_content_context, setup_logging

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 2.0

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="content-analyzer",
        description="Score social-media posts and suggest improvements",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file (default: config.yaml)")
    parser.add_argument("--content-dir", default=None, help="Directory with content files")
    parser.add_argument("--output-dir", default=None, help="Directory for reports")
    parser.add_argument(
        "--format",
        choices=["json", "csv", "both"],
        default="json",
        help="Report format",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_DELAY,
        help="Seconds to wait between items when a remote AI provider is active",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Use the local lexicon provider instead of a remote AI provider",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Only validate content against the configured limits",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured log level",
    )
    return parser


def _with_path_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    updates = {}
    if args.content_dir:
        updates["content_dir"] = Path(args.content_dir)
    if args.output_dir:
        updates["output_dir"] = Path(args.output_dir)
    if not updates:
        return settings
    return settings.model_copy(update={"paths": settings.paths.model_copy(update=updates)})


def write_reports(entries: List[ReportEntry], output_dir: Path, fmt: str) -> List[Path]:
    timestamp = datetime.now(timezone.utc)
    paths = []
    if fmt in ("json", "both"):
        paths.append(write_json_report(entries, output_dir, timestamp))
    if fmt in ("csv", "both"):
        paths.append(write_csv_report(entries, output_dir, timestamp))
    return paths


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(log_level=getattr(logging, args.log_level) if args.log_level else None)

    try:
        settings = _with_path_overrides(load_settings(args.config), args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}", extra=e.to_dict())
        return EXIT_CONFIG_ERROR

    setup_logging(
        log_level=getattr(logging, args.log_level or settings.logging.log_level),
        force_json=settings.logging.log_format_json,
    )

    logger.info("Configuration loaded", extra=settings.get_config_summary())

    try:
        analyzer = ContentAnalyzer(
            settings,
            provider=LexiconProvider() if args.no_ai else None,
        )
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}", extra=e.to_dict())
        return EXIT_CONFIG_ERROR

    if not analyzer.is_healthy():
        logger.error("Service health check failed", extra=analyzer.health_check())
        return EXIT_CONFIG_ERROR

    try:
        loaded = load_content_dir(settings.paths.content_dir)
    except ContentParseError as e:
        logger.error(e.message)
        return EXIT_FAILED

    set_content_context(batch_id=datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S"))
    throttle = analyzer.provider.is_remote and args.delay > 0

    entries: List[ReportEntry] = []
    failed = len(loaded.errors)
    for i, content in enumerate(loaded.contents):
        issues = analyzer.validate_content(content)
        for issue in issues:
            logger.warning(f"{content.id}: {issue}")
        if args.validate_only:
            continue

        if throttle and i > 0:
            time.sleep(args.delay)

        try:
            result = analyzer.analyze(content)
        except ContentAnalyzerError as e:
            logger.error(f"Failed to analyze '{content.id}': {e.message}", extra=e.to_dict())
            failed += 1
            continue

        advice = None
        topics: List[str] = []
        if analyzer.provider.is_remote:
            advice = analyzer.provider.generate_advice(result)
            topics = analyzer.provider.extract_topics(content.text)

        entries.append(ReportEntry(result=result, advice=advice, topics=topics, issues=issues))

    if args.validate_only:
        logger.info(f"Validated {len(loaded.contents)} content item(s)")
        return EXIT_OK

    if entries:
        for path in write_reports(entries, settings.paths.output_dir, args.format):
            print(path)

    logger.info(
        f"Analyzed {len(entries)} content item(s), {failed} failed",
        extra={"analyzed": len(entries), "failed": failed},
    )

    if failed and not entries:
        return EXIT_FAILED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
