"""
Content loading from the file system.

Supported inputs:
- .json  a structured content record
- .md    a markdown post (untitled)
- .txt   a plain text post (untitled)

Each file is parsed independently; a malformed file is reported as a
ContentParseError for that file only.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Union

from pydantic import ValidationError

from .exceptions import ContentParseError, ErrorCode
from .types.content import Content

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

TEXT_TYPES = {
    ".md": "markdown",
    ".txt": "text",
}
SUPPORTED_EXTENSIONS = frozenset({".json", *TEXT_TYPES})


@dataclass
class LoadResult:
    """Contents loaded from a directory plus the per-file errors."""

    contents: List[Content] = field(default_factory=list)
    errors: List[ContentParseError] = field(default_factory=list)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContentParseError(
            f"Cannot read content file: {path.name}",
            source=str(path),
            internal_message=str(e),
        ) from e


def _parse_json(path: Path) -> Content:
    raw = _read_text(path)
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ContentParseError(
            f"Invalid JSON in {path.name}: {e.msg} (line {e.lineno})",
            source=str(path),
        ) from e

    if not isinstance(data, dict):
        raise ContentParseError(f"Expected a JSON object in {path.name}", source=str(path))

    data.setdefault("id", path.stem)
    data["file_path"] = str(path)
    try:
        return Content.model_validate(data)
    except ValidationError as e:
        raise ContentParseError(
            f"Invalid content record in {path.name}: {e.error_count()} error(s)",
            source=str(path),
            details={"errors": [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]},
        ) from e


def load_content_file(path: PathLike) -> Content:
    """
    Load a single content file.

    Args:
        path: Path to a .json, .md or .txt file.

    Returns:
        The parsed Content.

    Raises:
        ContentParseError: If the file is unsupported, unreadable or malformed.
    """
    path = Path(path)
    ext = path.suffix.lower()

    if ext == ".json":
        return _parse_json(path)

    if ext in TEXT_TYPES:
        return Content(
            id=path.stem,
            title="",
            text=_read_text(path),
            file_path=str(path),
            content_type=TEXT_TYPES[ext],
        )

    raise ContentParseError(
        f"Unsupported content file type '{ext}'",
        source=str(path),
        error_code=ErrorCode.UNSUPPORTED_FORMAT,
    )


def scan_content_dir(directory: PathLike) -> Iterator[Path]:
    """Yield supported content files under directory, recursively and in sorted order."""
    for path in sorted(Path(directory).rglob("*")):
        if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
            yield path


def load_content_dir(directory: PathLike) -> LoadResult:
    """
    Load every supported content file in a directory.

    Files that fail to parse are logged and collected in LoadResult.errors;
    they do not stop the remaining files from loading.

    Raises:
        ContentParseError: If the directory itself does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise ContentParseError(f"Content directory not found: {directory}", source=str(directory))

    result = LoadResult()
    for path in scan_content_dir(directory):
        try:
            result.contents.append(load_content_file(path))
        except ContentParseError as e:
            logger.error(f"Skipping {path}: {e.message}", extra={"source": str(path)})
            result.errors.append(e)

    logger.info(
        f"Loaded {len(result.contents)} content item(s) from {directory}",
        extra={"loaded": len(result.contents), "failed": len(result.errors)},
    )
    return result
