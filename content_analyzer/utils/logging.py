"""
Structured logging for the content analyzer.

Provides:
- One-line JSON records for batch runs and log shipping
- Colored console output for local runs
- content_id / batch_id context attached to every record
- Redaction of provider API keys and other credentials
- A Timer for per-operation durations

Usage:
    from content_analyzer.utils.logging import setup_logging, set_content_context

    setup_logging(log_level=logging.INFO)
    set_content_context(batch_id="20240115-103000")
"""

import json
import logging
import os
import re
import sys
import time
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Pattern

content_id_var: ContextVar[Optional[str]] = ContextVar("content_id", default=None)
batch_id_var: ContextVar[Optional[str]] = ContextVar("batch_id", default=None)

REDACTED = "[REDACTED]"

# Credential shapes seen in provider errors and SDK debug output
SENSITIVE_PATTERNS: List[Pattern] = [
    re.compile(r'(?:api[_-]?key|secret|token|authorization)["\']?\s*[:=]\s*["\']?[^\s,}"\']+', re.IGNORECASE),
    re.compile(r"bearer\s+[\w.-]+", re.IGNORECASE),
    re.compile(r"sk-(?:ant-)?[\w-]{8,}"),
    re.compile(r"AIza[\w-]{20,}"),
]

# Attributes every LogRecord carries; anything else came in through extra={}
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "content_id", "batch_id", "taskName"}

NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "openai", "anthropic", "PIL")

TRUTHY = ("1", "true", "yes")


def redact_sensitive_data(message: str) -> str:
    """Replace credentials in a message with [REDACTED]."""
    if not message:
        return message
    for pattern in SENSITIVE_PATTERNS:
        message = pattern.sub(REDACTED, message)
    return message


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


class ContentContextFilter(logging.Filter):
    """Stamp records with the content and batch being processed."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.content_id = content_id_var.get() or "-"
        record.batch_id = batch_id_var.get() or "-"
        return True


class SensitiveDataFilter(logging.Filter):
    """Redact credentials from the message and its string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = redact_sensitive_data(str(record.msg))
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_sensitive_data(a) if isinstance(a, str) else a for a in record.args
            )
        return True


class JSONFormatter(logging.Formatter):
    """
    Render each record as a single JSON object.

    Example:
        {"timestamp": "...", "level": "INFO", "logger": "content_analyzer.analyzer",
         "message": "Content 'post-001' scored 72.5 (good)", "service": "content-analyzer",
         "content_id": "post-001", "batch_id": "20240115-103000", "extra": {"total": 72.5}}

    ERROR and above also carry the source location.
    """

    def __init__(self, service_name: str = "content-analyzer"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "content_id": getattr(record, "content_id", "-"),
            "batch_id": getattr(record, "batch_id", "-"),
        }
        if record.levelno >= logging.ERROR:
            payload["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = _extra_fields(record)
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """
    Colored single-line console output.

    Format: HH:MM:SS.mmm LEVEL    [content_id] logger: message {extra}
    """

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    DIM = "\033[2m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        content_id = getattr(record, "content_id", "-")

        line = (
            f"{self.DIM}{clock}{self.RESET} {color}{record.levelname:<8}{self.RESET} "
            f"{self.DIM}[{content_id[:16]}]{self.RESET} {record.name}: {record.getMessage()}"
        )

        extra = _extra_fields(record)
        if extra:
            line = f"{line} {self.DIM}{extra}{self.RESET}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_log_level() -> int:
    """Level from LOG_LEVEL, INFO when unset or unknown."""
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def should_use_json_format() -> bool:
    """JSON when LOG_FORMAT_JSON is truthy or ENVIRONMENT is production."""
    if os.environ.get("LOG_FORMAT_JSON", "").lower() in TRUTHY:
        return True
    return os.environ.get("ENVIRONMENT", "").lower() in ("production", "prod")


def setup_logging(
    service_name: str = "content-analyzer",
    log_level: Optional[int] = None,
    force_json: bool = False,
) -> logging.Logger:
    """
    Install a single stdout handler on the root logger.

    Safe to call again (the CLI does so once settings are loaded); the
    previous handlers are replaced.

    Args:
        service_name: Service name written into JSON records
        log_level: Level to use (defaults to LOG_LEVEL)
        force_json: Use JSON output regardless of the environment

    Returns:
        The root logger
    """
    level = get_log_level() if log_level is None else log_level
    as_json = force_json or should_use_json_format()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(ContentContextFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JSONFormatter(service_name) if as_json else DevelopmentFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root.debug(
        "Logging configured",
        extra={"log_level": logging.getLevelName(level), "json": as_json},
    )
    return root


def set_content_context(
    content_id: Optional[str] = None,
    batch_id: Optional[str] = None,
) -> None:
    """Set the content and/or batch id attached to subsequent records."""
    if content_id is not None:
        content_id_var.set(content_id)
    if batch_id is not None:
        batch_id_var.set(batch_id)


def clear_content_context() -> None:
    """Forget the current content id; the batch id stays for the run."""
    content_id_var.set(None)


class Timer:
    """
    Measure a block and log its duration.

    Usage:
        with Timer("analyze_content", logger, logging.INFO) as timer:
            result = analyzer.analyze(content)
        timer.elapsed_ms
    """

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.operation = operation
        self.logger = logger
        self.level = level
        self.elapsed_ms = 0.0
        self._started = 0.0

    def __enter__(self) -> "Timer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        if self.logger is None:
            return
        self.logger.log(
            self.level,
            f"{self.operation} took {self.elapsed_ms:.1f}ms",
            extra={
                "operation": self.operation,
                "duration_ms": round(self.elapsed_ms, 2),
                "success": exc_type is None,
            },
        )
