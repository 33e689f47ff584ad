"""Utility modules for the content analyzer."""

from .logging import (
    ContentContextFilter,
    DevelopmentFormatter,
    JSONFormatter,
    SensitiveDataFilter,
    Timer,
    clear_content_context,
    redact_sensitive_data,
    set_content_context,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "set_content_context",
    "clear_content_context",
    "Timer",
    "JSONFormatter",
    "DevelopmentFormatter",
    "ContentContextFilter",
    "SensitiveDataFilter",
    "redact_sensitive_data",
]
