"""
AI providers for sentiment, advice and topics.

The provider is chosen once, from configuration, by create_provider().
"""

import logging
from typing import Dict, Type

from ..config import AISettings
from ..exceptions import ConfigurationError, ErrorCode
from .base import MAX_TOPICS, SentimentProvider
from .llm import ClaudeProvider, GeminiProvider, OpenAIProvider, RemoteProvider
from .local import LexiconProvider

logger = logging.getLogger(__name__)

REMOTE_PROVIDER_CLASSES: Dict[str, Type[RemoteProvider]] = {
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
    "gemini": GeminiProvider,
}


def create_provider(settings: AISettings) -> SentimentProvider:
    """
    Create the provider selected by configuration.

    A remote provider without an API key degrades to the local lexicon.

    Args:
        settings: AI settings.

    Returns:
        The provider instance.

    Raises:
        ConfigurationError: If the provider tag is unknown.
    """
    tag = settings.ai_provider
    if tag == "local":
        return LexiconProvider()

    provider_cls = REMOTE_PROVIDER_CLASSES.get(tag)
    if provider_cls is None:
        raise ConfigurationError(
            f"Unknown AI provider '{tag}'",
            setting="ai_provider",
            error_code=ErrorCode.UNKNOWN_PROVIDER,
        )

    if not settings.is_remote:
        logger.warning(f"No API key configured for AI provider '{tag}', using local lexicon provider")
        return LexiconProvider()

    logger.info(f"Using AI provider '{tag}' with model '{settings.model}'")
    return provider_cls(settings)


__all__ = [
    "MAX_TOPICS",
    "ClaudeProvider",
    "GeminiProvider",
    "LexiconProvider",
    "OpenAIProvider",
    "RemoteProvider",
    "SentimentProvider",
    "create_provider",
]
