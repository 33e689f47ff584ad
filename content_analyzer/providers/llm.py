"""
LLM-backed providers.

Each provider makes a single request per feature with a bounded timeout.
Any failure (transport, timeout, empty or malformed response) is logged and
answered by the local lexicon provider instead.
"""

import json
import logging
import re
from abc import abstractmethod
from typing import Any, List, Optional

import google.generativeai as genai
from anthropic import Anthropic
from openai import OpenAI
from pydantic import ValidationError

from ..config import AISettings
from ..exceptions import ErrorCode, ProviderError
from ..scoring.composite import DIMENSION_LABELS, dimension_scores
from ..types.analysis import AnalysisResult, SentimentAnalysis, Suggestion
from ..types.content import Content
from .base import MAX_TOPICS, SentimentProvider
from .local import LexiconProvider

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 1000

SENTIMENT_PROMPT = """Analyze the sentiment of the following social media post.
Respond with JSON only, in exactly this shape:
{{"overall": "positive" | "negative" | "neutral", "score": <number from -1 to 1>,
"emotions": {{"joy": <0-1>, "sadness": <0-1>, "anger": <0-1>, "fear": <0-1>, "surprise": <0-1>}},
"confidence": <number from 0 to 1>}}

Post:
{text}"""

ADVICE_PROMPT = """You are a social media content strategist. Based on the analysis below,
give concise, specific advice for improving this post. Use markdown.

Title: {title}
Overall score: {total:.1f} ({level})
Score breakdown:
{breakdown}
Detected issues:
{issues}"""

TOPICS_PROMPT = """List the main topics of the following post.
Respond with a JSON array of at most {limit} short topic strings and nothing else.

Post:
{text}"""

IMPROVE_PROMPT = """Rewrite the following social media post, applying the suggestions.
Keep the author's voice and language. Return only the rewritten post.

Title: {title}

Post:
{text}

Suggestions:
{suggestions}"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


def _parse_json(raw: str) -> Any:
    """Parse a JSON response, tolerating a surrounding code fence."""
    return json.loads(_CODE_FENCE.sub("", raw.strip()))


def _format_suggestions(suggestions: List[Suggestion]) -> str:
    if not suggestions:
        return "- none"
    return "\n".join(
        f"- [{s.priority.value}] {s.type.value}: {s.current}. {s.suggestion}"
        for s in suggestions
    )


class RemoteProvider(SentimentProvider):
    """
    Base class for providers that call an LLM.

    Subclasses implement _complete(); this class handles prompting,
    response validation and the lexicon fallback.
    """

    def __init__(self, settings: AISettings, fallback: Optional[LexiconProvider] = None):
        self.settings = settings
        self.model = settings.model
        self.fallback = fallback or LexiconProvider()

    @property
    def is_remote(self) -> bool:
        return True

    @abstractmethod
    def _complete(self, prompt: str) -> str:
        """
        Send a single prompt and return the response text.

        Raises:
            ProviderError: If the request fails or returns no text.
        """

    def analyze_sentiment(self, text: str) -> SentimentAnalysis:
        try:
            raw = self._complete(SENTIMENT_PROMPT.format(text=text))
            return SentimentAnalysis.model_validate(_parse_json(raw))
        except (ProviderError, ValidationError, ValueError) as e:
            logger.warning(
                f"{self.name} sentiment analysis failed, using lexicon fallback: {e}",
                extra={"provider": self.name},
            )
            return self.fallback.analyze_sentiment(text)

    def generate_advice(self, result: AnalysisResult) -> str:
        score = result.overall_score
        prompt = ADVICE_PROMPT.format(
            title=result.title or "(untitled)",
            total=score.total,
            level=score.level.value,
            breakdown="\n".join(
                f"- {DIMENSION_LABELS[name]}: {value:.0f}"
                for name, value in dimension_scores(score.breakdown)
            ),
            issues=_format_suggestions(result.suggestions),
        )
        try:
            return self._complete(prompt).strip()
        except ProviderError as e:
            logger.warning(
                f"{self.name} advice generation failed, using lexicon fallback: {e}",
                extra={"provider": self.name},
            )
            return self.fallback.generate_advice(result)

    def extract_topics(self, text: str) -> List[str]:
        try:
            raw = self._complete(TOPICS_PROMPT.format(text=text, limit=MAX_TOPICS))
            topics = _parse_json(raw)
            if not isinstance(topics, list):
                raise ValueError("topics response is not a JSON array")
            topics = [str(t).strip() for t in topics if str(t).strip()]
            if not topics:
                raise ValueError("topics response is empty")
            return topics[:MAX_TOPICS]
        except (ProviderError, ValueError) as e:
            logger.warning(
                f"{self.name} topic extraction failed, using lexicon fallback: {e}",
                extra={"provider": self.name},
            )
            return self.fallback.extract_topics(text)

    def improve_content(self, content: Content, suggestions: List[Suggestion]) -> str:
        """
        Rewrite a post applying suggestions.

        Unlike the scoring features this has no fallback.

        Raises:
            ProviderError: If the request fails.
        """
        prompt = IMPROVE_PROMPT.format(
            title=content.title or "(untitled)",
            text=content.text,
            suggestions=_format_suggestions(suggestions),
        )
        return self._complete(prompt).strip()

    def _empty_response(self) -> ProviderError:
        return ProviderError(
            f"{self.name} returned an empty response",
            provider=self.name,
            error_code=ErrorCode.PROVIDER_RESPONSE_INVALID,
        )


class OpenAIProvider(RemoteProvider):
    """OpenAI chat completions (also any OpenAI-compatible base URL)."""

    name = "openai"

    def __init__(self, settings: AISettings, fallback: Optional[LexiconProvider] = None):
        super().__init__(settings, fallback)
        self.client = OpenAI(
            api_key=settings.ai_api_key.get_secret_value(),
            base_url=settings.ai_base_url,
            timeout=settings.ai_timeout,
            max_retries=0,
        )

    def _complete(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise ProviderError(
                f"Error calling OpenAI: {str(e)}",
                provider=self.name,
            ) from e
        if not content:
            raise self._empty_response()
        return content


class ClaudeProvider(RemoteProvider):
    """Anthropic Claude messages API."""

    name = "claude"

    def __init__(self, settings: AISettings, fallback: Optional[LexiconProvider] = None):
        super().__init__(settings, fallback)
        self.client = Anthropic(
            api_key=settings.ai_api_key.get_secret_value(),
            base_url=settings.ai_base_url,
            timeout=settings.ai_timeout,
            max_retries=0,
        )

    def _complete(self, prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                messages=[{"role": "user", "content": prompt}],
            )
            content = response.content[0].text if response.content else ""
        except Exception as e:
            raise ProviderError(
                f"Error calling Anthropic: {str(e)}",
                provider=self.name,
            ) from e
        if not content:
            raise self._empty_response()
        return content


class GeminiProvider(RemoteProvider):
    """Google Gemini generative models."""

    name = "gemini"

    def __init__(self, settings: AISettings, fallback: Optional[LexiconProvider] = None):
        super().__init__(settings, fallback)
        genai.configure(api_key=settings.ai_api_key.get_secret_value())
        self.client = genai.GenerativeModel(
            self.model,
            generation_config={
                "temperature": TEMPERATURE,
                "max_output_tokens": MAX_TOKENS,
            },
        )

    def _complete(self, prompt: str) -> str:
        try:
            response = self.client.generate_content(
                prompt,
                request_options={"timeout": self.settings.ai_timeout},
            )
            content = response.text
        except Exception as e:
            raise ProviderError(
                f"Error calling Gemini: {str(e)}",
                provider=self.name,
            ) from e
        if not content:
            raise self._empty_response()
        return content
