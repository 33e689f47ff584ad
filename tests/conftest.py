"""
Pytest configuration and shared fixtures for content analyzer tests.

This module provides common fixtures used across all test files:
- Settings for local (no network) and mocked remote providers
- Mock configurations for the OpenAI and Anthropic SDKs
- Sample content and an image factory
"""

import os
import sys
from unittest.mock import MagicMock, patch

import pytest

# Environment setup before any imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AI_PROVIDER"] = "local"
os.environ.pop("AI_API_KEY", None)
os.environ.pop("LOG_FORMAT_JSON", None)

# Ensure project root is in path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from PIL import Image as PILImage  # noqa: E402

from content_analyzer.analyzer import ContentAnalyzer  # noqa: E402
from content_analyzer.config import (  # noqa: E402
    AISettings,
    AnalysisSettings,
    ImageSettings,
    PathSettings,
    Settings,
)
from content_analyzer.providers import LexiconProvider  # noqa: E402
from content_analyzer.types import Content, Image  # noqa: E402

TEST_API_KEY = "sk-test-mock-key-for-unit-tests-only"


@pytest.fixture
def settings(tmp_path):
    """Settings with the local provider and temporary directories."""
    return Settings(
        paths=PathSettings(content_dir=tmp_path / "content", output_dir=tmp_path / "output"),
        ai=AISettings(ai_provider="local"),
        image=ImageSettings(),
        analysis=AnalysisSettings(),
    )


@pytest.fixture
def openai_settings():
    """AI settings selecting OpenAI with a fake key."""
    return AISettings(ai_provider="openai", ai_api_key=TEST_API_KEY, ai_model="gpt-4o-mini")


@pytest.fixture
def claude_settings():
    """AI settings selecting Claude with a fake key."""
    return AISettings(ai_provider="claude", ai_api_key=TEST_API_KEY)


@pytest.fixture
def mock_openai():
    """Mock OpenAI API calls."""
    with patch("content_analyzer.providers.llm.OpenAI") as mock:
        mock_instance = MagicMock()
        mock_instance.chat.completions.create.return_value = MagicMock(
            choices=[MagicMock(message=MagicMock(content="Generated content"))]
        )
        mock.return_value = mock_instance
        yield mock


@pytest.fixture
def mock_anthropic():
    """Mock Anthropic API calls."""
    with patch("content_analyzer.providers.llm.Anthropic") as mock:
        mock_instance = MagicMock()
        mock_instance.messages.create.return_value = MagicMock(
            content=[MagicMock(text="Generated content")]
        )
        mock.return_value = mock_instance
        yield mock


@pytest.fixture
def analyzer(settings):
    """Content analyzer with the local lexicon provider."""
    return ContentAnalyzer(settings, provider=LexiconProvider())


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a test image and returning its path."""

    def _make(name="photo.png", size=(300, 200), color=(200, 120, 50), striped=False):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        img = PILImage.new("RGB", size, color)
        if striped:
            for x in range(0, size[0], 4):
                for y in range(size[1]):
                    img.putpixel((x, y), (255, 255, 255))
        img.save(path)
        return path

    return _make


@pytest.fixture
def sample_text():
    """A post with an intro, a conclusion, a CTA and hashtags."""
    return (
        "大家好，今天分享我最近的旅行经验。\n\n"
        "这次旅行非常开心，风景很棒，我觉得特别值得推荐。\n\n"
        "希望对你有帮助，快来评论区分享你的故事！ #旅行 #生活 @小明"
    )


@pytest.fixture
def sample_content(sample_text):
    """Sample content without images."""
    return Content(
        id="post-001",
        title="5个让旅行更轻松的小技巧",
        text=sample_text,
        tags=["旅行"],
        author="tester",
    )


@pytest.fixture
def content_with_images(tmp_path, make_image, sample_text):
    """Content whose images live next to its source file."""
    make_image("images/a.png", size=(320, 200))
    make_image("images/b.jpg", size=(200, 200))
    return Content(
        id="post-002",
        title="周末旅行的美食推荐",
        text=sample_text,
        images=[Image(path="images/a.png"), Image(path="images/b.jpg")],
        file_path=str(tmp_path / "post.json"),
    )
