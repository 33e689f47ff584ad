"""
Centralized configuration management for the content analyzer.

This module provides a Pydantic Settings-based configuration system that:
- Validates environment variables and the YAML config file at startup
- Groups related settings for better organization
- Produces an immutable Settings value passed explicitly to components
- Supports .env file loading

Usage:
    from content_analyzer.config import load_settings

    settings = load_settings("config.yaml")
    analyzer = ContentAnalyzer(settings)
"""

import logging
import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError, ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"

ProviderType = Literal["openai", "claude", "gemini", "local"]
REMOTE_PROVIDERS = ("openai", "claude", "gemini")

DEFAULT_MODELS = {
    "openai": "gpt-3.5-turbo",
    "claude": "claude-3-haiku-20240307",
    "gemini": "gemini-1.5-flash-latest",
}

WEIGHT_TOLERANCE = 1e-6


def _settings_config() -> SettingsConfigDict:
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


# =============================================================================
# Path Settings
# =============================================================================


class PathSettings(BaseSettings):
    """Input and output locations."""

    model_config = _settings_config()

    content_dir: Path = Field(
        default=Path("./content"),
        description="Directory scanned for content files",
    )
    output_dir: Path = Field(
        default=Path("./output"),
        description="Directory reports are written to",
    )


# =============================================================================
# AI Provider Settings
# =============================================================================


class AISettings(BaseSettings):
    """Configuration for the sentiment/advice/topics provider."""

    model_config = _settings_config()

    ai_provider: ProviderType = Field(
        default="openai",
        description="AI provider (openai, claude, gemini or local)",
    )
    ai_api_key: Optional[SecretStr] = Field(
        default=None,
        description="API key for the remote provider",
    )
    ai_model: Optional[str] = Field(
        default=None,
        description="Model name (defaults to the provider's default model)",
    )
    ai_base_url: Optional[str] = Field(
        default=None,
        description="Optional API base URL (OpenAI-compatible endpoints)",
    )
    ai_timeout: float = Field(
        default=30.0,
        ge=1,
        le=600,
        description="Timeout in seconds for a single provider request",
    )

    @property
    def model(self) -> str:
        """Configured model, or the provider's default."""
        return self.ai_model or DEFAULT_MODELS.get(self.ai_provider, "")

    @property
    def is_remote(self) -> bool:
        """Check if a remote provider is selected and has credentials."""
        return self.ai_provider in REMOTE_PROVIDERS and bool(
            self.ai_api_key and self.ai_api_key.get_secret_value()
        )


# =============================================================================
# Image Settings
# =============================================================================


class ImageSettings(BaseSettings):
    """Configuration for image validation."""

    model_config = _settings_config()

    image_max_size: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Maximum image file size in bytes",
    )
    image_supported_ext: List[str] = Field(
        default_factory=lambda: [".jpg", ".jpeg", ".png", ".gif", ".bmp"],
        min_length=1,
        description="Allowed image file extensions",
    )

    @field_validator("image_supported_ext")
    @classmethod
    def normalize_extensions(cls, v: List[str]) -> List[str]:
        """Lower-case extensions and ensure a leading dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            if not ext.startswith("."):
                ext = "." + ext
            normalized.append(ext)
        if not normalized:
            raise ValueError("at least one supported image extension is required")
        return normalized


# =============================================================================
# Analysis Settings
# =============================================================================


class ScoreWeights(BaseModel):
    """Weights of the six sub-scores in the composite total."""

    model_config = ConfigDict(frozen=True)

    content_quality: float = Field(default=0.25, ge=0, description="Content quality weight")
    engagement: float = Field(default=0.20, ge=0, description="Engagement weight")
    visual: float = Field(default=0.15, ge=0, description="Visual weight")
    title: float = Field(default=0.15, ge=0, description="Title weight")
    readability: float = Field(default=0.15, ge=0, description="Readability weight")
    trend_relevance: float = Field(default=0.10, ge=0, description="Trend relevance weight")

    @model_validator(mode="after")
    def validate_sum(self) -> "ScoreWeights":
        """Weights must sum to 1.0 so the total stays within [0, 100]."""
        total = sum(self.model_dump().values())
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_TOLERANCE):
            raise ValueError(f"score weights must sum to 1.0, got {total:.6f}")
        return self


class AnalysisSettings(BaseSettings):
    """Configuration for the scoring engine."""

    model_config = _settings_config()

    min_word_count: int = Field(
        default=50,
        ge=0,
        description="Minimum recommended word count",
    )
    max_word_count: int = Field(
        default=1000,
        ge=1,
        description="Maximum recommended word count",
    )
    score_weights: ScoreWeights = Field(
        default_factory=ScoreWeights,
        description="Composite score weights",
    )

    @model_validator(mode="after")
    def validate_word_counts(self) -> "AnalysisSettings":
        """The recommended range must not be empty."""
        if self.min_word_count > self.max_word_count:
            raise ValueError(
                f"min_word_count ({self.min_word_count}) exceeds "
                f"max_word_count ({self.max_word_count})"
            )
        return self


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingSettings(BaseSettings):
    """Configuration for logging."""

    model_config = _settings_config()

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format_json: bool = Field(
        default=False,
        description="Force JSON log format",
    )


# =============================================================================
# Aggregate
# =============================================================================


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration groups.

    Instances are frozen; components receive one at construction and never
    modify it.
    """

    model_config = _settings_config()

    paths: PathSettings = Field(default_factory=PathSettings)
    ai: AISettings = Field(default_factory=AISettings)
    image: ImageSettings = Field(default_factory=ImageSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def has_remote_provider(self) -> bool:
        """Check if a remote AI provider will be used."""
        return self.ai.is_remote

    def get_config_summary(self) -> dict:
        """
        Get a summary of configuration for logging.

        Secrets are reported only as configured/not configured.
        """
        return {
            "content_dir": str(self.paths.content_dir),
            "output_dir": str(self.paths.output_dir),
            "ai_provider": self.ai.ai_provider,
            "ai_model": self.ai.model,
            "ai_base_url": self.ai.ai_base_url,
            "ai_api_key_configured": bool(self.ai.ai_api_key),
            "remote_provider_active": self.has_remote_provider,
            "image_max_size": self.image.image_max_size,
            "image_supported_ext": list(self.image.image_supported_ext),
            "min_word_count": self.analysis.min_word_count,
            "max_word_count": self.analysis.max_word_count,
            "score_weights": self.analysis.score_weights.model_dump(),
            "log_level": self.logging.log_level,
        }


# =============================================================================
# Loading
# =============================================================================


# YAML section -> {yaml key: settings field name}
_YAML_SECTIONS: Dict[str, Dict[str, str]] = {
    "ai": {
        "provider": "ai_provider",
        "api_key": "ai_api_key",
        "model": "ai_model",
        "base_url": "ai_base_url",
        "timeout": "ai_timeout",
    },
    "image": {
        "max_size": "image_max_size",
        "supported_ext": "image_supported_ext",
    },
    "analysis": {
        "min_word_count": "min_word_count",
        "max_word_count": "max_word_count",
        "score_weights": "score_weights",
    },
    "logging": {
        "level": "log_level",
        "format_json": "log_format_json",
    },
}


def _read_config_file(path: Path) -> Dict[str, Any]:
    """Read a YAML config file into a dictionary."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Could not read config file {path}",
            setting=str(path),
            internal_message=str(e),
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {path} must contain a mapping",
            setting=str(path),
        )
    return data


def _section_values(data: Dict[str, Any], section: str) -> Dict[str, Any]:
    raw = data.get(section) or {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config section '{section}' must be a mapping", setting=section)

    mapping = _YAML_SECTIONS[section]
    values = {}
    for key, value in raw.items():
        if key not in mapping:
            logger.warning(f"Ignoring unknown config key '{section}.{key}'")
            continue
        values[mapping[key]] = value
    return values


def _error_code_for(e: ValidationError) -> ErrorCode:
    for error in e.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if "ai_provider" in loc:
            return ErrorCode.UNKNOWN_PROVIDER
        if "score_weights" in loc:
            return ErrorCode.INVALID_WEIGHTS
    return ErrorCode.CONFIGURATION_ERROR


def load_settings(config_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load and validate settings.

    Values from the YAML file take precedence over environment variables,
    except AI_API_KEY, which always overrides the file's api key. A missing
    file falls back to defaults plus environment.

    Args:
        config_path: Path to a YAML config file (defaults to config.yaml).

    Returns:
        Validated, immutable Settings.

    Raises:
        ConfigurationError: If the file is unreadable or any value is invalid.
    """
    path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_FILE)

    data: Dict[str, Any] = {}
    if path.exists():
        data = _read_config_file(path)
        logger.info(f"Loaded configuration from {path}")
    else:
        logger.info(f"Config file {path} not found, using defaults and environment")

    try:
        path_values = {k: data[k] for k in ("content_dir", "output_dir") if data.get(k)}
        ai_values = _section_values(data, "ai")
        if os.environ.get("AI_API_KEY"):
            ai_values.pop("ai_api_key", None)

        settings = Settings(
            paths=PathSettings(**path_values),
            ai=AISettings(**ai_values),
            image=ImageSettings(**_section_values(data, "image")),
            analysis=AnalysisSettings(**_section_values(data, "analysis")),
            logging=LoggingSettings(**_section_values(data, "logging")),
        )
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            error_code=_error_code_for(e),
            details={"errors": [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]},
            internal_message=str(e),
        ) from e

    return settings


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings.

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    return load_settings(os.environ.get("CONTENT_ANALYZER_CONFIG"))


def reload_settings() -> Settings:
    """
    Reload settings from file and environment.

    Useful for testing or after environment changes.
    """
    get_settings.cache_clear()
    return get_settings()
