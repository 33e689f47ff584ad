"""
Custom exception classes for the content analyzer.

All exceptions inherit from ContentAnalyzerError so callers can handle
analyzer failures uniformly while still distinguishing the scope of a
failure (startup, per item, per content).

Exception Hierarchy:
    ContentAnalyzerError (base)
    ├── ConfigurationError      fatal at startup
    ├── ContentParseError       per item, the batch continues
    ├── ImageError
    │   ├── ImageValidationError
    │   └── ImageAnalysisError  per content
    └── ProviderError           absorbed by the lexicon fallback
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Startup
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    UNKNOWN_PROVIDER = "UNKNOWN_PROVIDER"
    INVALID_WEIGHTS = "INVALID_WEIGHTS"

    # Input
    CONTENT_PARSE_ERROR = "CONTENT_PARSE_ERROR"
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"

    # Images
    IMAGE_VALIDATION_ERROR = "IMAGE_VALIDATION_ERROR"
    IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"
    IMAGE_TOO_LARGE = "IMAGE_TOO_LARGE"
    IMAGE_ANALYSIS_ERROR = "IMAGE_ANALYSIS_ERROR"

    # AI providers
    PROVIDER_ERROR = "PROVIDER_ERROR"
    PROVIDER_RESPONSE_INVALID = "PROVIDER_RESPONSE_INVALID"


class ContentAnalyzerError(Exception):
    """
    Base exception class for all content analyzer errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
        details: Additional context about the error.
        internal_message: Detailed message for logging only.
    """

    default_error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        self.internal_message = internal_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to a dictionary for reports.

        Returns:
            Dictionary with error information suitable for JSON serialization.
        """
        data: Dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code.value,
        }
        if self.details:
            data["details"] = self.details
        return data

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code.value!r})"
        )


class ConfigurationError(ContentAnalyzerError):
    """
    Raised when configuration is missing or invalid.

    Use this for:
    - Unknown AI provider tags
    - Score weights that are negative or do not sum to 1.0
    - Invalid image size or extension settings
    - Unreadable configuration files
    """

    default_error_code = ErrorCode.CONFIGURATION_ERROR
    default_message = "Invalid configuration"

    def __init__(
        self,
        message: Optional[str] = None,
        setting: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        details = details or {}
        if setting:
            details["setting"] = setting
        self.setting = setting
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            internal_message=internal_message,
        )


class ContentParseError(ContentAnalyzerError):
    """Raised when a content file cannot be read or parsed."""

    default_error_code = ErrorCode.CONTENT_PARSE_ERROR
    default_message = "Failed to parse content"

    def __init__(
        self,
        message: Optional[str] = None,
        source: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        details = details or {}
        if source:
            details["source"] = source
        self.source = source
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            internal_message=internal_message,
        )


class ImageError(ContentAnalyzerError):
    """Base class for image failures, carrying the offending path."""

    default_error_code = ErrorCode.IMAGE_ANALYSIS_ERROR
    default_message = "Image processing failed"

    def __init__(
        self,
        message: Optional[str] = None,
        path: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        details = details or {}
        if path:
            details["path"] = path
        self.path = path
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            internal_message=internal_message,
        )


class ImageValidationError(ImageError):
    """Raised when an image fails existence, extension or size checks."""

    default_error_code = ErrorCode.IMAGE_VALIDATION_ERROR
    default_message = "Image failed validation"


class ImageAnalysisError(ImageError):
    """Raised when an image cannot be decoded, or every image of a content fails."""

    default_error_code = ErrorCode.IMAGE_ANALYSIS_ERROR
    default_message = "Image analysis failed"


class ProviderError(ContentAnalyzerError):
    """
    Raised when a remote AI provider call fails.

    Scoring paths catch this and fall back to the local lexicon; only
    explicit actions such as content rewriting let it reach the caller.
    """

    default_error_code = ErrorCode.PROVIDER_ERROR
    default_message = "AI provider request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        provider: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        internal_message: Optional[str] = None,
    ):
        details = details or {}
        if provider:
            details["provider"] = provider
        self.provider = provider
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            internal_message=internal_message,
        )
