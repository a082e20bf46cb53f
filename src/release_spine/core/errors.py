"""
Structured error types for release-spine.

A small typed hierarchy that carries what the serving layer needs to pick
a status code and what the logs need to explain a failure:

    ReleaseSpineError  (category, retryable, retry_after, context, cause)
    ├── TransientError      retryable, NETWORK
    │   ├── NetworkError
    │   └── TimeoutError
    ├── SourceError         SOURCE   (upstream document could not be retrieved)
    │   ├── SourceNotFoundError
    │   ├── SourceUnavailableError   retryable
    │   └── ParseError      PARSE    (document retrieved but unusable)
    └── ConfigError         CONFIG

The extraction core itself never raises for malformed documents; rows
that fail their pattern are dropped. These errors belong to retrieval
and to the pipeline wrapper around the core.

Usage:
    from release_spine.core.errors import NetworkError, SourceError

    try:
        response = client.get(url)
    except httpx.TransportError as e:
        raise NetworkError("Upstream unreachable", cause=e).with_context(url=url)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    NETWORK = "NETWORK"
    SOURCE = "SOURCE"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured context attached to an error.

    Attributes:
        source_name: Logical document name (e.g., "release-info")
        url: URL that was being accessed
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    source_name: str | None = None
    url: str | None = None
    http_status: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        for key in ["source_name", "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ReleaseSpineError(Exception):
    """
    Base exception for all release-spine errors.

    Subclasses set ``default_category`` and ``default_retryable``; callers
    may override either per instance.

    Examples:
        >>> error = ReleaseSpineError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(url="https://learn.microsoft.com").context.url
        'https://learn.microsoft.com'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        retry_after: int | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.retry_after = retry_after
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ReleaseSpineError:
        """
        Add context to this error (fluent API).

        Known ErrorContext fields are set directly; anything else lands in
        ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.retry_after is not None:
            result["retry_after"] = self.retry_after
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSIENT ERRORS (Usually Retryable)
# =============================================================================


class TransientError(ReleaseSpineError):
    """Temporary error that may succeed on retry."""

    default_category = ErrorCategory.NETWORK
    default_retryable = True


class NetworkError(TransientError):
    """Network-related transient error."""

    default_category = ErrorCategory.NETWORK


class TimeoutError(TransientError):
    """Operation timed out."""

    default_category = ErrorCategory.NETWORK


# =============================================================================
# SOURCE ERRORS
# =============================================================================


class SourceError(ReleaseSpineError):
    """
    Error from an upstream document source.

    Default not retryable (e.g., 404 on the documentation page).
    """

    default_category = ErrorCategory.SOURCE
    default_retryable = False


class SourceNotFoundError(SourceError):
    """Source document not found."""


class SourceUnavailableError(SourceError):
    """Source temporarily unavailable (5xx upstream)."""

    default_retryable = True


class ParseError(SourceError):
    """Error turning a retrieved document into releases."""

    default_category = ErrorCategory.PARSE
    default_retryable = False


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(ReleaseSpineError):
    """Invalid or missing configuration."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, ReleaseSpineError):
        return error.retryable
    return isinstance(error, (ConnectionError, OSError))


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, ReleaseSpineError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.NETWORK
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ReleaseSpineError",
    "TransientError",
    "NetworkError",
    "TimeoutError",
    "SourceError",
    "SourceNotFoundError",
    "SourceUnavailableError",
    "ParseError",
    "ConfigError",
    "is_retryable",
    "categorize_error",
]
