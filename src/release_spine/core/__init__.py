"""
release-spine core primitives.

Cross-cutting pieces shared by the domain, API and CLI layers:
- logging: structlog configuration and get_logger()
- errors: typed error hierarchy with retry semantics
- settings: pydantic-settings configuration
- cache: in-memory TTL cache
- timestamps: UTC helpers
"""

from release_spine.core.errors import (
    ErrorCategory,
    NetworkError,
    ParseError,
    ReleaseSpineError,
    SourceError,
)
from release_spine.core.logging import configure_logging, get_logger
from release_spine.core.settings import ReleaseSpineSettings, get_settings

__all__ = [
    "ErrorCategory",
    "NetworkError",
    "ParseError",
    "ReleaseSpineError",
    "SourceError",
    "configure_logging",
    "get_logger",
    "ReleaseSpineSettings",
    "get_settings",
]
