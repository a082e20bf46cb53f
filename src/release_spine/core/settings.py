"""Configuration management using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReleaseSpineSettings(BaseSettings):
    """Application settings loaded from ``RELEASE_SPINE_*`` environment variables.

    Order of precedence (highest -> lowest):
        1. Environment variables (``RELEASE_SPINE_API_PREFIX``, etc.)
        2. ``.env`` file
        3. Defaults below
    """

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Upstream documents ───────────────────────────────────────────────
    release_info_url: str = Field(
        default="https://learn.microsoft.com/en-us/azure/azure-local/release-information-23h2",
        description="HTML release table",
    )
    solution_updates_url: str = Field(
        default=(
            "https://raw.githubusercontent.com/MicrosoftDocs/azure-stack-docs/refs/heads/main/"
            "azure-local/update/import-discover-updates-offline-23h2.md"
        ),
        description="Markdown solution update table",
    )
    release_info_ttl_seconds: int = Field(default=3600, ge=0)
    solution_updates_ttl_seconds: int = Field(default=1800, ge=0)
    fetch_timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="Azure Local Releases API Bot")

    # ── URL normalization ────────────────────────────────────────────────
    docs_origin: str = Field(default="https://learn.microsoft.com")
    docs_base_path: str = Field(default="https://learn.microsoft.com/en-us/azure/azure-local/")

    # ── Classification ───────────────────────────────────────────────────
    support_window_days: int = Field(default=180, ge=0)
    build_policy: str = Field(default="earliest-in-train")

    # ── API ──────────────────────────────────────────────────────────────
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8080)
    api_prefix: str = Field(default="/api")
    api_title: str = Field(default="Azure Local Releases API")
    cors_origins: list[str] = Field(default=["*"])
    debug: bool = Field(default=False)

    # ── Logging ──────────────────────────────────────────────────────────
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"


_settings: ReleaseSpineSettings | None = None


def get_settings() -> ReleaseSpineSettings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = ReleaseSpineSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
