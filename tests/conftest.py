# tests/conftest.py

"""
Shared pytest fixtures for release-spine tests.

This module provides:
- The two upstream documents as captured fixture files
- A frozen evaluation time for support-window assertions
- A stub document source for API and CLI tests
- Settings isolation between tests
"""

import os
from datetime import UTC, datetime
from pathlib import Path

import pytest

from release_spine.core.errors import ReleaseSpineError
from release_spine.core.settings import ReleaseSpineSettings, reset_settings
from release_spine.domains.azure_local.pipeline import build_releases

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "azure_local"

RELEASE_INFO_PATH = FIXTURES_DIR / "release_information.html"
SOLUTION_UPDATES_PATH = FIXTURES_DIR / "import_discover_updates_offline.md"

# Everything but 10.2411.0.24 is inside its support window at this time
FROZEN_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


class StubDocumentSource:
    """Stands in for DocumentSource; serves fixed text or raises a fixed error."""

    def __init__(self, html: str = "", markdown: str = "", error: Exception | None = None):
        self.html = html
        self.markdown = markdown
        self.error = error
        self.calls = 0

    def fetch_all(self) -> tuple[str, str]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.html, self.markdown


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    """Drop cached settings and any RELEASE_SPINE_* overrides from the environment."""
    for key in list(os.environ):
        if key.startswith("RELEASE_SPINE_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> ReleaseSpineSettings:
    return ReleaseSpineSettings(_env_file=None)


@pytest.fixture
def release_info_html() -> str:
    return RELEASE_INFO_PATH.read_text(encoding="utf-8")


@pytest.fixture
def solution_updates_markdown() -> str:
    return SOLUTION_UPDATES_PATH.read_text(encoding="utf-8")


@pytest.fixture
def now() -> datetime:
    return FROZEN_NOW


@pytest.fixture
def releases(release_info_html, solution_updates_markdown, settings):
    """Fixture documents run through the full pipeline at FROZEN_NOW."""
    return build_releases(release_info_html, solution_updates_markdown, now=FROZEN_NOW, settings=settings)


@pytest.fixture
def stub_source(release_info_html, solution_updates_markdown) -> StubDocumentSource:
    return StubDocumentSource(release_info_html, solution_updates_markdown)


@pytest.fixture
def failing_source():
    """Factory for a stub source that raises ``error`` on fetch."""

    def _make(error: ReleaseSpineError | Exception) -> StubDocumentSource:
        return StubDocumentSource(error=error)

    return _make
