"""
End-to-end composition: documents in, releases and release trains out.

    html ──► parse_release_info ──────┐
                                      ├─► transform_releases ─► transform_release_trains
    markdown ─► parse_solution_updates┘

Each stage is pure; this module only threads settings through and turns
unexpected failures into ParseError tagged with the failing stage.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TypeVar

from release_spine.core.errors import ParseError, ReleaseSpineError
from release_spine.core.logging import get_logger
from release_spine.core.settings import ReleaseSpineSettings, get_settings
from release_spine.domains.azure_local.calculations import ReleaseTrain, transform_release_trains
from release_spine.domains.azure_local.connector import parse_release_info, parse_solution_updates
from release_spine.domains.azure_local.schema import DOMAIN
from release_spine.domains.azure_local.transformer import (
    Release,
    resolve_build_policy,
    transform_releases,
)

logger = get_logger(__name__)

T = TypeVar("T")


def build_releases(
    html: str,
    markdown: str,
    *,
    now: datetime | None = None,
    settings: ReleaseSpineSettings | None = None,
) -> list[Release]:
    """Parse both documents and return canonical releases, newest first."""
    settings = settings or get_settings()
    classify_build = resolve_build_policy(settings.build_policy)

    raw_releases = _run_stage(
        "parse_release_info",
        lambda: parse_release_info(
            html,
            origin=settings.docs_origin,
            base_path=settings.docs_base_path,
        ),
    )
    updates = _run_stage("parse_solution_updates", lambda: parse_solution_updates(markdown))
    releases = _run_stage(
        "transform_releases",
        lambda: transform_releases(
            raw_releases,
            updates,
            now=now,
            classify_build=classify_build,
            support_window_days=settings.support_window_days,
        ),
    )

    logger.info(
        "releases_built",
        domain=DOMAIN,
        raw_releases=len(raw_releases),
        solution_updates=len(updates),
        releases=len(releases),
    )
    return releases


def build_release_trains(
    html: str,
    markdown: str,
    *,
    now: datetime | None = None,
    settings: ReleaseSpineSettings | None = None,
) -> list[ReleaseTrain]:
    """Parse both documents and return release trains, highest first."""
    releases = build_releases(html, markdown, now=now, settings=settings)
    return _run_stage("transform_release_trains", lambda: transform_release_trains(releases))


def _run_stage(stage: str, func: Callable[[], T]) -> T:
    try:
        return func()
    except ReleaseSpineError:
        raise
    except Exception as e:
        logger.error("pipeline_stage_failed", stage=stage, error=str(e), error_type=type(e).__name__)
        raise ParseError(f"Failed to process release data at {stage}", cause=e).with_context(
            stage=stage
        ) from e
