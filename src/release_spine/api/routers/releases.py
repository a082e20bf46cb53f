"""
Releases router.

Endpoints:
    GET /releases    Filtered list of releases, newest first

Query parameters (all optional, combined with AND):
    supported, releaseTrain, baselineRelease, buildType, version,
    osBuild, newDeployments, solutionUpdate, latest
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from release_spine.api.deps import Settings, Source
from release_spine.api.schemas.common import ErrorResponse
from release_spine.api.schemas.releases import ReleasesResponse
from release_spine.core.logging import get_logger
from release_spine.domains.azure_local.filters import filter_releases, parse_releases_query
from release_spine.domains.azure_local.pipeline import build_releases

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/releases",
    response_model=ReleasesResponse,
    response_model_exclude_none=True,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def list_releases(request: Request, source: Source, settings: Settings) -> ReleasesResponse:
    """List releases matching the query string filters."""
    query = parse_releases_query(request.query_params)

    html, markdown = source.fetch_all()
    releases = filter_releases(build_releases(html, markdown, settings=settings), query)

    logger.info("releases_served", count=len(releases))
    return ReleasesResponse.from_domain(releases)
