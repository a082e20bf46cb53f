"""
Release trains router.

Endpoints:
    GET /releasetrains    Filtered list of release trains, highest first

Query parameters: supported, releaseTrain, latest
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from release_spine.api.deps import Settings, Source
from release_spine.api.schemas.common import ErrorResponse
from release_spine.api.schemas.releases import ReleaseTrainsResponse
from release_spine.core.logging import get_logger
from release_spine.domains.azure_local.filters import (
    filter_release_trains,
    parse_release_trains_query,
)
from release_spine.domains.azure_local.pipeline import build_release_trains

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/releasetrains",
    response_model=ReleaseTrainsResponse,
    responses={500: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def list_release_trains(request: Request, source: Source, settings: Settings) -> ReleaseTrainsResponse:
    """List release trains matching the query string filters."""
    query = parse_release_trains_query(request.query_params)

    html, markdown = source.fetch_all()
    trains = filter_release_trains(build_release_trains(html, markdown, settings=settings), query)

    logger.info("release_trains_served", count=len(trains))
    return ReleaseTrainsResponse.from_domain(trains)
