"""Health and banner endpoints, mounted at the root (no API prefix)."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from release_spine import __version__
from release_spine.api.schemas.common import HealthResponse
from release_spine.core.timestamps import to_iso8601, utc_now

BANNER = "Azure Local Releases API"

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Liveness check; does not touch the upstream documents."""
    return HealthResponse(status="healthy", timestamp=to_iso8601(utc_now()), version=__version__)


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def banner() -> str:
    return BANNER
