"""
FastAPI application factory.

``create_app()`` wires middleware, routers and error handlers into a
single ``FastAPI`` instance. The settings and the document source are
stashed on ``app.state`` so every request shares one cache.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from release_spine import __version__
from release_spine.api.middleware.errors import (
    http_exception_handler,
    parse_error_handler,
    source_error_handler,
    unhandled_exception_handler,
)
from release_spine.api.middleware.request_id import RequestIDMiddleware
from release_spine.api.routers import health, release_trains, releases
from release_spine.core.errors import ParseError, SourceError, TransientError
from release_spine.core.logging import get_logger
from release_spine.core.settings import ReleaseSpineSettings, get_settings
from release_spine.domains.azure_local.sources import DocumentSource

logger = get_logger(__name__)


def create_app(
    settings: ReleaseSpineSettings | None = None,
    source: DocumentSource | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : ReleaseSpineSettings | None
        Override settings (useful for testing). When ``None`` the
        process-wide settings from :func:`get_settings` are used.
    source : DocumentSource | None
        Override the upstream document source. Tests pass a stub here.
    """
    settings = settings or get_settings()
    source = source or DocumentSource(settings)

    app = FastAPI(
        title=settings.api_title,
        version=__version__,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs",
        openapi_url=f"{settings.api_prefix}/openapi.json",
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.document_source = source

    # ── Middleware (outermost → innermost) ────────────────────────────
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
        max_age=86400,
    )

    # ── Exception handlers ───────────────────────────────────────────
    # Lookup follows the exception MRO, so ParseError wins over SourceError
    app.add_exception_handler(ParseError, parse_error_handler)
    app.add_exception_handler(SourceError, source_error_handler)
    app.add_exception_handler(TransientError, source_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    app.include_router(health.router, tags=["health"])
    app.include_router(releases.router, prefix=settings.api_prefix, tags=["releases"])
    app.include_router(release_trains.router, prefix=settings.api_prefix, tags=["release-trains"])

    logger.debug("app_created", prefix=settings.api_prefix, cors_origins=settings.cors_origins)
    return app
