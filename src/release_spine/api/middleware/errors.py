"""
Error handlers - map release-spine errors to ``{error, timestamp}`` bodies.

    SourceError / TransientError   502  upstream documents unavailable
    ParseError                     500  documents retrieved but unusable
    HTTPException                  its own status (404, 405, ...)
    anything else                  500
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from release_spine.core.errors import ParseError, ReleaseSpineError, categorize_error, is_retryable
from release_spine.core.logging import get_logger
from release_spine.core.timestamps import to_iso8601, utc_now

logger = get_logger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch release data from external sources"
PARSE_FAILED_MESSAGE = "Failed to parse release data"
INTERNAL_ERROR_MESSAGE = "Internal server error"

_HTTP_MESSAGES: dict[int, str] = {
    404: "Not found",
    405: "Method not allowed",
}


def error_response(message: str, status: int) -> JSONResponse:
    """Build the JSON error body shared by every failure path."""
    return JSONResponse(
        status_code=status,
        content={"error": message, "timestamp": to_iso8601(utc_now())},
    )


async def source_error_handler(request: Request, exc: ReleaseSpineError) -> JSONResponse:
    """Upstream retrieval failed (network, timeout, non-2xx)."""
    logger.warning("upstream_fetch_failed", path=request.url.path, **exc.to_dict())
    return error_response(FETCH_FAILED_MESSAGE, 502)


async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    """Documents were retrieved but could not be turned into releases."""
    logger.error("release_data_parse_failed", path=request.url.path, **exc.to_dict())
    return error_response(PARSE_FAILED_MESSAGE, 500)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors keep their status but use the shared error body."""
    message = _HTTP_MESSAGES.get(exc.status_code, str(exc.detail))
    response = error_response(message, exc.status_code)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions - returns 500."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        category=categorize_error(exc).value,
        retryable=is_retryable(exc),
    )
    return error_response(INTERNAL_ERROR_MESSAGE, 500)
