"""
release-spine HTTP API.

FastAPI application exposing the normalized release data::

    GET /api/releases        {"releases": [...]}
    GET /api/releasetrains   {"releaseTrains": [...]}
    GET /health              liveness
    GET /                    plain-text banner

Build the app with :func:`release_spine.api.app.create_app`.
"""

from release_spine.api.app import create_app

__all__ = ["create_app"]
