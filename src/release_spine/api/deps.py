"""
FastAPI dependency injection - settings and the document source.

Both live on ``app.state`` (set by ``create_app``) so one app instance
shares a single cache across requests.

Usage in routers::

    from release_spine.api.deps import Settings, Source

    @router.get("/releases")
    def list_releases(source: Source, settings: Settings):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from release_spine.core.settings import ReleaseSpineSettings
from release_spine.domains.azure_local.sources import DocumentSource


def get_settings(request: Request) -> ReleaseSpineSettings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_document_source(request: Request) -> DocumentSource:
    """Shared document source (and its cache)."""
    return request.app.state.document_source


Settings = Annotated[ReleaseSpineSettings, Depends(get_settings)]
Source = Annotated[DocumentSource, Depends(get_document_source)]
