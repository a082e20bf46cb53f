"""
CLI: ``release-spine serve`` - start the API server.
"""

from __future__ import annotations

import typer
import uvicorn

from release_spine.cli.utils import console
from release_spine.core.logging import configure_logging
from release_spine.core.settings import get_settings


def serve_command(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (default from settings)"),
) -> None:
    """Start the release-spine REST API server."""
    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port
    log_level = (log_level or settings.log_level).upper()
    configure_logging(level=log_level, json_format=settings.log_format == "json")

    console.print(f"[bold green]Starting release-spine API[/bold green] on {host}:{port}")
    uvicorn.run(
        "release_spine.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level.lower(),
    )
