"""
Root Typer application for the release-spine CLI.

    release-spine releases [--html FILE --markdown FILE] [filters] [--json]
    release-spine trains   [--html FILE --markdown FILE] [filters] [--json]
    release-spine serve    [--host HOST] [--port PORT]
"""

from __future__ import annotations

import sys

import typer
from typer import Typer

from release_spine import __version__
from release_spine.cli.releases import releases_command, trains_command
from release_spine.cli.serve import serve_command
from release_spine.core.logging import configure_logging
from release_spine.core.settings import get_settings

app = Typer(
    name="release-spine",
    help="release-spine - Azure Local release metadata, normalized.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"release-spine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline progress to stderr."),
) -> None:
    """release-spine CLI - query Azure Local releases and serve the API."""
    settings = get_settings()
    configure_logging(
        level="DEBUG" if verbose else "WARNING",
        json_format=settings.log_format == "json",
        stream=sys.stderr,
    )


# ── Commands ─────────────────────────────────────────────────────────────

app.command("releases", help="List releases.")(releases_command)
app.command("trains", help="List release trains.")(trains_command)
app.command("serve", help="Start the API server.")(serve_command)
