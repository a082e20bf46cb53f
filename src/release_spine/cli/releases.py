"""
CLI: ``release-spine releases`` and ``release-spine trains``.

Both commands read the two documents from ``--html``/``--markdown`` files
when given, otherwise fetch them from the configured upstream URLs.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import typer

from release_spine.api.schemas.releases import ReleasesResponse, ReleaseTrainsResponse
from release_spine.cli.utils import console, fail, load_documents, print_json, print_releases
from release_spine.core.errors import ReleaseSpineError
from release_spine.core.settings import get_settings
from release_spine.domains.azure_local.calculations import ReleaseTrain
from release_spine.domains.azure_local.filters import (
    ReleasesQuery,
    ReleaseTrainsQuery,
    filter_release_trains,
    filter_releases,
)
from release_spine.domains.azure_local.pipeline import build_release_trains, build_releases
from release_spine.domains.azure_local.schema import BuildType

HTML_OPTION = typer.Option(None, "--html", exists=True, dir_okay=False, help="Release information HTML file")
MARKDOWN_OPTION = typer.Option(None, "--markdown", exists=True, dir_okay=False, help="Offline updates Markdown file")
AS_OF_OPTION = typer.Option(None, "--as-of", help="Evaluate support as of this time (default: now, UTC)")


def releases_command(
    html: Path | None = HTML_OPTION,
    markdown: Path | None = MARKDOWN_OPTION,
    supported: bool | None = typer.Option(None, "--supported/--unsupported", help="Filter by support status"),
    release_train: str | None = typer.Option(None, "--train", "-t", help="Release train, e.g. 2505"),
    baseline: bool | None = typer.Option(None, "--baseline/--no-baseline", help="Filter baseline releases"),
    build_type: BuildType | None = typer.Option(None, "--build-type", help="Feature or Cumulative"),
    release_version: str | None = typer.Option(None, "--release-version", help="Exact version string"),
    os_build: str | None = typer.Option(None, "--os-build", help="Exact OS build"),
    new_deployments: bool | None = typer.Option(
        None, "--new-deployments/--existing-deployments", help="Filter by deployment section"
    ),
    solution_update: bool | None = typer.Option(
        None, "--solution-update/--no-solution-update", help="Filter by offline bundle availability"
    ),
    latest: bool = typer.Option(False, "--latest", help="Only the most recent matching release"),
    as_of: datetime | None = AS_OF_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List Azure Local releases."""
    settings = get_settings()
    html_text, markdown_text = load_documents(settings, html, markdown)

    query = ReleasesQuery(
        supported=supported,
        release_train=release_train,
        baseline_release=baseline,
        build_type=build_type,
        version=release_version,
        os_build=os_build,
        new_deployments=new_deployments,
        solution_update=solution_update,
        latest=latest or None,
    )

    try:
        releases = build_releases(html_text, markdown_text, now=as_of, settings=settings)
    except ReleaseSpineError as e:
        fail(e)
    releases = filter_releases(releases, query)

    if as_json:
        response = ReleasesResponse.from_domain(releases)
        print_json(response.model_dump(mode="json", by_alias=True, exclude_none=True))
        return

    print_releases(releases)


def trains_command(
    html: Path | None = HTML_OPTION,
    markdown: Path | None = MARKDOWN_OPTION,
    supported: bool | None = typer.Option(None, "--supported/--unsupported", help="Filter by support status"),
    release_train: str | None = typer.Option(None, "--train", "-t", help="Release train, e.g. 2505"),
    latest: bool = typer.Option(False, "--latest", help="Only the highest-numbered matching train"),
    as_of: datetime | None = AS_OF_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List Azure Local release trains."""
    settings = get_settings()
    html_text, markdown_text = load_documents(settings, html, markdown)

    query = ReleaseTrainsQuery(supported=supported, release_train=release_train, latest=latest or None)

    try:
        trains = build_release_trains(html_text, markdown_text, now=as_of, settings=settings)
    except ReleaseSpineError as e:
        fail(e)
    trains = filter_release_trains(trains, query)

    if as_json:
        response = ReleaseTrainsResponse.from_domain(trains)
        print_json(response.model_dump(mode="json", by_alias=True))
        return

    _print_trains(trains)


def _print_trains(trains: list[ReleaseTrain]) -> None:
    if not trains:
        console.print("[dim]No release trains.[/dim]")
        return
    for train in trains:
        status = "[green]supported[/green]" if train.supported else "[dim]out of support[/dim]"
        console.print(f"  [cyan]{train.release_train}[/cyan]  {status}")
