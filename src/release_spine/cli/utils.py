"""
CLI utility helpers - document loading and output formatting.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from release_spine.core.errors import ReleaseSpineError
from release_spine.core.settings import ReleaseSpineSettings
from release_spine.domains.azure_local.sources import DocumentSource
from release_spine.domains.azure_local.transformer import Release

console = Console()
err_console = Console(stderr=True)


# ── Document loading ─────────────────────────────────────────────────────


def load_documents(
    settings: ReleaseSpineSettings,
    html_path: Path | None,
    markdown_path: Path | None,
) -> tuple[str, str]:
    """Read both documents from disk, or fetch them when no paths are given."""
    if (html_path is None) != (markdown_path is None):
        err_console.print("[bold red]Error[/bold red]: --html and --markdown must be given together")
        raise typer.Exit(code=2)

    if html_path is not None and markdown_path is not None:
        return (
            html_path.read_text(encoding="utf-8"),
            markdown_path.read_text(encoding="utf-8"),
        )

    try:
        return DocumentSource(settings).fetch_all()
    except ReleaseSpineError as e:
        fail(e)


def fail(error: ReleaseSpineError) -> NoReturn:
    """Print a release-spine error and exit non-zero."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


# ── Output helpers ───────────────────────────────────────────────────────


def print_json(payload: dict[str, Any]) -> None:
    console.print_json(json.dumps(payload, default=str))


def _yes_no(value: bool) -> str:
    return "[green]yes[/green]" if value else "[dim]no[/dim]"


def print_releases(releases: list[Release], *, title: str = "Releases") -> None:
    """Render releases as a Rich table."""
    if not releases:
        console.print("[dim]No releases.[/dim]")
        return

    table = Table(title=title, show_lines=False, pad_edge=False)
    table.add_column("Version", no_wrap=True)
    table.add_column("Train")
    table.add_column("Type")
    table.add_column("OS Build")
    table.add_column("Available")
    table.add_column("Supported")
    table.add_column("End of Support")
    table.add_column("Baseline")
    table.add_column("Offline Bundle")

    for r in releases:
        table.add_row(
            r.version,
            r.release_train,
            r.build_type.value,
            r.os_build,
            r.availability_date.isoformat(),
            _yes_no(r.supported),
            r.end_of_support_date.isoformat() if r.end_of_support_date else "",
            _yes_no(r.baseline_release),
            _yes_no(r.solution_update.available),
        )
    console.print(table)
    console.print(f"\n[dim]{len(releases)} release(s)[/dim]")
