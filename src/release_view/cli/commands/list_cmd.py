"""rview list - List Helm releases with update information."""

from __future__ import annotations

from contextlib import nullcontext
from typing import Optional

import typer
from rich.console import Console

from release_view.cli.options import ContextOption, NamespaceOption, OutputOption
from release_view.cli.wiring import build_enricher, fail_on_errors
from release_view.models.events import ReleaseListReceived, UpdateInfoReceived
from release_view.output.formatters import output_releases

console = Console()


def list_releases(
    output: str = OutputOption,
    namespace: str = NamespaceOption,
    context: Optional[str] = ContextOption,
    all_namespaces: bool = typer.Option(False, "--all-namespaces", "-A", help="List across all namespaces"),
) -> None:
    """List releases and check whether newer chart versions exist."""
    enricher, recorder = build_enricher(context)
    spinner = console.status("[bold cyan]Fetching releases…") if output == "table" else nullcontext()
    with spinner:
        ok = enricher.enrich(namespace, all_namespaces)
    fail_on_errors(ok, recorder)

    releases = []
    updates = {}
    for event in recorder.events:
        if isinstance(event, ReleaseListReceived):
            releases = list(event.releases)
        elif isinstance(event, UpdateInfoReceived):
            updates[event.release_name] = event.update_info

    if not releases and output == "table":
        console.print("[dim]No releases found.[/dim]")
        return
    output_releases(releases, updates, output)
