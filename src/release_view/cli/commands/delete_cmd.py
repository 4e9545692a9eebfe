"""rview delete <release> - Uninstall a release."""

from __future__ import annotations

from typing import Optional

import typer

from release_view.cli.options import ContextOption, NamespaceOption
from release_view.cli.wiring import build_enricher, fail_on_errors


def delete(
    release: str = typer.Argument(help="Release name"),
    namespace: str = NamespaceOption,
    context: Optional[str] = ContextOption,
    purge: bool = typer.Option(False, "--purge", help="Also remove the release history"),
) -> None:
    """Delete a release."""
    enricher, recorder = build_enricher(context)
    fail_on_errors(enricher.delete_release(release, namespace, purge), recorder)
    typer.echo(f"Release '{release}' deleted.")
