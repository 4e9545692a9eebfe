"""rview deploy / rview upgrade - Install a chart or upgrade a release."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from release_view.cli.options import ContextOption, NamespaceOption, ValuesOption
from release_view.cli.wiring import build_enricher, fail_on_errors, read_values
from release_view.models.chart import ChartVersion


def deploy(
    chart: str = typer.Argument(help="Chart reference, e.g. bitnami/nginx"),
    version: str = typer.Argument(help="Chart version"),
    release: str = typer.Argument(help="Release name"),
    namespace: str = NamespaceOption,
    context: Optional[str] = ContextOption,
    values: Optional[Path] = ValuesOption,
) -> None:
    """Deploy a chart as a new release."""
    enricher, recorder = build_enricher(context)
    chart_version = ChartVersion.from_reference(chart, version)
    ok = enricher.deploy_chart(chart_version, release, namespace, read_values(values))
    fail_on_errors(ok, recorder)
    typer.echo(f"Release '{release}' deployed from {chart_version.reference} {version}.")


def upgrade(
    chart: str = typer.Argument(help="Chart reference, e.g. bitnami/nginx"),
    version: str = typer.Argument(help="Chart version"),
    release: str = typer.Argument(help="Release name"),
    namespace: str = NamespaceOption,
    context: Optional[str] = ContextOption,
    values: Optional[Path] = ValuesOption,
) -> None:
    """Upgrade an existing release to another chart version."""
    enricher, recorder = build_enricher(context)
    chart_version = ChartVersion.from_reference(chart, version)
    ok = enricher.upgrade_release(chart_version, release, namespace, read_values(values))
    fail_on_errors(ok, recorder)
    typer.echo(f"Release '{release}' upgraded to {chart_version.reference} {version}.")
