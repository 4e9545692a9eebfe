"""rview resources <release> - Show a release, its update info and its resources."""

from __future__ import annotations

from typing import Optional

import typer
from kubernetes.client import ApiException

from release_view.cli.options import ContextOption, NamespaceOption, OutputOption
from release_view.cli.wiring import build_enricher, err_console, fail_on_errors
from release_view.core.k8s_client import K8sClient
from release_view.core.manifest_classifier import classify_release
from release_view.models.events import UpdateInfoReceived
from release_view.output.formatters import output_resources


def resources(
    release: str = typer.Argument(help="Release name"),
    output: str = OutputOption,
    namespace: str = NamespaceOption,
    context: Optional[str] = ContextOption,
    live: bool = typer.Option(False, "--live", help="Fetch live workload status from the cluster"),
) -> None:
    """Show a release with its update info and classify its resources by kind."""
    k8s = K8sClient(context=context)
    enricher, recorder = build_enricher(context, k8s=k8s)
    rel = enricher.enrich_release(release, namespace)
    fail_on_errors(rel is not None, recorder)

    info = next(
        (e.update_info for e in recorder.events if isinstance(e, UpdateInfoReceived)),
        None,
    )
    result = classify_release(rel)
    statuses = None
    if live:
        statuses = {}
        for ref in [*result.deployments, *result.stateful_sets, *result.daemon_sets]:
            try:
                statuses[ref] = k8s.read_live(ref)
            except ApiException as e:
                err_console.print(f"[yellow]Cannot read {ref.kind} {ref.name}: {e.reason}[/yellow]")
                statuses[ref] = None
    output_resources(rel, info, result, output, live=statuses)
