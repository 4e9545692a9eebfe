"""Build the enricher with cluster-backed collaborators for CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from release_view.core.helm_operator import HelmCliOperator
from release_view.core.k8s_client import K8sClient
from release_view.core.release_enricher import EventRecorder, ReleaseEnricher
from release_view.core.release_store import ReleaseStore
from release_view.core.repo_catalog import LocalRepoCatalog
from release_view.models.events import DeletionFailed, OperationFailed, OperationRejected

err_console = Console(stderr=True)


def build_enricher(
    context: str | None,
    k8s: K8sClient | None = None,
) -> tuple[ReleaseEnricher, EventRecorder]:
    recorder = EventRecorder()
    k8s = k8s or K8sClient(context=context)
    enricher = ReleaseEnricher(
        lister=ReleaseStore(k8s),
        catalog=LocalRepoCatalog(),
        operator=HelmCliOperator(kube_context=context),
        sink=recorder,
    )
    return enricher, recorder


def read_values(path: Path | None) -> str | None:
    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]Cannot read values file {path}: {e}[/red]")
        raise typer.Exit(code=1) from e


def fail_on_errors(ok: bool, recorder: EventRecorder) -> None:
    """Print error events and exit non-zero when an operation failed."""
    if ok:
        return
    for event in recorder.events:
        if isinstance(event, (DeletionFailed, OperationFailed, OperationRejected)):
            err_console.print(f"[red]{type(event.error).__name__}: {event.error}[/red]")
    raise typer.Exit(code=1)
