"""Rich table builders for each command."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from release_view.models.release import InstalledRelease
from release_view.models.resources import Resource, ResourceRef
from release_view.models.update import UpdateInfo
from release_view.output.themes import styled_status, styled_update
from release_view.utils.version_compare import classify_update


def update_type(release: InstalledRelease, info: UpdateInfo | None) -> str:
    if info is None:
        return "unknown"
    if info.error is not None:
        return "invalid"
    if not info.latest_version:
        return "up-to-date"
    return classify_update(release.chart_version, info.latest_version)


def release_list_table(
    releases: list[InstalledRelease],
    updates: dict[str, UpdateInfo],
) -> Table:
    table = Table(title="Helm Releases", expand=True, show_lines=False)
    table.add_column("Namespace", style="blue", no_wrap=True)
    table.add_column("Release", style="bold white", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Chart Ver", style="magenta")
    table.add_column("App Ver", style="cyan")
    table.add_column("Latest", style="bold")
    table.add_column("Update", no_wrap=True)
    table.add_column("Repository", style="dim", max_width=30)

    for r in releases:
        info = updates.get(r.release_name)
        table.add_row(
            r.namespace,
            r.release_name,
            styled_status(r.status),
            r.chart_name,
            r.chart_version,
            r.app_version,
            info.latest_version if info and info.latest_version else "-",
            styled_update(update_type(r, info)),
            info.repository.name if info and info.repository.name else "-",
        )
    return table


# Status columns per workload kind: header -> field in the live .status
WORKLOAD_STATUS_COLUMNS: dict[str, dict[str, str]] = {
    "Deployments": {"DESIRED": "replicas", "UP-TO-DATE": "updatedReplicas", "AVAILABLE": "availableReplicas"},
    "StatefulSets": {"DESIRED": "replicas", "UP-TO-DATE": "updatedReplicas", "READY": "readyReplicas"},
    "DaemonSets": {"DESIRED": "currentNumberScheduled", "AVAILABLE": "numberReady"},
}


def workload_table(
    title: str,
    refs: list[ResourceRef],
    live: dict[ResourceRef, dict | None] | None = None,
) -> Table:
    columns = WORKLOAD_STATUS_COLUMNS.get(title, {})
    table = Table(title=title, expand=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("Namespace", style="blue")
    if live is not None:
        for header in columns:
            table.add_column(header, justify="right")

    for ref in refs:
        row = [ref.name, ref.namespace]
        if live is not None:
            status = (live.get(ref) or {}).get("status") or {}
            row.extend(str(status.get(key, "-")) for key in columns.values())
        table.add_row(*row)
    return table


def ref_table(title: str, refs: list[ResourceRef]) -> Table:
    table = Table(title=title, expand=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("Namespace", style="blue")
    table.add_column("API Version", style="dim")
    for ref in refs:
        table.add_row(ref.name, ref.namespace, ref.resource.api_version)
    return table


def other_resources_table(resources: list[Resource]) -> Table:
    table = Table(title="Other Resources", expand=True)
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="bold white", no_wrap=True)
    for res in resources:
        table.add_row(res.kind, res.name)
    return table


def release_info_panel(release: InstalledRelease, info: UpdateInfo | None) -> Panel:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Release", release.release_name)
    table.add_row("Namespace", release.namespace)
    table.add_row("Status", styled_status(release.status))
    table.add_row("Revision", str(release.revision))
    table.add_row("Chart", f"{release.chart_name}-{release.chart_version}")
    table.add_row("App Version", release.app_version or "-")
    table.add_row("Last Deployed", release.updated_short or "-")
    table.add_row("Update", styled_update(update_type(release, info)))
    if info is not None and info.error is not None:
        table.add_row("Update Error", str(info.error))
    elif info is not None and info.latest_version:
        repo = info.repository.name or "-"
        table.add_row("Latest", f"{info.latest_version} ({repo})")

    return Panel(table, title=f"[bold]Release: {release.release_name}[/bold]", border_style="blue")


def notes_panel(notes: str) -> Panel:
    return Panel(Text(notes), title="[bold]Notes[/bold]", border_style="green")
