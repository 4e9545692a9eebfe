"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from release_view.models.release import InstalledRelease
from release_view.models.resources import ClassificationResult, ResourceRef
from release_view.models.update import UpdateInfo

console = Console()


def _update_to_dict(info: UpdateInfo | None) -> dict[str, Any] | None:
    if info is None:
        return None
    data: dict[str, Any] = {
        "upToDate": info.up_to_date,
        "latestVersion": info.latest_version,
        "repository": {"name": info.repository.name, "url": info.repository.url},
    }
    if info.error is not None:
        data["error"] = str(info.error)
    return data


def _release_to_dict(r: InstalledRelease, info: UpdateInfo | None) -> dict[str, Any]:
    return {
        "releaseName": r.release_name,
        "namespace": r.namespace,
        "status": r.status.value,
        "revision": r.revision,
        "chart": r.chart_name,
        "chartVersion": r.chart_version,
        "appVersion": r.app_version,
        "updated": r.info.last_deployed,
        "updateInfo": _update_to_dict(info),
    }


def _dump(data: Any, fmt: str) -> None:
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2, default=str))
    else:
        console.print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))


def output_releases(
    releases: list[InstalledRelease],
    updates: dict[str, UpdateInfo],
    fmt: str,
) -> None:
    if fmt in ("json", "yaml"):
        _dump([_release_to_dict(r, updates.get(r.release_name)) for r in releases], fmt)
    else:
        from release_view.output.tables import release_list_table
        console.print(release_list_table(releases, updates))


def _ref_to_dict(ref: ResourceRef) -> dict[str, str]:
    return {"kind": ref.kind, "name": ref.name, "namespace": ref.namespace}


def output_resources(
    release: InstalledRelease,
    info: UpdateInfo | None,
    result: ClassificationResult,
    fmt: str,
    live: dict[ResourceRef, dict | None] | None = None,
) -> None:
    if fmt in ("json", "yaml"):
        resources: dict[str, Any] = {
            name: [_ref_to_dict(ref) for ref in refs]
            for name, refs in result.buckets().items()
            if name != "other"
        }
        resources["other"] = [{"kind": r.kind, "name": r.name} for r in result.other]
        data = _release_to_dict(release, info)
        data["notes"] = release.info.notes
        data["resources"] = resources
        _dump(data, fmt)
        return

    from release_view.output.tables import (
        notes_panel,
        other_resources_table,
        ref_table,
        release_info_panel,
        workload_table,
    )

    console.print(release_info_panel(release, info))
    if release.info.notes:
        console.print(notes_panel(release.info.notes))
    for title, refs in (
        ("Deployments", result.deployments),
        ("StatefulSets", result.stateful_sets),
        ("DaemonSets", result.daemon_sets),
    ):
        if refs:
            console.print(workload_table(title, refs, live))
    for title, refs in (
        ("Services", result.services),
        ("Ingresses", result.ingresses),
        ("Secrets", result.secrets),
    ):
        if refs:
            console.print(ref_table(title, refs))
    if result.other:
        console.print(other_resources_table(result.other))
    if not result.total:
        console.print("[dim]No resources found in manifest.[/dim]")
