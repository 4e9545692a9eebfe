"""Interfaces the core expects from the cluster and chart catalog."""

from __future__ import annotations

from typing import Protocol

from release_view.models.chart import CatalogEntry, ChartVersion
from release_view.models.release import InstalledRelease


class ReleaseLister(Protocol):
    def list_releases(self, namespace: str, list_all: bool) -> list[InstalledRelease]: ...

    def get_release(self, name: str, namespace: str | None = None) -> InstalledRelease | None: ...


class ChartCatalog(Protocol):
    def query_catalog(self, chart_name: str, namespace: str) -> list[CatalogEntry]: ...


class ReleaseOperator(Protocol):
    def delete_release(self, name: str, namespace: str, purge: bool) -> None: ...

    def create_release(
        self,
        name: str,
        namespace: str,
        target_namespace: str,
        chart_version: ChartVersion,
        values: str | None = None,
    ) -> None: ...

    def upgrade_release(
        self,
        name: str,
        namespace: str,
        target_namespace: str,
        chart_version: ChartVersion,
        values: str | None = None,
    ) -> None: ...
