"""Chart metadata and catalog models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChartMetadata:
    name: str = ""
    version: str = ""
    app_version: str = ""
    description: str = ""
    home: str = ""
    icon: str = ""
    sources: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, d: dict) -> ChartMetadata:
        if not d:
            return cls()
        return cls(
            name=d.get("name", ""),
            version=d.get("version", ""),
            app_version=d.get("appVersion", ""),
            description=d.get("description", ""),
            home=d.get("home", ""),
            icon=d.get("icon", ""),
            sources=tuple(d.get("sources") or ()),
        )


@dataclass(frozen=True)
class CatalogEntry:
    """Latest published version of a chart in one repository."""

    repository_name: str
    latest_version: str
    repository_url: str = ""


@dataclass(frozen=True)
class ChartVersion:
    """A specific chart version to install or upgrade to."""

    chart_name: str
    repository_name: str
    version: str
    repository_url: str = ""

    @property
    def reference(self) -> str:
        if not self.repository_name:
            return self.chart_name
        return f"{self.repository_name}/{self.chart_name}"

    @classmethod
    def from_reference(cls, reference: str, version: str) -> ChartVersion:
        """Build from a ``repo/chart`` reference as accepted by helm."""
        repo, _, chart = reference.rpartition("/")
        return cls(chart_name=chart, repository_name=repo, version=version)
