"""Manifest resource models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from release_view.models import ResourceKind


@dataclass(frozen=True)
class Resource:
    """A single concrete resource decoded from a manifest document."""

    kind: str
    body: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def tag(self) -> ResourceKind:
        return ResourceKind.from_str(self.kind)

    @property
    def name(self) -> str:
        metadata = self.body.get("metadata") or {}
        return metadata.get("name", "")

    @property
    def api_version(self) -> str:
        return self.body.get("apiVersion", "")


@dataclass(frozen=True)
class ResourceCollection:
    """A ``List``-style wrapper whose items are further resources."""

    kind: str
    items: tuple[ResourceOrCollection, ...] = ()


ResourceOrCollection = Union[Resource, ResourceCollection]


@dataclass(frozen=True)
class ResourceRef:
    """A resource bound to the namespace its owning release runs in."""

    resource: Resource
    namespace: str

    @property
    def kind(self) -> str:
        return self.resource.kind

    @property
    def name(self) -> str:
        return self.resource.name


@dataclass
class ClassificationResult:
    deployments: list[ResourceRef] = field(default_factory=list)
    stateful_sets: list[ResourceRef] = field(default_factory=list)
    daemon_sets: list[ResourceRef] = field(default_factory=list)
    services: list[ResourceRef] = field(default_factory=list)
    ingresses: list[ResourceRef] = field(default_factory=list)
    secrets: list[ResourceRef] = field(default_factory=list)
    # No live status is tracked for these, so they are kept unbound.
    other: list[Resource] = field(default_factory=list)

    def extend(self, other: ClassificationResult) -> None:
        """Concatenate every bucket of ``other`` onto this result."""
        self.deployments.extend(other.deployments)
        self.stateful_sets.extend(other.stateful_sets)
        self.daemon_sets.extend(other.daemon_sets)
        self.services.extend(other.services)
        self.ingresses.extend(other.ingresses)
        self.secrets.extend(other.secrets)
        self.other.extend(other.other)

    def buckets(self) -> dict[str, list]:
        return {
            "deployments": self.deployments,
            "stateful_sets": self.stateful_sets,
            "daemon_sets": self.daemon_sets,
            "services": self.services,
            "ingresses": self.ingresses,
            "secrets": self.secrets,
            "other": self.other,
        }

    @property
    def total(self) -> int:
        return sum(len(b) for b in self.buckets().values())
