"""Update information models."""

from __future__ import annotations

from dataclasses import dataclass, field

from release_view.errors import InvalidVersion


@dataclass(frozen=True)
class RepositoryRef:
    name: str = ""
    url: str = ""


@dataclass(frozen=True)
class UpdateInfo:
    up_to_date: bool
    latest_version: str = ""
    repository: RepositoryRef = field(default_factory=RepositoryRef)
    error: InvalidVersion | None = None

    @classmethod
    def invalid(cls, raw: str) -> UpdateInfo:
        return cls(up_to_date=False, error=InvalidVersion(raw))

    @classmethod
    def no_candidates(cls) -> UpdateInfo:
        return cls(up_to_date=True)
