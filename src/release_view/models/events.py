"""Events emitted by the release enricher."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from release_view.models.release import InstalledRelease
from release_view.models.update import UpdateInfo


@dataclass(frozen=True)
class ListingStarted:
    list_all: bool


@dataclass(frozen=True)
class ReleaseListReceived:
    releases: tuple[InstalledRelease, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ReleaseReceived:
    release: InstalledRelease


@dataclass(frozen=True)
class UpdateInfoRequested:
    pass


@dataclass(frozen=True)
class UpdateInfoReceived:
    release_name: str
    update_info: UpdateInfo


@dataclass(frozen=True)
class DeletionFailed:
    error: BaseException


@dataclass(frozen=True)
class OperationRejected:
    error: BaseException


@dataclass(frozen=True)
class OperationFailed:
    error: BaseException


Event = Union[
    ListingStarted,
    ReleaseListReceived,
    ReleaseReceived,
    UpdateInfoRequested,
    UpdateInfoReceived,
    DeletionFailed,
    OperationRejected,
    OperationFailed,
]
