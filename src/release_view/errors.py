"""Error kinds surfaced by the release view core."""

from __future__ import annotations


class ReleaseViewError(Exception):
    """Base class for all release view errors."""


class InvalidVersion(ReleaseViewError):
    """A chart version string is not a valid semantic version."""

    def __init__(self, raw: str):
        super().__init__(f"Invalid Version: {raw}")
        self.raw = raw

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InvalidVersion) and other.raw == self.raw

    def __hash__(self) -> int:
        return hash((InvalidVersion, self.raw))


class UnprocessableEntity(ReleaseViewError):
    """The requested operation cannot be applied to the given target."""


class CollaboratorError(ReleaseViewError):
    """A lister, catalog or operator call failed."""
