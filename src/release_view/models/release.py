"""Installed release models."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

from release_view.models.chart import ChartMetadata


class ReleaseStatus(enum.Enum):
    DEPLOYED = "deployed"
    FAILED = "failed"
    SUPERSEDED = "superseded"
    PENDING_INSTALL = "pending-install"
    PENDING_UPGRADE = "pending-upgrade"
    PENDING_ROLLBACK = "pending-rollback"
    UNINSTALLING = "uninstalling"
    UNINSTALLED = "uninstalled"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, s: str) -> ReleaseStatus:
        for member in cls:
            if member.value == s:
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class ReleaseInfo:
    first_deployed: str = ""
    last_deployed: str = ""
    status: ReleaseStatus = ReleaseStatus.UNKNOWN
    description: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> ReleaseInfo:
        if not d:
            return cls()
        status = d.get("status", "unknown")
        notes = d.get("notes", "")
        # The API payload nests status as {"code": ..., "notes": ...}
        if isinstance(status, dict):
            notes = status.get("notes", notes)
            status = status.get("code", "unknown")
        return cls(
            first_deployed=d.get("first_deployed", ""),
            last_deployed=d.get("last_deployed", ""),
            status=ReleaseStatus.from_str(str(status).lower()),
            description=d.get("description", ""),
            notes=notes,
        )


@dataclass(frozen=True)
class InstalledRelease:
    """Snapshot of a release as returned by one listing call."""

    release_name: str = ""
    namespace: str = ""
    chart_metadata: ChartMetadata = field(default_factory=ChartMetadata)
    manifest: str = ""
    info: ReleaseInfo = field(default_factory=ReleaseInfo)
    revision: int = 0

    @property
    def key(self) -> tuple[str, str]:
        return (self.release_name, self.namespace)

    @property
    def chart_name(self) -> str:
        return self.chart_metadata.name

    @property
    def chart_version(self) -> str:
        return self.chart_metadata.version

    @property
    def app_version(self) -> str:
        return self.chart_metadata.app_version

    @property
    def status(self) -> ReleaseStatus:
        return self.info.status

    @property
    def updated_short(self) -> str:
        """Return a human-readable short timestamp."""
        raw = self.info.last_deployed
        if not raw:
            return ""
        try:
            dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            return dt.strftime("%Y-%m-%d %H:%M:%S")
        except (ValueError, AttributeError):
            return raw[:19] if len(raw) > 19 else raw

    @classmethod
    def from_dict(cls, d: dict, namespace: str = "") -> InstalledRelease:
        """Build a release from a Helm storage payload or an API payload.

        Storage payloads carry ``name`` and ``chart.metadata``; API payloads
        carry ``releaseName`` and ``chartMetadata``. ``namespace`` is used when
        the payload has none.
        """
        if "chartMetadata" in d:
            chart_raw = d.get("chartMetadata") or {}
        else:
            chart_raw = (d.get("chart") or {}).get("metadata", {})
        return cls(
            release_name=d.get("releaseName") or d.get("name", ""),
            namespace=d.get("namespace") or namespace,
            chart_metadata=ChartMetadata.from_dict(chart_raw),
            manifest=d.get("manifest", "") or "",
            info=ReleaseInfo.from_dict(d.get("info") or {}),
            revision=d.get("version", 0) or 0,
        )
