"""Status and update color maps."""

from release_view.models.release import ReleaseStatus

STATUS_COLORS: dict[ReleaseStatus, str] = {
    ReleaseStatus.DEPLOYED: "green",
    ReleaseStatus.FAILED: "red bold",
    ReleaseStatus.SUPERSEDED: "dim",
    ReleaseStatus.PENDING_INSTALL: "yellow",
    ReleaseStatus.PENDING_UPGRADE: "yellow",
    ReleaseStatus.PENDING_ROLLBACK: "yellow",
    ReleaseStatus.UNINSTALLING: "magenta",
    ReleaseStatus.UNINSTALLED: "dim",
    ReleaseStatus.UNKNOWN: "red",
}

UPDATE_COLORS: dict[str, str] = {
    "major": "red bold",
    "minor": "yellow",
    "patch": "green",
    "up-to-date": "dim",
    "unknown": "dim",
    "invalid": "red",
}


def styled_status(status: ReleaseStatus) -> str:
    color = STATUS_COLORS.get(status, "white")
    return f"[{color}]{status.value}[/{color}]"


def styled_update(update_type: str) -> str:
    color = UPDATE_COLORS.get(update_type, "white")
    return f"[{color}]{update_type}[/{color}]"
