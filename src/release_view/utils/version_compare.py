"""Semver comparison utilities."""

from __future__ import annotations

from semver import Version


def parse_version(v: str) -> Version | None:
    """Parse a strict semantic version, returning None on failure."""
    if not isinstance(v, str):
        return None
    v = v.strip()
    # Tolerate a single leading 'v' as helm and npm do
    if v.startswith("v"):
        v = v[1:]
    try:
        return Version.parse(v)
    except ValueError:
        return None


def classify_update(current: str, latest: str) -> str:
    """Classify the update type between two version strings.

    Returns: "major", "minor", "patch", "up-to-date", or "unknown".
    """
    cur = parse_version(current)
    lat = parse_version(latest)

    if cur is None or lat is None:
        return "unknown"
    if lat <= cur:
        return "up-to-date"
    if lat.major > cur.major:
        return "major"
    if lat.minor > cur.minor:
        return "minor"
    return "patch"


def latest_of(versions: list[str]) -> str | None:
    """Return the highest parseable version in ``versions``, or None."""
    best: Version | None = None
    best_raw: str | None = None
    for raw in versions:
        parsed = parse_version(raw)
        if parsed is None:
            continue
        if best is None or parsed > best:
            best, best_raw = parsed, raw
    return best_raw
