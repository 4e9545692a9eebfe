"""Compare an installed chart version against catalog candidates."""

from __future__ import annotations

import logging

from release_view.models.chart import CatalogEntry
from release_view.models.release import InstalledRelease
from release_view.models.update import RepositoryRef, UpdateInfo
from release_view.utils.version_compare import parse_version

logger = logging.getLogger(__name__)


def resolve(release: InstalledRelease, candidates: list[CatalogEntry]) -> UpdateInfo:
    """Compute update info for one release.

    An unparsable installed version wins over every other outcome. With no
    candidates the release is assumed current. Otherwise the first candidate
    is used as is; the caller is responsible for any ordering.
    """
    installed_raw = release.chart_version
    installed = parse_version(installed_raw)
    if installed is None:
        logger.debug("Release %s has invalid chart version %r", release.release_name, installed_raw)
        return UpdateInfo.invalid(installed_raw)

    if not candidates:
        return UpdateInfo.no_candidates()

    candidate = candidates[0]
    latest = parse_version(candidate.latest_version)
    if latest is None:
        logger.debug(
            "Catalog entry for %s in %s has invalid version %r",
            release.chart_name, candidate.repository_name, candidate.latest_version,
        )
        return UpdateInfo.invalid(candidate.latest_version)

    return UpdateInfo(
        up_to_date=installed >= latest,
        latest_version=candidate.latest_version,
        repository=RepositoryRef(name=candidate.repository_name, url=candidate.repository_url),
    )
