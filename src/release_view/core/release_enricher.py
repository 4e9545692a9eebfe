"""List installed releases and attach update information to them."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from release_view.config.settings import settings
from release_view.core.collaborators import ChartCatalog, ReleaseLister, ReleaseOperator
from release_view.core.update_resolver import resolve
from release_view.errors import CollaboratorError, UnprocessableEntity
from release_view.models.chart import CatalogEntry, ChartVersion
from release_view.models.events import (
    DeletionFailed,
    Event,
    ListingStarted,
    OperationFailed,
    OperationRejected,
    ReleaseListReceived,
    ReleaseReceived,
    UpdateInfoReceived,
    UpdateInfoRequested,
)
from release_view.models.release import InstalledRelease

logger = logging.getLogger(__name__)

EventSink = Callable[[Event], None]


class EventRecorder:
    """Event sink that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()


class ReleaseEnricher:
    """Drives release listing, update checks and release operations.

    Results are reported to ``sink`` as events; operations also return a
    success flag.
    """

    def __init__(
        self,
        lister: ReleaseLister,
        catalog: ChartCatalog,
        operator: ReleaseOperator,
        sink: EventSink,
        target_namespace: str | None = None,
        all_namespaces: str | None = None,
        max_workers: int | None = None,
        validate_upgrade_namespace: bool = False,
    ):
        self.lister = lister
        self.catalog = catalog
        self.operator = operator
        self.sink = sink
        self.target_namespace = target_namespace or settings.target_namespace
        self.all_namespaces = all_namespaces or settings.all_namespaces
        self.max_workers = max(1, max_workers or settings.max_workers)
        self.validate_upgrade_namespace = validate_upgrade_namespace

    def enrich(self, namespace: str, list_all: bool) -> bool:
        """Fetch releases and emit update info for each, in list order.

        Returns False when the listing itself failed.
        """
        self.sink(ListingStarted(list_all=list_all))
        try:
            releases = self.lister.list_releases(namespace, list_all)
        except Exception as e:
            logger.debug("Listing releases in %s failed", namespace, exc_info=True)
            self.sink(OperationFailed(error=e))
            return False

        self.sink(ReleaseListReceived(releases=tuple(releases)))
        if not releases:
            return True

        self.sink(UpdateInfoRequested())
        workers = min(self.max_workers, len(releases))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="catalog") as pool:
            futures = [pool.submit(self._query_candidates, r) for r in releases]
            for release, future in zip(releases, futures):
                candidates = self._candidates(release, future)
                self.sink(UpdateInfoReceived(
                    release_name=release.release_name,
                    update_info=resolve(release, candidates),
                ))
        return True

    def enrich_release(self, name: str, namespace: str) -> InstalledRelease | None:
        """Fetch one release and emit its update info.

        Returns the release, or None when it could not be fetched.
        """
        try:
            release = self.lister.get_release(name, namespace)
        except Exception as e:
            logger.debug("Fetching release %s/%s failed", namespace, name, exc_info=True)
            self.sink(OperationFailed(error=e))
            return None
        if release is None:
            self.sink(OperationFailed(error=CollaboratorError(
                f"Release '{name}' not found in namespace '{namespace}'"
            )))
            return None

        self.sink(ReleaseReceived(release=release))
        self.sink(UpdateInfoRequested())
        try:
            candidates = self._query_candidates(release)
        except Exception:
            self._log_lookup_failure(release)
            candidates = []
        self.sink(UpdateInfoReceived(
            release_name=release.release_name,
            update_info=resolve(release, candidates),
        ))
        return release

    def _query_candidates(self, release: InstalledRelease) -> list[CatalogEntry]:
        return list(self.catalog.query_catalog(release.chart_name, release.namespace))

    @classmethod
    def _candidates(cls, release: InstalledRelease, future: Future) -> list[CatalogEntry]:
        # A failed lookup only affects its own release.
        try:
            return future.result()
        except Exception:
            cls._log_lookup_failure(release)
            return []

    @staticmethod
    def _log_lookup_failure(release: InstalledRelease) -> None:
        logger.warning(
            "Catalog lookup for chart %r of release %s failed, assuming up to date",
            release.chart_name, release.release_name, exc_info=True,
        )

    def delete_release(self, name: str, namespace: str, purge: bool) -> bool:
        try:
            self.operator.delete_release(name, namespace, purge)
        except Exception as e:
            logger.debug("Deleting release %s/%s failed", namespace, name, exc_info=True)
            self.sink(DeletionFailed(error=e))
            return False
        return True

    def deploy_chart(
        self,
        chart_version: ChartVersion,
        release_name: str,
        namespace: str,
        values: str | None = None,
    ) -> bool:
        if not self._check_namespace(namespace):
            return False
        try:
            self.operator.create_release(
                release_name, namespace, self.target_namespace, chart_version, values,
            )
        except Exception as e:
            logger.debug("Deploying %s as %s failed", chart_version.reference, release_name, exc_info=True)
            self.sink(OperationFailed(error=e))
            return False
        return True

    def upgrade_release(
        self,
        chart_version: ChartVersion,
        release_name: str,
        namespace: str,
        values: str | None = None,
    ) -> bool:
        if self.validate_upgrade_namespace and not self._check_namespace(namespace):
            return False
        try:
            self.operator.upgrade_release(
                release_name, namespace, self.target_namespace, chart_version, values,
            )
        except Exception as e:
            logger.debug("Upgrading %s to %s failed", release_name, chart_version.version, exc_info=True)
            self.sink(OperationFailed(error=e))
            return False
        return True

    def _check_namespace(self, namespace: str) -> bool:
        """Reject the all-namespaces sentinel; emits an event on rejection."""
        if namespace == self.all_namespaces:
            self.sink(OperationRejected(error=UnprocessableEntity(
                "Namespace not specified. Select a namespace different from 'All'."
            )))
            return False
        return True
