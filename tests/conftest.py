from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from release_view.core.release_enricher import EventRecorder, ReleaseEnricher
from release_view.models.chart import ChartMetadata
from release_view.models.release import InstalledRelease


def make_release(
    name: str = "foobar",
    namespace: str = "default",
    chart: str = "foo",
    version: str = "1.0.0",
    manifest: str = "",
) -> InstalledRelease:
    return InstalledRelease(
        release_name=name,
        namespace=namespace,
        chart_metadata=ChartMetadata(name=chart, version=version, app_version="0.1.0"),
        manifest=manifest,
    )


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def lister() -> MagicMock:
    lister = MagicMock()
    lister.list_releases.return_value = []
    lister.get_release.return_value = None
    return lister


@pytest.fixture
def catalog() -> MagicMock:
    catalog = MagicMock()
    catalog.query_catalog.return_value = []
    return catalog


@pytest.fixture
def operator() -> MagicMock:
    return MagicMock()


@pytest.fixture
def enricher(lister, catalog, operator, recorder) -> ReleaseEnricher:
    return ReleaseEnricher(
        lister=lister,
        catalog=catalog,
        operator=operator,
        sink=recorder,
        target_namespace="kubeapps-ns",
        all_namespaces="_all",
        max_workers=4,
    )
