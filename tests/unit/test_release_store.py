"""Tests for listing releases from Helm storage objects."""

from __future__ import annotations

import base64
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from kubernetes.client import ApiException

from release_view.core.release_store import ReleaseStore
from release_view.errors import CollaboratorError
from release_view.models.release import InstalledRelease, ReleaseStatus
from release_view.utils.encoding import encode_release


def _payload(name: str, namespace: str, revision: int, chart_version: str = "1.0.0") -> dict:
    return {
        "name": name,
        "namespace": namespace,
        "version": revision,
        "info": {"status": "deployed", "last_deployed": "2026-02-18T12:00:00Z"},
        "chart": {"metadata": {"name": "nginx", "version": chart_version, "appVersion": "1.25.0"}},
        "manifest": "kind: Service\nmetadata:\n  name: web\n",
    }


def _secret(payload: dict, namespace: str | None = None) -> SimpleNamespace:
    # The kubernetes client hands back the Secret data base64 encoded once more
    raw = base64.b64encode(encode_release(payload).encode("ascii"))
    return SimpleNamespace(
        data={"release": raw},
        metadata=SimpleNamespace(
            name=f"sh.helm.release.v1.{payload['name']}.v{payload['version']}",
            namespace=namespace or payload["namespace"],
            labels={"name": payload["name"], "version": str(payload["version"]), "owner": "helm"},
        ),
    )


@pytest.fixture
def k8s() -> MagicMock:
    return MagicMock()


class TestReleaseStore:
    def test_keeps_latest_revision(self, k8s):
        k8s.list_helm_secrets.return_value = [
            _secret(_payload("web", "team-a", 1, "1.0.0")),
            _secret(_payload("web", "team-a", 2, "1.1.0")),
            _secret(_payload("api", "team-a", 1)),
        ]
        releases = ReleaseStore(k8s).list_releases("team-a", False)

        assert [(r.release_name, r.chart_version) for r in releases] == [("api", "1.0.0"), ("web", "1.1.0")]
        assert releases[1].revision == 2
        assert releases[1].status is ReleaseStatus.DEPLOYED
        k8s.list_helm_secrets.assert_called_once_with(namespace="team-a", release_name=None)

    def test_list_all_queries_every_namespace(self, k8s):
        k8s.list_helm_secrets.return_value = []
        ReleaseStore(k8s).list_releases("team-a", True)
        k8s.list_helm_secrets.assert_called_once_with(namespace=None, release_name=None)

    def test_all_namespaces_sentinel(self, k8s):
        k8s.list_helm_secrets.return_value = []
        ReleaseStore(k8s).list_releases("_all", False)
        k8s.list_helm_secrets.assert_called_once_with(namespace=None, release_name=None)

    def test_undecodable_secret_is_skipped(self, k8s):
        broken = _secret(_payload("bad", "team-a", 1))
        broken.data = {"release": b"not-a-release"}
        k8s.list_helm_secrets.return_value = [broken, _secret(_payload("web", "team-a", 1))]
        releases = ReleaseStore(k8s).list_releases("team-a", False)
        assert [r.release_name for r in releases] == ["web"]

    def test_api_error_is_wrapped(self, k8s):
        k8s.list_helm_secrets.side_effect = ApiException(status=403, reason="Forbidden")
        with pytest.raises(CollaboratorError, match="403"):
            ReleaseStore(k8s).list_releases("team-a", False)

    def test_get_release(self, k8s):
        k8s.list_helm_secrets.return_value = [
            _secret(_payload("web", "team-a", 3, "2.0.0")),
            _secret(_payload("web", "team-a", 1)),
        ]
        release = ReleaseStore(k8s).get_release("web", namespace="team-a")
        assert release is not None
        assert release.chart_version == "2.0.0"
        assert release.manifest.startswith("kind: Service")

    def test_get_missing_release(self, k8s):
        k8s.list_helm_secrets.return_value = []
        assert ReleaseStore(k8s).get_release("web") is None


def test_release_from_api_payload():
    release = InstalledRelease.from_dict({
        "releaseName": "foobar",
        "namespace": "default",
        "chartMetadata": {"name": "foo", "version": "1.0.0", "appVersion": "0.1.0"},
        "info": {"status": {"code": "DEPLOYED", "notes": "hello"}},
    })
    assert release.key == ("foobar", "default")
    assert release.chart_name == "foo"
    assert release.app_version == "0.1.0"
    assert release.status is ReleaseStatus.DEPLOYED
    assert release.info.notes == "hello"


def test_get_release_across_namespaces(k8s):
    k8s.list_helm_secrets.return_value = [_secret(_payload("web", "team-b", 1))]
    release = ReleaseStore(k8s).get_release("web", namespace="_all")
    assert release is not None
    assert release.namespace == "team-b"
    k8s.list_helm_secrets.assert_called_once_with(namespace=None, release_name="web")
