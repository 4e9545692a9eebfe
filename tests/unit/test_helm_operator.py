"""Tests for the helm CLI operator."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from release_view.config.settings import Settings
from release_view.core.helm_operator import HelmCliOperator
from release_view.errors import CollaboratorError
from release_view.models.chart import ChartVersion

_CHART = ChartVersion(chart_name="nginx", repository_name="bitnami", version="15.1.0")


def _ok(stdout: str = "") -> MagicMock:
    return MagicMock(returncode=0, stdout=stdout, stderr="")


@pytest.fixture
def operator() -> HelmCliOperator:
    return HelmCliOperator(Settings(helm_binary="helm", helm_timeout=5))


@pytest.fixture(autouse=True)
def helm_on_path():
    with patch("release_view.core.helm_operator.shutil.which", return_value="/usr/bin/helm"):
        yield


class TestHelmCliOperator:
    def test_delete_keeps_history(self, operator):
        with patch("release_view.core.helm_operator.subprocess.run", return_value=_ok()) as run:
            operator.delete_release("web", "team-a", purge=False)
        cmd = run.call_args[0][0]
        assert cmd == ["helm", "uninstall", "web", "--namespace", "team-a", "--keep-history"]

    def test_delete_purge(self, operator):
        with patch("release_view.core.helm_operator.subprocess.run", return_value=_ok()) as run:
            operator.delete_release("web", "team-a", purge=True)
        assert "--keep-history" not in run.call_args[0][0]

    def test_install(self, operator):
        with patch("release_view.core.helm_operator.subprocess.run", return_value=_ok()) as run:
            operator.create_release("web", "team-a", "kubeapps", _CHART)
        assert run.call_args[0][0] == [
            "helm", "install", "web", "bitnami/nginx", "--namespace", "team-a", "--version", "15.1.0",
        ]
        assert run.call_args.kwargs["timeout"] == 5

    def test_upgrade_with_repo_url_and_values(self, operator):
        chart = ChartVersion("nginx", "bitnami", "15.1.0", repository_url="https://charts.bitnami.com/bitnami")
        seen = {}

        def fake_run(cmd, **kwargs):
            values_path = cmd[cmd.index("--values") + 1]
            with open(values_path, encoding="utf-8") as fh:
                seen["values"] = fh.read()
            seen["cmd"] = cmd
            return _ok()

        with patch("release_view.core.helm_operator.subprocess.run", side_effect=fake_run):
            operator.upgrade_release("web", "team-a", "kubeapps", chart, "replicaCount: 3\n")

        assert seen["cmd"][:3] == ["helm", "upgrade", "web"]
        assert seen["cmd"][3] == "nginx"
        assert "--repo" in seen["cmd"]
        assert seen["values"] == "replicaCount: 3\n"

    def test_kube_context_is_forwarded(self):
        operator = HelmCliOperator(Settings(helm_binary="helm"), kube_context="prod")
        with patch("release_view.core.helm_operator.subprocess.run", return_value=_ok()) as run:
            operator.delete_release("web", "team-a", purge=True)
        assert run.call_args[0][0][-2:] == ["--kube-context", "prod"]

    def test_non_zero_exit_raises(self, operator):
        failed = MagicMock(returncode=1, stdout="", stderr="Error: release: not found")
        with patch("release_view.core.helm_operator.subprocess.run", return_value=failed):
            with pytest.raises(CollaboratorError, match="release: not found"):
                operator.delete_release("web", "team-a", purge=True)

    def test_timeout_raises(self, operator):
        timeout = subprocess.TimeoutExpired(cmd="helm", timeout=5)
        with patch("release_view.core.helm_operator.subprocess.run", side_effect=timeout):
            with pytest.raises(CollaboratorError, match="timed out"):
                operator.create_release("web", "team-a", "kubeapps", _CHART)

    def test_missing_binary(self, operator):
        with patch("release_view.core.helm_operator.shutil.which", return_value=None):
            with pytest.raises(CollaboratorError, match="helm CLI not found"):
                operator.delete_release("web", "team-a", purge=True)
