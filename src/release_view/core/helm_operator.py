"""Release operations carried out through the helm CLI."""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path

from release_view.config.settings import Settings, settings as default_settings
from release_view.errors import CollaboratorError
from release_view.models.chart import ChartVersion

logger = logging.getLogger(__name__)


class HelmCliOperator:
    """Deletes, installs and upgrades releases by running ``helm``."""

    def __init__(self, config: Settings | None = None, kube_context: str | None = None):
        self.settings = config or default_settings
        self.kube_context = kube_context

    def delete_release(self, name: str, namespace: str, purge: bool) -> None:
        cmd = ["uninstall", name, "--namespace", namespace]
        if not purge:
            cmd.append("--keep-history")
        self._run(cmd, what="uninstall")

    def create_release(
        self,
        name: str,
        namespace: str,
        target_namespace: str,
        chart_version: ChartVersion,
        values: str | None = None,
    ) -> None:
        cmd = ["install", name, chart_version.reference, "--namespace", namespace]
        self._run_with_chart(cmd, chart_version, values, what="install", target_namespace=target_namespace)

    def upgrade_release(
        self,
        name: str,
        namespace: str,
        target_namespace: str,
        chart_version: ChartVersion,
        values: str | None = None,
    ) -> None:
        cmd = ["upgrade", name, chart_version.reference, "--namespace", namespace]
        self._run_with_chart(cmd, chart_version, values, what="upgrade", target_namespace=target_namespace)

    def _run_with_chart(
        self,
        cmd: list[str],
        chart_version: ChartVersion,
        values: str | None,
        what: str,
        target_namespace: str,
    ) -> None:
        cmd.extend(["--version", chart_version.version])
        if chart_version.repository_url:
            cmd.extend(["--repo", chart_version.repository_url])
            # With --repo the chart is referenced by its bare name
            cmd[2] = chart_version.chart_name
        logger.debug("Running helm %s on behalf of namespace %s", what, target_namespace)
        if values is None:
            self._run(cmd, what=what)
            return
        with tempfile.TemporaryDirectory(prefix="rview-") as tmp:
            values_file = Path(tmp) / "values.yaml"
            values_file.write_text(values, encoding="utf-8")
            self._run([*cmd, "--values", str(values_file)], what=what)

    def _run(self, args: list[str], what: str) -> str:
        binary = self.settings.helm_binary
        if shutil.which(binary) is None:
            raise CollaboratorError(f"helm CLI not found ({binary})")

        cmd = [binary, *args]
        if self.kube_context:
            cmd.extend(["--kube-context", self.kube_context])
        try:
            r = subprocess.run(cmd, capture_output=True, text=True, timeout=self.settings.helm_timeout)
        except subprocess.TimeoutExpired as e:
            raise CollaboratorError(f"helm {what} timed out after {e.timeout}s") from e
        except OSError as e:
            raise CollaboratorError(f"helm {what} could not be started: {e}") from e
        if r.returncode != 0:
            raise CollaboratorError(r.stderr.strip() or f"helm {what} failed")
        return r.stdout
