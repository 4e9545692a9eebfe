"""Chart catalog backed by the local Helm repository cache."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from release_view.config.settings import Settings, settings as default_settings
from release_view.models.chart import CatalogEntry
from release_view.utils.version_compare import latest_of

logger = logging.getLogger(__name__)

# Prefer the C-accelerated YAML loader when available (~10x faster).
_YamlLoader = getattr(yaml, "CSafeLoader", yaml.SafeLoader)


class LocalRepoCatalog:
    """Answers catalog queries from ``repositories.yaml`` and cached indexes.

    Caches live for the lifetime of the instance; create a new one (or call
    ``clear_caches``) to pick up ``helm repo update`` results.
    """

    def __init__(self, config: Settings | None = None):
        self.settings = config or default_settings
        self._repos_cache: dict[str, str] | None = None
        self._index_cache: dict[Path, dict | None] = {}

    def clear_caches(self) -> None:
        self._repos_cache = None
        self._index_cache.clear()

    def query_catalog(self, chart_name: str, namespace: str) -> list[CatalogEntry]:
        """Return one entry per repository that publishes ``chart_name``.

        Repositories keep the order of ``repositories.yaml``. The local cache
        is not namespaced, so ``namespace`` does not narrow the result.
        """
        entries: list[CatalogEntry] = []
        for repo_name, repo_url in self._load_repositories().items():
            index_path = self.settings.index_cache_dir / f"{repo_name}-index.yaml"
            if not index_path.exists():
                continue
            versions = self._versions_from_index(index_path, chart_name)
            if not versions:
                continue
            latest = latest_of(versions) or versions[0]
            entries.append(CatalogEntry(
                repository_name=repo_name,
                latest_version=latest,
                repository_url=repo_url,
            ))
        return entries

    def _load_repositories(self) -> dict[str, str]:
        """Load repo name -> URL mapping from repositories.yaml (cached)."""
        if self._repos_cache is not None:
            return self._repos_cache

        repos_file = self.settings.repositories_file
        self._repos_cache = {}
        if not repos_file.exists():
            return self._repos_cache
        try:
            data = yaml.safe_load(repos_file.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError):
            logger.debug("Failed to parse %s", repos_file, exc_info=True)
            return self._repos_cache
        if data and "repositories" in data:
            self._repos_cache = {
                r["name"]: r["url"] for r in data["repositories"] or [] if "name" in r and "url" in r
            }
        return self._repos_cache

    def _versions_from_index(self, index_path: Path, chart_name: str) -> list[str]:
        data = self._load_index(index_path)
        if data is None:
            return []
        return [e["version"] for e in data.get(chart_name, []) if e.get("version")]

    # -----------------------------------------------------------------------
    # Lightweight JSON sidecar cache for index.yaml files
    #
    # Helm repo index files can be 25+ MB of YAML. We extract only
    # {chart_name: [{version, appVersion}]} into a small JSON file next to
    # the index, regenerated whenever the index is newer.
    # -----------------------------------------------------------------------

    def _load_index(self, index_path: Path) -> dict | None:
        if index_path in self._index_cache:
            return self._index_cache[index_path]

        sidecar = _sidecar_path(index_path)
        if _sidecar_is_fresh(index_path, sidecar):
            try:
                lightweight = json.loads(sidecar.read_text(encoding="utf-8"))
                self._index_cache[index_path] = lightweight
                return lightweight
            except (OSError, ValueError):
                logger.debug("Corrupt sidecar %s, rebuilding", sidecar, exc_info=True)

        lightweight = _build_sidecar(index_path)
        self._index_cache[index_path] = lightweight
        return lightweight


def _sidecar_path(index_path: Path) -> Path:
    return index_path.with_suffix(".json")


def _sidecar_is_fresh(index_path: Path, sidecar: Path) -> bool:
    if not sidecar.exists():
        return False
    try:
        return sidecar.stat().st_mtime >= index_path.stat().st_mtime
    except OSError:
        return False


def _build_sidecar(index_path: Path) -> dict | None:
    """Parse the full YAML index once and write the JSON sidecar."""
    try:
        data = yaml.load(index_path.read_text(encoding="utf-8"), Loader=_YamlLoader)
    except (OSError, yaml.YAMLError):
        logger.debug("Failed to parse index at %s", index_path, exc_info=True)
        return None
    if not data or "entries" not in data:
        return None

    lightweight: dict[str, list[dict[str, str]]] = {}
    for chart_name, chart_entries in (data["entries"] or {}).items():
        lightweight[chart_name] = [
            {"version": str(e.get("version", "")), "appVersion": str(e.get("appVersion", ""))}
            for e in chart_entries or []
            if "version" in e
        ]

    sidecar = _sidecar_path(index_path)
    try:
        sidecar.write_text(json.dumps(lightweight), encoding="utf-8")
    except OSError:
        logger.debug("Could not write sidecar cache %s", sidecar, exc_info=True)

    return lightweight
