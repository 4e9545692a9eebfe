"""List installed releases from Helm's in-cluster storage."""

from __future__ import annotations

import logging
from collections import defaultdict

from kubernetes.client import ApiException

from release_view.config.settings import settings
from release_view.core.helm_decoder import decode_configmap, decode_secret, quick_metadata_from_labels
from release_view.core.k8s_client import K8sClient
from release_view.errors import CollaboratorError
from release_view.models.release import InstalledRelease

logger = logging.getLogger(__name__)


class ReleaseStore:
    """Fetches the latest revision of each release from the cluster."""

    def __init__(self, k8s: K8sClient):
        self.k8s = k8s

    def list_releases(self, namespace: str, list_all: bool) -> list[InstalledRelease]:
        """List releases in ``namespace``, or in every namespace if ``list_all``."""
        target = None if list_all or namespace == settings.all_namespaces else namespace
        objects, decode_fn = self._storage_objects(namespace=target)

        # Group by (release_name, namespace) and keep only the latest revision
        grouped: dict[tuple[str, str], list] = defaultdict(list)
        for obj in objects:
            meta = quick_metadata_from_labels(obj)
            grouped[(meta["name"], meta["namespace"])].append((meta["version"], obj))

        releases: list[InstalledRelease] = []
        for key, versions in grouped.items():
            versions.sort(key=lambda x: x[0], reverse=True)
            _, latest_obj = versions[0]
            release = decode_fn(latest_obj)
            if release:
                releases.append(release)
            else:
                logger.debug("Skipping undecodable release %s/%s", key[1], key[0])

        releases.sort(key=lambda r: (r.namespace, r.release_name))
        return releases

    def get_release(self, name: str, namespace: str | None = None) -> InstalledRelease | None:
        """Get the latest revision of a single release by name."""
        if namespace == settings.all_namespaces:
            namespace = None
        objects, decode_fn = self._storage_objects(namespace=namespace, release_name=name)
        if not objects:
            return None

        best_obj = max(objects, key=lambda obj: quick_metadata_from_labels(obj)["version"])
        return decode_fn(best_obj)

    def _storage_objects(self, namespace: str | None, release_name: str | None = None):
        try:
            if settings.storage_driver == "configmaps":
                objects = self.k8s.list_helm_configmaps(namespace=namespace, release_name=release_name)
                return objects, decode_configmap
            objects = self.k8s.list_helm_secrets(namespace=namespace, release_name=release_name)
            return objects, decode_secret
        except ApiException as e:
            raise CollaboratorError(f"Listing Helm releases failed: {e.status} {e.reason}") from e
