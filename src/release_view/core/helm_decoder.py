"""Decode Helm v3 release data from Kubernetes Secrets or ConfigMaps."""

from __future__ import annotations

import logging
from typing import Any

from release_view.models.release import InstalledRelease
from release_view.utils.encoding import decode_release_configmap, decode_release_secret

logger = logging.getLogger(__name__)


def _label_metadata(obj: Any) -> dict[str, str]:
    """Extract Helm labels from a Secret/ConfigMap object."""
    labels = {}
    if hasattr(obj, "metadata") and obj.metadata and obj.metadata.labels:
        labels = dict(obj.metadata.labels)
    return labels


def _object_namespace(obj: Any) -> str:
    if hasattr(obj, "metadata") and obj.metadata:
        return obj.metadata.namespace or ""
    return ""


def decode_secret(secret: Any) -> InstalledRelease | None:
    """Decode a single Kubernetes Secret into an InstalledRelease."""
    try:
        data = secret.data
        if not data or "release" not in data:
            return None
        raw = data["release"]
        # kubernetes client base64-decodes Secret data, giving us bytes
        if isinstance(raw, str):
            raw = raw.encode("utf-8")
        release_dict = decode_release_secret(raw)
        return InstalledRelease.from_dict(release_dict, namespace=_object_namespace(secret))
    except Exception:
        logger.debug("Failed to decode secret %s", _safe_name(secret), exc_info=True)
        return None


def decode_configmap(cm: Any) -> InstalledRelease | None:
    """Decode a single Kubernetes ConfigMap into an InstalledRelease."""
    try:
        data = cm.data
        if not data or "release" not in data:
            return None
        release_dict = decode_release_configmap(data["release"])
        return InstalledRelease.from_dict(release_dict, namespace=_object_namespace(cm))
    except Exception:
        logger.debug("Failed to decode configmap %s", _safe_name(cm), exc_info=True)
        return None


def quick_metadata_from_labels(obj: Any) -> dict:
    """Extract quick metadata from labels without decoding the release payload.

    Returns a dict with keys: name, namespace, status, version (revision).
    """
    labels = _label_metadata(obj)
    return {
        "name": labels.get("name", ""),
        "namespace": _object_namespace(obj),
        "status": labels.get("status", ""),
        "version": int(labels.get("version", "0")),
    }


def _safe_name(obj: Any) -> str:
    if hasattr(obj, "metadata") and obj.metadata:
        return obj.metadata.name or "<unknown>"
    return "<unknown>"
