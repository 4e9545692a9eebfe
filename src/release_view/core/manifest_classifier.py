"""Classify the resources of a release manifest into typed buckets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from deepdiff import DeepDiff

from release_view.models import ResourceKind
from release_view.models.release import InstalledRelease
from release_view.models.resources import (
    ClassificationResult,
    Resource,
    ResourceCollection,
    ResourceOrCollection,
    ResourceRef,
)
from release_view.utils.manifest_parser import decode_manifest

logger = logging.getLogger(__name__)


def classify(manifest: str, release_namespace: str) -> ClassificationResult:
    """Decode ``manifest`` and classify it against ``release_namespace``."""
    return classify_documents(decode_manifest(manifest), release_namespace)


def classify_release(release: InstalledRelease) -> ClassificationResult:
    return classify(release.manifest, release.namespace)


def classify_documents(
    documents: Iterable[ResourceOrCollection],
    release_namespace: str,
) -> ClassificationResult:
    """Classify already decoded documents.

    Collections are expanded in place: their items land in the buckets at
    the position the collection was found. Every ref is bound to
    ``release_namespace``; the namespace in the resource body is ignored.
    """
    result = ClassificationResult()
    for doc in documents:
        if isinstance(doc, ResourceCollection):
            result.extend(classify_documents(doc.items, release_namespace))
        else:
            _dispatch(result, doc, release_namespace)
    return result


def _dispatch(result: ClassificationResult, resource: Resource, namespace: str) -> None:
    tag = resource.tag
    if tag is ResourceKind.OTHER:
        result.other.append(resource)
        return

    ref = ResourceRef(resource=resource, namespace=namespace)
    if tag is ResourceKind.DEPLOYMENT:
        result.deployments.append(ref)
    elif tag is ResourceKind.STATEFUL_SET:
        result.stateful_sets.append(ref)
    elif tag is ResourceKind.DAEMON_SET:
        result.daemon_sets.append(ref)
    elif tag is ResourceKind.SERVICE:
        result.services.append(ref)
    elif tag is ResourceKind.INGRESS:
        result.ingresses.append(ref)
    elif tag is ResourceKind.SECRET:
        result.secrets.append(ref)
    else:
        raise AssertionError(f"Unhandled resource kind {tag}")


def flatten(documents: Iterable[ResourceOrCollection]) -> Iterator[Resource]:
    """Yield every concrete resource in traversal order."""
    for doc in documents:
        if isinstance(doc, ResourceCollection):
            yield from flatten(doc.items)
        else:
            yield doc


def manifest_changed(
    previous: list[ResourceOrCollection],
    current: list[ResourceOrCollection],
) -> bool:
    """Return True if two decoded manifests differ structurally."""
    return bool(DeepDiff(previous, current))


@dataclass
class ManifestView:
    """Last classified manifest of a release.

    ``update`` only re-classifies when the decoded manifest differs from the
    one seen before, so callers can skip redundant downstream work.
    """

    namespace: str = ""
    documents: list[ResourceOrCollection] = field(default_factory=list)
    result: ClassificationResult = field(default_factory=ClassificationResult)

    def update(self, manifest: str, namespace: str) -> bool:
        documents = decode_manifest(manifest)
        if namespace == self.namespace and not manifest_changed(self.documents, documents):
            logger.debug("Manifest unchanged, keeping previous classification")
            return False
        self.namespace = namespace
        self.documents = documents
        self.result = classify_documents(documents, namespace)
        return True
