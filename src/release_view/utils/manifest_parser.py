"""Parse multi-document YAML manifests into resources and collections."""

from __future__ import annotations

import logging
from typing import Any

import yaml

from release_view.models.resources import Resource, ResourceCollection, ResourceOrCollection

logger = logging.getLogger(__name__)


def decode_document(doc: Any) -> ResourceOrCollection | None:
    """Turn one decoded YAML document into a resource or a collection.

    Anything that is not a mapping with a ``kind`` yields None. A mapping
    with an ``items`` sequence is a collection; its items are decoded the
    same way and the ones without a ``kind`` are dropped.
    """
    if not doc or not isinstance(doc, dict):
        return None
    kind = doc.get("kind")
    if not kind or not isinstance(kind, str):
        logger.debug("Skipping manifest document without kind")
        return None

    items = doc.get("items")
    if isinstance(items, list):
        decoded = (decode_document(item) for item in items)
        return ResourceCollection(kind=kind, items=tuple(d for d in decoded if d is not None))
    return Resource(kind=kind, body=doc)


def decode_manifest(manifest: str) -> list[ResourceOrCollection]:
    """Decode a multi-document YAML string, keeping only kinded documents."""
    documents: list[ResourceOrCollection] = []
    if not manifest:
        return documents

    for doc in yaml.safe_load_all(manifest):
        decoded = decode_document(doc)
        if decoded is not None:
            documents.append(decoded)
    return documents
