"""Codec for the gzip+base64 release payloads Helm keeps in the cluster."""

from __future__ import annotations

import base64
import gzip
import json

_GZIP_MAGIC = b"\x1f\x8b"


def _unzip_json(blob: bytes) -> dict:
    return json.loads(gzip.decompress(blob).decode("utf-8"))


def decode_release_secret(data: bytes) -> dict:
    """Decode a release stored in a Secret.

    Depending on the kubernetes client version the outer base64 layer may
    or may not already be removed, so a second decode happens only when the
    gzip header is not visible after the first one.
    """
    blob = base64.b64decode(data)
    if blob[:2] != _GZIP_MAGIC:
        blob = base64.b64decode(blob)
    return _unzip_json(blob)


def decode_release_configmap(data: str) -> dict:
    """Decode a release stored in a ConfigMap (always double base64)."""
    blob = base64.b64decode(base64.b64decode(data.encode("utf-8")))
    return _unzip_json(blob)


def encode_release(payload: dict) -> str:
    """Encode a release dict the way Helm stores it in a Secret."""
    blob = gzip.compress(json.dumps(payload).encode("utf-8"))
    return base64.b64encode(blob).decode("ascii")
