"""Tests for manifest decoding and resource classification."""

from __future__ import annotations

import textwrap

from release_view.core.manifest_classifier import (
    ManifestView,
    classify,
    classify_release,
    flatten,
    manifest_changed,
)
from release_view.models import ResourceKind
from release_view.models.resources import Resource, ResourceCollection, ResourceRef
from release_view.utils.manifest_parser import decode_manifest

from conftest import make_release

_MANIFEST = textwrap.dedent("""\
    apiVersion: apps/v1
    kind: Deployment
    metadata:
      name: web
      namespace: elsewhere
    ---
    apiVersion: apps/v1
    kind: StatefulSet
    metadata:
      name: db
    ---
    apiVersion: apps/v1
    kind: DaemonSet
    metadata:
      name: agent
    ---
    apiVersion: v1
    kind: Service
    metadata:
      name: web-svc
    ---
    apiVersion: networking.k8s.io/v1
    kind: Ingress
    metadata:
      name: web-ing
    ---
    apiVersion: v1
    kind: Secret
    metadata:
      name: creds
    ---
    apiVersion: v1
    kind: ConfigMap
    metadata:
      name: settings
""")

_LIST_MANIFEST = textwrap.dedent("""\
    apiVersion: v1
    kind: List
    items:
    - apiVersion: apps/v1
      kind: Deployment
      metadata:
        name: foo
    - apiVersion: v1
      kind: Service
      metadata:
        name: bar
""")


class TestDecodeManifest:
    def test_empty_manifest(self):
        assert decode_manifest("") == []

    def test_documents_without_kind_are_dropped(self):
        manifest = _MANIFEST + "---\napiVersion: v1\nmetadata:\n  name: nokind\n"
        raw_count = len([d for d in manifest.split("---") if d.strip()])
        documents = decode_manifest(manifest)
        assert len(documents) == raw_count - 1

    def test_non_mappings_are_dropped(self):
        assert decode_manifest("---\n- a\n- b\n---\njust text\n---\n") == []

    def test_list_becomes_collection(self):
        [doc] = decode_manifest(_LIST_MANIFEST)
        assert isinstance(doc, ResourceCollection)
        assert doc.kind == "List"
        assert [i.kind for i in doc.items] == ["Deployment", "Service"]


class TestClassify:
    def test_every_kind_lands_in_its_bucket(self):
        result = classify(_MANIFEST, "my-ns")
        assert [r.name for r in result.deployments] == ["web"]
        assert [r.name for r in result.stateful_sets] == ["db"]
        assert [r.name for r in result.daemon_sets] == ["agent"]
        assert [r.name for r in result.services] == ["web-svc"]
        assert [r.name for r in result.ingresses] == ["web-ing"]
        assert [r.name for r in result.secrets] == ["creds"]
        assert [r.name for r in result.other] == ["settings"]
        assert all(isinstance(r, Resource) for r in result.other)
        assert result.total == 7

    def test_refs_use_release_namespace(self):
        result = classify(_MANIFEST, "my-ns")
        [deployment] = result.deployments
        assert deployment.namespace == "my-ns"
        assert deployment.resource.body["metadata"]["namespace"] == "elsewhere"

    def test_list_items_are_classified(self):
        result = classify(_LIST_MANIFEST, "default")
        assert len(result.deployments) == 1
        assert len(result.services) == 1
        assert result.deployments[0].namespace == "default"
        assert result.services[0].namespace == "default"
        assert result.other == []

    def test_nested_lists_keep_position(self):
        manifest = textwrap.dedent("""\
            kind: Service
            metadata: {name: first}
            ---
            kind: ServiceList
            items:
            - kind: Service
              metadata: {name: second}
            - kind: List
              items:
              - kind: Service
                metadata: {name: third}
              - metadata: {name: no-kind}
            ---
            kind: Service
            metadata: {name: fourth}
        """)
        result = classify(manifest, "default")
        assert [r.name for r in result.services] == ["first", "second", "third", "fourth"]
        assert result.total == 4

    def test_kind_match_is_case_sensitive(self):
        result = classify("kind: deployment\nmetadata: {name: x}\n", "default")
        assert result.deployments == []
        assert [r.kind for r in result.other] == ["deployment"]

    def test_dropped_document_reduces_count_by_one(self):
        with_extra = _MANIFEST + "---\nmetadata:\n  name: nokind\n"
        assert classify(with_extra, "ns").total == classify(_MANIFEST, "ns").total

    def test_idempotent(self):
        first = classify(_MANIFEST + "---\n" + _LIST_MANIFEST, "ns")
        second = classify(_MANIFEST + "---\n" + _LIST_MANIFEST, "ns")
        assert first == second
        assert first.buckets() == second.buckets()

    def test_classify_release(self):
        release = make_release(namespace="team-a", manifest=_LIST_MANIFEST)
        result = classify_release(release)
        assert result.deployments == [
            ResourceRef(resource=result.deployments[0].resource, namespace="team-a"),
        ]


def test_resource_kind_fallback():
    assert ResourceKind.from_str("Deployment") is ResourceKind.DEPLOYMENT
    assert ResourceKind.from_str("CronJob") is ResourceKind.OTHER
    assert ResourceKind.from_str("other") is ResourceKind.OTHER


def test_flatten_order():
    names = [r.name for r in flatten(decode_manifest(_MANIFEST + "---\n" + _LIST_MANIFEST))]
    assert names == ["web", "db", "agent", "web-svc", "web-ing", "creds", "settings", "foo", "bar"]


class TestManifestChanged:
    def test_same_text_is_unchanged(self):
        assert not manifest_changed(decode_manifest(_MANIFEST), decode_manifest(_MANIFEST))

    def test_field_change_is_detected(self):
        changed = _MANIFEST.replace("name: db", "name: database")
        assert manifest_changed(decode_manifest(_MANIFEST), decode_manifest(changed))

    def test_view_skips_unchanged_manifest(self):
        view = ManifestView()
        assert view.update(_MANIFEST, "ns") is True
        first = view.result
        assert view.update(_MANIFEST, "ns") is False
        assert view.result is first
        assert view.update(_MANIFEST, "other-ns") is True
        assert view.result.deployments[0].namespace == "other-ns"
