"""Kubernetes API wrapper."""

from __future__ import annotations

from typing import Any, Callable

from kubernetes import client, config
from kubernetes.client import ApiException

from release_view.config.settings import settings
from release_view.models import ResourceKind
from release_view.models.resources import ResourceRef

_REQUEST_TIMEOUT = 30


class K8sClient:
    """Thin wrapper around the Kubernetes Python client."""

    def __init__(self, context: str | None = None):
        self.context = context
        self._core_v1: client.CoreV1Api | None = None
        self._apps_v1: client.AppsV1Api | None = None
        self._networking_v1: client.NetworkingV1Api | None = None
        self._api_client: client.ApiClient | None = None

    def _load_config(self) -> client.ApiClient:
        if self._api_client is not None:
            return self._api_client
        try:
            cfg = client.Configuration()
            config.load_kube_config(
                context=self.context,
                client_configuration=cfg,
            )
            # Prevent indefinite hangs on unreachable clusters
            cfg.retries = 1
            if not cfg.connection_pool_maxsize:
                cfg.connection_pool_maxsize = 4
            self._api_client = client.ApiClient(configuration=cfg)
        except config.ConfigException:
            config.load_incluster_config()
            self._api_client = client.ApiClient()
        return self._api_client

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._core_v1 = client.CoreV1Api(api_client=self._load_config())
        return self._core_v1

    @property
    def apps_v1(self) -> client.AppsV1Api:
        if self._apps_v1 is None:
            self._apps_v1 = client.AppsV1Api(api_client=self._load_config())
        return self._apps_v1

    @property
    def networking_v1(self) -> client.NetworkingV1Api:
        if self._networking_v1 is None:
            self._networking_v1 = client.NetworkingV1Api(api_client=self._load_config())
        return self._networking_v1

    def list_helm_secrets(
        self, namespace: str | None = None, release_name: str | None = None,
    ) -> list[Any]:
        """List Helm release secrets, optionally filtered by namespace and release name."""
        label = _release_label(release_name)
        field_selector = f"type={settings.secret_type}"
        if namespace:
            result = self.core_v1.list_namespaced_secret(
                namespace=namespace,
                label_selector=label,
                field_selector=field_selector,
                _request_timeout=_REQUEST_TIMEOUT,
            )
        else:
            result = self.core_v1.list_secret_for_all_namespaces(
                label_selector=label,
                field_selector=field_selector,
                _request_timeout=_REQUEST_TIMEOUT,
            )
        return result.items

    def list_helm_configmaps(
        self, namespace: str | None = None, release_name: str | None = None,
    ) -> list[Any]:
        """List Helm release ConfigMaps."""
        label = _release_label(release_name)
        if namespace:
            result = self.core_v1.list_namespaced_config_map(
                namespace=namespace,
                label_selector=label,
                _request_timeout=_REQUEST_TIMEOUT,
            )
        else:
            result = self.core_v1.list_config_map_for_all_namespaces(
                label_selector=label,
                _request_timeout=_REQUEST_TIMEOUT,
            )
        return result.items

    def read_live(self, ref: ResourceRef) -> dict | None:
        """Read the live object behind a resource ref, or None if it is gone."""
        reader = self._reader_for(ref.resource.tag)
        if reader is None:
            return None
        try:
            result = reader(name=ref.name, namespace=ref.namespace, _request_timeout=_REQUEST_TIMEOUT)
        except ApiException as e:
            if e.status == 404:
                return None
            raise
        return self._load_config().sanitize_for_serialization(result) if result else None

    def _reader_for(self, tag: ResourceKind) -> Callable[..., Any] | None:
        readers = {
            ResourceKind.DEPLOYMENT: self.apps_v1.read_namespaced_deployment,
            ResourceKind.STATEFUL_SET: self.apps_v1.read_namespaced_stateful_set,
            ResourceKind.DAEMON_SET: self.apps_v1.read_namespaced_daemon_set,
            ResourceKind.SERVICE: self.core_v1.read_namespaced_service,
            ResourceKind.INGRESS: self.networking_v1.read_namespaced_ingress,
            ResourceKind.SECRET: self.core_v1.read_namespaced_secret,
        }
        return readers.get(tag)


def _release_label(release_name: str | None) -> str:
    label = settings.helm_label_selector
    if release_name:
        label += f",name={release_name}"
    return label
