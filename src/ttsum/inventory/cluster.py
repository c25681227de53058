#!/usr/bin/env python3
"""
TTSUM CLUSTER INVENTORY
-----------------------
Lists nodes and workloads from a live cluster through the Kubernetes
dynamic client and hands normalized taint/toleration mappings to the core.

Connection: an explicit kubeconfig path wins; otherwise the in-cluster
service account is tried first, then the default kubeconfig loading rules.
"""

import logging
from typing import Any, Dict, List, Optional

import urllib3
from kubernetes import client, config, dynamic
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from kubernetes.dynamic.exceptions import ResourceNotFoundError, ResourceNotUniqueError

from ttsum.core.errors import InventoryError
from ttsum.core.models import ResourceReference, Taint, Toleration
from ttsum.inventory.documents import (
    NODE_GVR,
    GroupVersionResource,
    collect_taints,
    collect_tolerations,
)

logger = logging.getLogger("ttsum.inventory.cluster")

_CLIENT_ERRORS = (
    ApiException,
    ResourceNotFoundError,
    ResourceNotUniqueError,
    urllib3.exceptions.HTTPError,
)


def load_api_client(kubeconfig_path: Optional[str] = None) -> client.ApiClient:
    try:
        if kubeconfig_path:
            logger.debug(f"Loading kubeconfig from {kubeconfig_path}")
            return config.new_client_from_config(config_file=kubeconfig_path)

        try:
            config.load_incluster_config()
            logger.debug("Using in-cluster configuration")
        except ConfigException:
            logger.debug("Not running in a cluster, falling back to local kubeconfig")
            config.load_kube_config()
        return client.ApiClient()
    except (ConfigException, OSError) as e:
        raise InventoryError(f"unable to load Kubernetes configuration: {e}") from e


class ClusterInventory:
    """
    Inventory source backed by a live API server.

    A ready-made dynamic client can be injected; otherwise one is built on
    first use from ``kubeconfig_path``.
    """

    def __init__(self, kubeconfig_path: Optional[str] = None, dynamic_client: Any = None):
        self.kubeconfig_path = kubeconfig_path
        self._client = dynamic_client

    @property
    def client(self) -> Any:
        if self._client is None:
            try:
                self._client = dynamic.DynamicClient(load_api_client(self.kubeconfig_path))
            except _CLIENT_ERRORS as e:
                raise InventoryError(f"unable to reach the Kubernetes API: {e}") from e
        return self._client

    def _list(self, gvr: GroupVersionResource, namespace: str = "") -> tuple:
        """Returns (items, kind) for the given resource."""
        try:
            api_resource = self.client.resources.get(api_version=gvr.api_version, name=gvr.resource)
            if namespace:
                listing = api_resource.get(namespace=namespace)
            else:
                listing = api_resource.get()
        except _CLIENT_ERRORS as e:
            raise InventoryError(f"unable to list {gvr.resource} ({gvr.api_version}): {e}") from e

        items: List[Dict[str, Any]] = listing.to_dict().get("items") or []
        logger.info(f"Listed {len(items)} {gvr.resource} ({gvr.api_version}) in "
                    f"{namespace or 'all namespaces'}")
        return items, getattr(api_resource, "kind", "") or ""

    def list_node_taints(self) -> Dict[ResourceReference, List[Taint]]:
        items, _ = self._list(NODE_GVR)
        taints = collect_taints(items)
        # Nodes are cluster scoped
        return {ResourceReference(name=ref.name, kind=ref.kind): ts for ref, ts in taints.items()}

    def list_resource_tolerations(self, gvr: GroupVersionResource,
                                  namespace: str = "") -> Dict[ResourceReference, List[Toleration]]:
        items, kind = self._list(gvr, namespace)
        return collect_tolerations(items, default_kind=kind)
