#!/usr/bin/env python3
"""
TTSUM MANIFEST INVENTORY
------------------------
Offline inventory source. Reads a YAML file, or every YAML file under a
directory, such as the output of ``kubectl get nodes -o yaml``. Multi-document
streams and ``kind: List`` wrappers are both accepted.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML, YAMLError

from ttsum.core.errors import InventoryError
from ttsum.core.models import ResourceReference, Taint, Toleration
from ttsum.inventory.documents import (
    GroupVersionResource,
    collect_taints,
    collect_tolerations,
    items_of,
    kind_matches_resource,
    kind_of,
)

logger = logging.getLogger("ttsum.inventory.manifests")

YAML_SUFFIXES = (".yaml", ".yml")


class ManifestInventory:
    """Inventory source backed by manifests on disk."""

    def __init__(self, path: str):
        self.path = Path(path)
        self.yaml = YAML(typ='safe')
        self._objects: Optional[List[Dict[str, Any]]] = None

    def _files(self) -> List[Path]:
        if not self.path.exists():
            raise InventoryError(f"manifest path '{self.path}' not found")
        if self.path.is_file():
            return [self.path]
        return sorted(
            f for f in self.path.rglob("*")
            if f.is_file() and not f.is_symlink() and f.suffix.lower() in YAML_SUFFIXES
        )

    def objects(self) -> List[Dict[str, Any]]:
        """All objects in the manifests, List wrappers expanded. Loaded once."""
        if self._objects is not None:
            return self._objects

        objects: List[Dict[str, Any]] = []
        for file_path in self._files():
            try:
                text = file_path.read_text(encoding='utf-8-sig')
                docs = [d for d in self.yaml.load_all(text) if d is not None]
            except (OSError, UnicodeDecodeError, YAMLError) as e:
                raise InventoryError(f"unable to read manifest {file_path}: {e}") from e

            for doc in docs:
                objects.extend(items_of(doc))
            logger.debug(f"Loaded {len(docs)} document(s) from {file_path}")

        logger.info(f"Loaded {len(objects)} object(s) from {self.path}")
        self._objects = objects
        return objects

    def list_node_taints(self) -> Dict[ResourceReference, List[Taint]]:
        nodes = [o for o in self.objects() if kind_of(o) == "Node"]
        taints = collect_taints(nodes)
        return {ResourceReference(name=ref.name, kind=ref.kind): ts for ref, ts in taints.items()}

    def list_resource_tolerations(self, gvr: GroupVersionResource,
                                  namespace: str = "") -> Dict[ResourceReference, List[Toleration]]:
        selected = []
        for obj in self.objects():
            if obj.get("apiVersion") != gvr.api_version:
                continue
            if not kind_matches_resource(kind_of(obj), gvr.resource):
                continue
            obj_namespace = (obj.get("metadata") or {}).get("namespace") or ""
            if namespace and obj_namespace != namespace:
                continue
            selected.append(obj)
        return collect_tolerations(selected)
