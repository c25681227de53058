#!/usr/bin/env python3
"""
TTSUM DOCUMENT HELPERS
----------------------
Shared by every inventory source: resource naming, nested field lookup in
generic (dict-shaped) Kubernetes objects, and conversion of raw taint and
toleration entries into model values.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ttsum.core.errors import InventoryError
from ttsum.core.models import OPERATOR_EQUAL, ResourceReference, Taint, Toleration

logger = logging.getLogger("ttsum.inventory")

TAINT_PATH = ("spec", "taints")
TOLERATION_PATH = ("spec", "template", "spec", "tolerations")

# Kinds whose pod spec is not under spec.template
TOLERATION_PATHS_BY_KIND = {
    "Pod": ("spec", "tolerations"),
    "CronJob": ("spec", "jobTemplate", "spec", "template", "spec", "tolerations"),
}


@dataclass(frozen=True)
class GroupVersionResource:
    group: str = ""
    version: str = ""
    resource: str = ""

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version


NODE_GVR = GroupVersionResource(version="v1", resource="nodes")


def parse_group_version_resource(api_version: str, resource: str) -> GroupVersionResource:
    """
    ``apps/v1`` + ``deployments`` -> (apps, v1, deployments).
    A bare version such as ``v1`` belongs to the core (empty) group.
    """
    group, version = "", ""
    parts = api_version.split("/")
    if len(parts) == 1:
        version = parts[0]
    elif len(parts) == 2:
        group, version = parts
    return GroupVersionResource(group=group, version=version, resource=resource)


def nested_list(obj: Mapping[str, Any], path: Sequence[str]) -> Tuple[List[Any], bool]:
    """
    Walks ``path`` through nested mappings. Returns (items, found); a missing
    key or a value that is not a list counts as not found.
    """
    current: Any = obj
    for field in path:
        if not isinstance(current, Mapping) or field not in current:
            return [], False
        current = current[field]

    if current is None or not isinstance(current, list):
        if current is not None:
            logger.debug(f"Field {'.'.join(path)} is {type(current).__name__}, expected a list")
        return [], False
    return list(current), True


def kind_of(obj: Mapping[str, Any], default_kind: str = "") -> str:
    """The object's kind as text; a non-string scalar such as `kind: 5` is coerced."""
    kind = obj.get("kind")
    return default_kind if kind is None or kind == "" else str(kind)


def reference_for(obj: Mapping[str, Any], default_kind: str = "") -> ResourceReference:
    metadata = obj.get("metadata") or {}
    return ResourceReference(
        namespace=metadata.get("namespace") or "",
        name=metadata.get("name") or "",
        kind=kind_of(obj, default_kind),
    )


def toleration_path_for(kind: str) -> Tuple[str, ...]:
    return TOLERATION_PATHS_BY_KIND.get(kind, TOLERATION_PATH)


def _as_mapping(entry: Any, what: str, ref: ResourceReference) -> Mapping[str, Any]:
    if not isinstance(entry, Mapping):
        raise InventoryError(
            f"cannot convert {what} entry of {ref.kind or 'object'} "
            f"'{ref.name}': expected a mapping, got {type(entry).__name__}"
        )
    return entry


def _field(entry: Mapping[str, Any], name: str) -> str:
    value = entry.get(name)
    if value is None:
        return ""
    # Unquoted YAML booleans load as bool; keep their YAML spelling
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def taint_from_dict(entry: Any, ref: ResourceReference = ResourceReference()) -> Taint:
    raw = _as_mapping(entry, "taint", ref)
    return Taint(key=_field(raw, "key"), value=_field(raw, "value"), effect=_field(raw, "effect"))


def toleration_from_dict(entry: Any, ref: ResourceReference = ResourceReference()) -> Toleration:
    raw = _as_mapping(entry, "toleration", ref)
    return Toleration(
        key=_field(raw, "key"),
        value=_field(raw, "value"),
        effect=_field(raw, "effect"),
        operator=_field(raw, "operator") or OPERATOR_EQUAL,
    )


def collect_taints(objects: Sequence[Mapping[str, Any]]) -> Dict[ResourceReference, List[Taint]]:
    """Every object gets an entry, untainted ones with an empty list."""
    taints: Dict[ResourceReference, List[Taint]] = {}
    for obj in objects:
        ref = reference_for(obj, default_kind="Node")
        entries, found = nested_list(obj, TAINT_PATH)
        taints[ref] = [taint_from_dict(e, ref) for e in entries] if found else []
    return taints


def collect_tolerations(objects: Sequence[Mapping[str, Any]],
                        default_kind: str = "") -> Dict[ResourceReference, List[Toleration]]:
    """Every object gets an entry; operators are defaulted to Equal."""
    tolerations: Dict[ResourceReference, List[Toleration]] = {}
    for obj in objects:
        ref = reference_for(obj, default_kind=default_kind)
        entries, found = nested_list(obj, toleration_path_for(ref.kind))
        tolerations[ref] = [toleration_from_dict(e, ref) for e in entries] if found else []
    return tolerations


def kind_matches_resource(kind: str, resource: str) -> bool:
    """Accepts the kind itself or its usual plural as the resource name."""
    k, r = kind.lower(), resource.lower()
    if not k or not r:
        return False
    plurals = {k, f"{k}s", f"{k}es"}
    if k.endswith("y"):
        plurals.add(f"{k[:-1]}ies")
    return r in plurals


def items_of(document: Any) -> List[Dict[str, Any]]:
    """Expands ``kind: List`` (and ``*List``) documents into their items."""
    if not isinstance(document, Mapping):
        return []
    kind = kind_of(document)
    if kind.endswith("List") and isinstance(document.get("items"), list):
        default_kind = kind[:-len("List")]
        expanded = []
        for item in document["items"]:
            if isinstance(item, Mapping):
                if not kind_of(item) and default_kind:
                    item = dict(item, kind=default_kind)
                expanded.append(item)
        return expanded
    return [document]

