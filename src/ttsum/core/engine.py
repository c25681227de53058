#!/usr/bin/env python3
"""
TTSUM ENGINE - The Orchestrator
-------------------------------
Runs one report end to end:
1. Fetch the inventory (cluster or manifests)
2. Parse the match expression, if any
3. Filter the inventory
4. Sort and render each retained resource

Author: TTSum Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ttsum.core.config import COMMAND_TAINTS, COMMAND_TOLERATIONS, RunConfig
from ttsum.core.errors import UsageError
from ttsum.core.filters import filter_taints, filter_tolerations
from ttsum.core.models import ResourceReference, Taint, Toleration
from ttsum.core.printer import print_taints, print_tolerations
from ttsum.inventory.cluster import ClusterInventory
from ttsum.inventory.documents import parse_group_version_resource
from ttsum.inventory.manifests import ManifestInventory
from ttsum.parsing.specifier import parse_taint, parse_toleration

logger = logging.getLogger("ttsum.engine")


@dataclass
class TaintsResult:
    reference: ResourceReference
    taints: Sequence[Taint] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.reference.name

    @property
    def rendered(self) -> str:
        return print_taints(self.taints)


@dataclass
class TolerationsResult:
    reference: ResourceReference
    tolerations: Sequence[Toleration] = field(default_factory=list)

    @property
    def namespace(self) -> str:
        return self.reference.namespace

    @property
    def name(self) -> str:
        return self.reference.name

    @property
    def rendered(self) -> str:
        return print_tolerations(self.tolerations)


def build_inventory(cfg: RunConfig) -> Any:
    """Manifests win over the cluster when both are configured."""
    if cfg.manifest_path:
        logger.debug(f"Using manifest inventory at {cfg.manifest_path}")
        return ManifestInventory(cfg.manifest_path)
    return ClusterInventory(kubeconfig_path=cfg.kubeconfig_path)


class SummaryEngine:
    """
    Coordinates the inventory source, the specifier parser, the filter and
    the printer for the taints and tolerations reports.
    """

    def __init__(self, cfg: RunConfig, inventory: Any = None):
        self.cfg = cfg
        self.inventory = inventory if inventory is not None else build_inventory(cfg)

    def summarize_taints(self) -> List[TaintsResult]:
        # Parse first so a bad expression fails before any listing
        predicate: Optional[Taint] = None
        selector = self.cfg.match_expression
        if selector:
            predicate = parse_taint(selector[0])

        resource_taints: Dict[ResourceReference, Sequence[Taint]] = self.inventory.list_node_taints()
        if predicate is not None:
            resource_taints = filter_taints(resource_taints, predicate, selector[1])

        results = [TaintsResult(reference=ref, taints=ts) for ref, ts in resource_taints.items()]
        results.sort(key=lambda r: r.name)
        return results

    def summarize_tolerations(self) -> List[TolerationsResult]:
        predicate: Optional[Toleration] = None
        selector = self.cfg.match_expression
        if selector:
            predicate = parse_toleration(selector[0])

        gvr = parse_group_version_resource(self.cfg.api_version, self.cfg.resource)
        resource_tolerations: Dict[ResourceReference, Sequence[Toleration]] = (
            self.inventory.list_resource_tolerations(gvr, self.cfg.namespace)
        )
        if predicate is not None:
            resource_tolerations = filter_tolerations(resource_tolerations, predicate, selector[1])

        results = [TolerationsResult(reference=ref, tolerations=ts)
                   for ref, ts in resource_tolerations.items()]
        results.sort(key=lambda r: (r.namespace, r.name))
        return results

    def run(self) -> List[Any]:
        if self.cfg.command == COMMAND_TAINTS:
            results = self.summarize_taints()
        elif self.cfg.command == COMMAND_TOLERATIONS:
            results = self.summarize_tolerations()
        else:
            raise UsageError(f"unknown command '{self.cfg.command}'")

        logger.info(f"{self.cfg.command}: {len(results)} resource(s) in report")
        return results
