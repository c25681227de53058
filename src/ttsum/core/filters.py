#!/usr/bin/env python3
"""
TTSUM FILTER ENGINE
-------------------
Partitions an inventory into resources that do or do not carry an entry
equal to the match predicate. Retained resources keep their complete,
unfiltered list.

Note on --no-match: the scan compares every entry and only the outcome of
the last comparison decides retention. A resource whose matching entry is
not last is therefore still retained.

Author: TTSum Team
Date: 2026-10-19
"""

import logging
from typing import Dict, Mapping, Sequence, TypeVar

from ttsum.core.models import ResourceReference, Taint, Toleration

logger = logging.getLogger("ttsum.filters")

T = TypeVar("T", Taint, Toleration)


def _filter(objs: Mapping[ResourceReference, Sequence[T]], predicate: T,
            keep_on_match: bool) -> Dict[ResourceReference, Sequence[T]]:
    filtered: Dict[ResourceReference, Sequence[T]] = {}

    for ref, items in objs.items():
        hit = False
        for item in items:
            hit = predicate.matches(item)
            if keep_on_match and hit:
                filtered[ref] = items
                break

        if not keep_on_match and not hit:
            filtered[ref] = items

    logger.debug(
        f"Filter {'match' if keep_on_match else 'no-match'} {predicate}: "
        f"kept {len(filtered)} of {len(objs)} resources"
    )
    return filtered


def filter_taints(objs: Mapping[ResourceReference, Sequence[Taint]], predicate: Taint,
                  keep_on_match: bool) -> Dict[ResourceReference, Sequence[Taint]]:
    return _filter(objs, predicate, keep_on_match)


def filter_tolerations(objs: Mapping[ResourceReference, Sequence[Toleration]],
                       predicate: Toleration,
                       keep_on_match: bool) -> Dict[ResourceReference, Sequence[Toleration]]:
    """The predicate's operator is defaulted to Equal by Toleration itself."""
    return _filter(objs, predicate, keep_on_match)
