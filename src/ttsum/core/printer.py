#!/usr/bin/env python3
"""
TTSUM PRETTY PRINTER
--------------------
Renders taint and toleration lists into the fixed display strings used by
the table and YAML outputs. An empty list always renders as "none".

Author: TTSum Team
Date: 2026-10-19
"""

from typing import Sequence

from ttsum.core.models import Taint, Toleration

EMPTY_SENTINEL = "none"
ENTRY_SEPARATOR = ",\n"


def _key_value_effect(key: str, value: str, effect: str) -> str:
    res = key
    if value:
        res += f"={value}"
    if effect:
        res += f":{effect}"
    return res


def format_taint(taint: Taint) -> str:
    return _key_value_effect(taint.key, taint.value, taint.effect)


def format_toleration(toleration: Toleration) -> str:
    body = _key_value_effect(toleration.key, toleration.value, toleration.effect)
    return f"{toleration.operator}({body})"


def print_taints(taints: Sequence[Taint]) -> str:
    """Renders each taint as key[=value][:effect], one per line."""
    if not taints:
        return EMPTY_SENTINEL
    return ENTRY_SEPARATOR.join(format_taint(t) for t in taints)


def print_tolerations(tolerations: Sequence[Toleration]) -> str:
    """Renders each toleration as Operator(key[=value][:effect]), one per line."""
    if not tolerations:
        return EMPTY_SENTINEL
    return ENTRY_SEPARATOR.join(format_toleration(t) for t in tolerations)
