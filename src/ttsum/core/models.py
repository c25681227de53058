#!/usr/bin/env python3
"""
TTSUM CORE MODELS
-----------------
Defines the value types shared by the parser, the filter and the reporting
layer. Every instance is built fresh per invocation, either from user input
(the match predicate) or from an inventory listing (the subjects).

Author: TTSum Team
Date: 2026-10-19
"""

from dataclasses import dataclass

# Taint effects accepted by the scheduler
EFFECT_NO_SCHEDULE = "NoSchedule"
EFFECT_PREFER_NO_SCHEDULE = "PreferNoSchedule"
EFFECT_NO_EXECUTE = "NoExecute"

VALID_EFFECTS = (EFFECT_NO_SCHEDULE, EFFECT_PREFER_NO_SCHEDULE, EFFECT_NO_EXECUTE)

# Toleration operators
OPERATOR_EQUAL = "Equal"
OPERATOR_EXISTS = "Exists"


@dataclass(frozen=True)
class Taint:
    """A node-side exclusion marker."""
    key: str = ""
    value: str = ""
    effect: str = ""   # Empty only when the user left it out

    def matches(self, other: "Taint") -> bool:
        return (
            self.key == other.key
            and self.value == other.value
            and self.effect == other.effect
        )


@dataclass(frozen=True)
class Toleration:
    """
    A workload's acceptance of a matching Taint.

    An empty operator is normalized to ``Equal`` on construction, so the two
    spellings never differ once a Toleration exists.
    """
    key: str = ""
    value: str = ""
    effect: str = ""
    operator: str = OPERATOR_EQUAL

    def __post_init__(self):
        if not self.operator:
            object.__setattr__(self, "operator", OPERATOR_EQUAL)

    def matches(self, other: "Toleration") -> bool:
        return (
            self.key == other.key
            and self.value == other.value
            and self.effect == other.effect
            and (self.operator or OPERATOR_EQUAL) == (other.operator or OPERATOR_EQUAL)
        )


@dataclass(frozen=True)
class ResourceReference:
    """
    Identity of the object owning a list of taints or tolerations.
    Used as a mapping key; namespace is empty for cluster-scoped kinds.
    """
    namespace: str = ""
    name: str = ""
    kind: str = ""
