#!/usr/bin/env python3
"""
TTSUM EFFECT VALIDATOR
----------------------
Checks a taint-effect token against the fixed set the scheduler knows.
"""

from typing import Optional

from ttsum.core.errors import InvalidEffect
from ttsum.core.models import VALID_EFFECTS


def validate_effect(effect: str, text: Optional[str] = None) -> None:
    """
    Accepts exactly NoSchedule, PreferNoSchedule and NoExecute.
    Comparison is case-sensitive; callers skip this for an absent effect.
    """
    if effect not in VALID_EFFECTS:
        raise InvalidEffect(effect, text)
