#!/usr/bin/env python3
"""
TTSUM SPECIFIER PARSER
----------------------
Turns the compact single-line match expressions given on the command line
into Taint and Toleration values.

    taint:       key[=value][:effect]
    toleration:  [Operator(]key[=value][:effect][)]

Arity is checked strictly: a second '=' or ':' rejects the whole input
rather than picking the first or last occurrence.
"""

import logging
from typing import Tuple

from ttsum.core.errors import MalformedSpecifier
from ttsum.core.models import OPERATOR_EQUAL, OPERATOR_EXISTS, Taint, Toleration
from ttsum.parsing.effects import validate_effect

logger = logging.getLogger("ttsum.parsing")


def _split_key_value_effect(segment: str, text: str, subject: str) -> Tuple[str, str, str]:
    """
    Shared body of both grammars. ``text`` is the full original input so
    that error messages report what the user actually typed.
    """
    effect = ""
    parts = segment.split(":")
    if len(parts) > 2:
        raise MalformedSpecifier(subject, text)

    if len(parts) == 2:
        effect = parts[1]
        validate_effect(effect, text)

    key_value = parts[0].split("=")
    if len(key_value) > 2:
        raise MalformedSpecifier(subject, text)

    key = key_value[0]
    value = key_value[1] if len(key_value) == 2 else ""
    return key, value, effect


def parse_taint(text: str) -> Taint:
    """Parses ``key[=value][:effect]`` into a Taint."""
    key, value, effect = _split_key_value_effect(text, text, "taint")
    taint = Taint(key=key, value=value, effect=effect)
    logger.debug(f"Parsed taint expression '{text}' -> {taint}")
    return taint


def _split_operator(text: str) -> Tuple[str, str]:
    """
    Two-pass scan for an ``Operator(...)`` wrapper.

    Returns (inner, operator). Only ``Exists`` (any case) overrides the
    default; unknown keywords are accepted silently. If either parenthesis
    is missing, or ')' comes before '(', the whole text is the inner part.
    """
    operator = OPERATOR_EQUAL
    inner = ""

    open_idx = text.find("(")
    if open_idx >= 0:
        close_idx = text.find(")")
        if close_idx > open_idx:
            inner = text[open_idx + 1:close_idx]
            outer = text[:open_idx].rstrip()
            if outer.casefold() == OPERATOR_EXISTS.casefold():
                operator = OPERATOR_EXISTS

    if not inner:
        inner = text
    return inner, operator


def parse_toleration(text: str) -> Toleration:
    """Parses ``[Operator(]key[=value][:effect][)]`` into a Toleration."""
    inner, operator = _split_operator(text)
    key, value, effect = _split_key_value_effect(inner, text, "toleration")
    toleration = Toleration(key=key, value=value, effect=effect, operator=operator)
    logger.debug(f"Parsed toleration expression '{text}' -> {toleration}")
    return toleration
