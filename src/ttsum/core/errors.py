#!/usr/bin/env python3
"""
TTSUM ERRORS
------------
Exception hierarchy for the whole tool. The core only raises; deciding
whether a failure ends the process is left to the CLI.

Author: TTSum Team
Date: 2026-10-19
"""

from typing import Optional


class TTSumError(Exception):
    """Base class for every error ttsum raises on purpose."""


class SpecifierError(TTSumError, ValueError):
    """A match expression could not be turned into a Taint or Toleration."""

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self.text = text


class InvalidEffect(SpecifierError):
    """The effect segment is not one of the supported taint effects."""

    def __init__(self, effect: str, text: Optional[str] = None):
        super().__init__(
            f"invalid taint effect: {effect}, unsupported taint effect",
            text if text is not None else effect,
        )
        self.effect = effect


class MalformedSpecifier(SpecifierError):
    """More than one '=' or ':' in the relevant segment."""

    def __init__(self, subject: str, text: str):
        super().__init__(f"invalid {subject}: {text}", text)
        self.subject = subject


class InventoryError(TTSumError):
    """An inventory source could not be listed or converted."""


class UsageError(TTSumError):
    """The command line asked for an impossible combination."""
