# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""domtrim exception hierarchy.

All domtrim-specific errors inherit from DomTrimError, allowing callers
to catch the base class for any failure or specific subclasses for
targeted handling.
"""

from __future__ import annotations


class DomTrimError(Exception):
    """Base exception for all domtrim errors."""


class InvalidTreeError(DomTrimError, TypeError):
    """A stage was handed a missing (None) tree instead of an element."""

    def __init__(self, stage: str) -> None:
        super().__init__(f"{stage}: expected an lxml element, got None")
        self.stage = stage


class ParseError(DomTrimError):
    """Upstream HTML parsing produced no usable tree."""
