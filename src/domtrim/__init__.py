# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""domtrim: compact, token-efficient page text for language models.

Turns an HTML page into a bracket-notation tree such as
``(body (h1 Title) (p Some text (a link)))``: wrapper elements without text
of their own are collapsed, scripts/styles/comments dropped, framework
attributes stripped, and every piece of readable text kept in order.
"""

from __future__ import annotations

from domtrim.config import CleanSettings
from domtrim.errors import DomTrimError, InvalidTreeError, ParseError
from domtrim.parser import parse_html
from domtrim.pruning import PruneStats
from domtrim.pruning.attributes import DEFAULT_UID_KEY, SanitizeOptions, sanitize_attributes
from domtrim.pruning.comments import strip_comments
from domtrim.pruning.pipeline import CleanResult, aclean, clean, clean_tree, clean_with_stats
from domtrim.pruning.pruner import prune_tree
from domtrim.serializer import PAGE_CONTENTS_NOTE, serialize

__all__ = [
    "DEFAULT_UID_KEY",
    "PAGE_CONTENTS_NOTE",
    "CleanResult",
    "CleanSettings",
    "DomTrimError",
    "InvalidTreeError",
    "ParseError",
    "PruneStats",
    "SanitizeOptions",
    "aclean",
    "clean",
    "clean_tree",
    "clean_with_stats",
    "parse_html",
    "prune_tree",
    "sanitize_attributes",
    "serialize",
    "strip_comments",
]
