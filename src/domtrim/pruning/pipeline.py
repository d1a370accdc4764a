# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Cleaning pipeline orchestration.

Flow:
  raw.html
    → lxml parse (content root = <body>)
    → prune_tree (collapse wrappers, drop script/style)
    → strip_comments
    → sanitize_attributes
    → serialize (bracket notation by default)

Each call owns its tree; concurrent calls on different inputs are safe.
Handing the same lxml tree to concurrent ``clean_tree`` calls is not.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from lxml import etree

from domtrim.config import CleanSettings
from domtrim.errors import InvalidTreeError, ParseError
from domtrim.parser import is_empty, page_title, parse_html
from domtrim.pipeline_timer import StageTimer
from domtrim.preprocessing.preprocess import count_tokens
from domtrim.pruning import PruneStats
from domtrim.pruning.attributes import sanitize_attributes
from domtrim.pruning.comments import strip_comments
from domtrim.pruning.pruner import prune_tree
from domtrim.serializer import PAGE_TITLE_PREFIX, serialize

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    """Output of :func:`clean_with_stats`."""

    content: str = ""
    raw_token_count: int = 0
    cleaned_token_count: int = 0
    token_reduction_pct: float = 0.0
    prune_stats: PruneStats = field(default_factory=PruneStats)
    comments_removed: int = 0
    attributes_removed: int = 0
    stage_ms: dict[str, float] = field(default_factory=dict)
    elapsed_ms: float = 0.0
    errors: list[str] = field(default_factory=list)


def _run_stages(root: etree._Element, settings: CleanSettings, result: CleanResult, timer: StageTimer) -> str:
    title = page_title(root) if settings.include_title else None
    timer.stage("prune")
    result.prune_stats = prune_tree(root)
    timer.stage("comments")
    result.comments_removed = strip_comments(root)
    timer.stage("attributes")
    result.attributes_removed = sanitize_attributes(root, settings.sanitize)
    timer.stage("serialize")
    content = serialize(
        root,
        use_bracket_notation=settings.use_bracket_notation,
        trailing_note=settings.trailing_note,
    )
    timer.finalize()
    if title is not None:
        content = f"{PAGE_TITLE_PREFIX}{title}\n{content}"
    return content


def clean_tree(root: etree._Element, settings: CleanSettings | None = None) -> str:
    """Run prune → comments → attributes → serialize on an existing tree.

    The tree is modified in place.

    Raises:
        InvalidTreeError: *root* is None.
    """
    if root is None:
        raise InvalidTreeError("clean_tree")
    if settings is None:
        settings = CleanSettings()
    return _run_stages(root, settings, CleanResult(), StageTimer())


def clean(raw_html: str, settings: CleanSettings | None = None) -> str:
    """Parse *raw_html* and return its pruned, compact representation.

    Unparseable or empty input yields ``""`` rather than an exception.
    """
    try:
        root = parse_html(raw_html)
    except ParseError as e:
        logger.warning("HTML parse failed, returning empty result: %s", e)
        return ""
    if is_empty(root):
        return ""
    return clean_tree(root, settings)


def clean_with_stats(raw_html: str, settings: CleanSettings | None = None) -> CleanResult:
    """Like :func:`clean`, plus token counts, removal counts and stage timings."""
    if settings is None:
        settings = CleanSettings()
    result = CleanResult()
    timer = StageTimer()

    timer.stage("parse")
    try:
        root = parse_html(raw_html)
    except ParseError as e:
        timer.finalize()
        result.errors.append(str(e))
        result.stage_ms = timer.elapsed_per_stage()
        result.elapsed_ms = timer.total_ms()
        logger.warning("HTML parse failed, returning empty result: %s", e)
        return result

    if not is_empty(root):
        result.content = _run_stages(root, settings, result, timer)
    timer.finalize()

    result.raw_token_count = count_tokens(raw_html)
    result.cleaned_token_count = count_tokens(result.content) if result.content else 0
    if result.raw_token_count > 0:
        result.token_reduction_pct = (1.0 - result.cleaned_token_count / result.raw_token_count) * 100
    result.stage_ms = timer.elapsed_per_stage()
    result.elapsed_ms = timer.total_ms()

    logger.debug(
        "cleaned page: %d → %d tokens (%.1f%% reduction), %d wrappers unwrapped",
        result.raw_token_count,
        result.cleaned_token_count,
        result.token_reduction_pct,
        result.prune_stats.unwrapped,
    )
    return result


async def aclean(raw_html: str, settings: CleanSettings | None = None) -> str:
    """Run :func:`clean` in a worker thread so event loops stay responsive.

    lxml releases the GIL while parsing, so pages cleaned concurrently this
    way overlap.
    """
    return await asyncio.to_thread(clean, raw_html, settings)
