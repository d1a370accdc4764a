# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Bottom-up collapse of wrapper elements.

A wrapper is any element without direct text: it only groups other
elements, so for an LLM it costs tokens without adding content. Each
wrapper is replaced by its own children, in place, until every surviving
element under the root carries text of its own.

Elements are snapshotted before any mutation and visited deepest/last
first. The walk from each element continues upward through wrapper
ancestors, so chains like ``div > div > div > span`` collapse in one pass.
Ancestors detached by an earlier walk are skipped when their turn comes.
"""

from __future__ import annotations

import logging

from lxml import etree

from domtrim.errors import InvalidTreeError
from domtrim.parser import has_direct_text, is_element, remove_keep_tail
from domtrim.pruning import PruneStats
from domtrim.serializer import VOID_TAGS

logger = logging.getLogger(__name__)

# Removed after the collapse regardless of their (code) text.
_ALWAYS_REMOVE_TAGS = ("script", "style")


def unwrap(el: etree._Element) -> None:
    """Replace *el* with its children at its own position.

    Children keep their mutual order. ``el.text`` and ``el.tail`` are merged
    into the neighbouring text so no character is lost. Text after a dropped
    void element (``<br>``, ``<img>``, ...) gets a leading space so words on
    either side do not run together.
    """
    parent = el.getparent()
    if parent is None:
        raise ValueError("cannot unwrap the root element")

    previous = el.getprevious()
    if el.text:
        if previous is None:
            parent.text = (parent.text or "") + el.text
        else:
            previous.tail = (previous.tail or "") + el.text
    if el.tail:
        if len(el):
            last = el[-1]
            last.tail = (last.tail or "") + el.tail
        else:
            tail = " " + el.tail if el.tag in VOID_TAGS else el.tail
            if previous is None:
                parent.text = (parent.text or "") + tail
            else:
                previous.tail = (previous.tail or "") + tail

    index = parent.index(el)
    parent[index : index + 1] = list(el)


def prune_tree(root: etree._Element) -> PruneStats:
    """Collapse every wrapper element under *root*, then drop script/style.

    *root* itself is never removed. Returns counts of what was removed.
    """
    if root is None:
        raise InvalidTreeError("prune_tree")

    stats = PruneStats()
    snapshot = [el for el in root.iter() if is_element(el)]
    snapshot.reverse()

    for el in snapshot:
        if el is not root and el.getparent() is None:
            continue  # already collapsed by a deeper walk
        node = el
        while node is not root and not has_direct_text(node):
            parent = node.getparent()
            node.attrib.pop("class", None)
            unwrap(node)
            stats.unwrapped += 1
            node = parent

    for el in list(root.iter(*_ALWAYS_REMOVE_TAGS)):
        if el is root:
            continue
        remove_keep_tail(el)
        stats.removed_scripts += 1

    logger.debug("pruned %d wrappers, %d script/style elements", stats.unwrapped, stats.removed_scripts)
    return stats
