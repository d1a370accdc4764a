# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Remove HTML comments at any depth."""

from __future__ import annotations

import logging

from lxml import etree

from domtrim.errors import InvalidTreeError
from domtrim.parser import remove_keep_tail

logger = logging.getLogger(__name__)


def strip_comments(root: etree._Element) -> int:
    """Remove every comment below *root*; text after a comment stays put.

    Returns the number of comments removed.
    """
    if root is None:
        raise InvalidTreeError("strip_comments")

    comments = [c for c in root.iter(etree.Comment) if c is not root]
    for comment in comments:
        remove_keep_tail(comment)

    if comments:
        logger.debug("removed %d comments", len(comments))
    return len(comments)
