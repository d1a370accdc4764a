# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Raw HTML → lxml tree.

lxml's recovering HTML parser always synthesizes ``<html>``/``<body>`` for
fragments, so the tree handed to the pruning stages is rooted at ``<body>``
(the page content). Documents without a body element fall back to the
document element.
"""

from __future__ import annotations

import logging

import lxml.html
from lxml import etree

from domtrim.errors import ParseError

logger = logging.getLogger(__name__)


def _make_parser() -> lxml.html.HTMLParser:
    # One parser per call: lxml parsers are not safe to share across threads.
    return lxml.html.HTMLParser(recover=True, encoding="utf-8", remove_comments=False)


def parse_html(raw_html: str) -> lxml.html.HtmlElement:
    """Parse *raw_html* and return the content root.

    Raises:
        ParseError: input is empty/blank or lxml could not build a document.
    """
    if raw_html is None or not raw_html.strip():
        raise ParseError("Empty HTML input")

    try:
        doc = lxml.html.document_fromstring(raw_html.encode("utf-8"), parser=_make_parser())
    except (etree.LxmlError, ValueError) as e:
        raise ParseError(f"lxml parsing failed: {e}") from e

    if doc is None:
        raise ParseError("lxml returned no document")

    body = doc.find("body")
    return body if body is not None else doc


def is_empty(root: etree._Element) -> bool:
    """True when *root* has no child nodes and no non-whitespace text."""
    return len(root) == 0 and not (root.text or "").strip()


def has_direct_text(el: etree._Element) -> bool:
    """True when one of *el*'s own text segments is non-whitespace.

    lxml stores an element's immediate text as its ``.text`` plus the
    ``.tail`` of each child (comments included); text inside child elements
    does not count.
    """
    if el.text and el.text.strip():
        return True
    return any(child.tail and child.tail.strip() for child in el)


def is_element(node: etree._Element) -> bool:
    """True for real elements, False for comments, PIs and entities."""
    return isinstance(node.tag, str)


def remove_keep_tail(node: etree._Element) -> None:
    """Detach *node* (and its subtree), leaving its tail text in place."""
    parent = node.getparent()
    if parent is None:
        return
    if node.tail:
        previous = node.getprevious()
        if previous is None:
            parent.text = (parent.text or "") + node.tail
        else:
            previous.tail = (previous.tail or "") + node.tail
    parent.remove(node)


def page_title(root: etree._Element) -> str:
    """Text of the document's ``<title>``, or ``""``.

    Looks through the whole document *root* belongs to, so it also finds
    the head title when *root* is ``<body>``.
    """
    title = root.getroottree().findtext(".//title")
    return " ".join(title.split()) if title else ""
