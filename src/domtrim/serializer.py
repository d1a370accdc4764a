# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tree → compact string for LLM consumption.

Two notations:
- bracket: ``(div (p Hello) (p World))``, tag names only, no attributes
- angle: plain HTML, attributes included

Both render from a single walk over the tree's start/text/end tokens, so
tag boundaries never have to be rediscovered in rendered markup. The
rendered string then goes through entity normalization, whitespace
compaction and bracket tightening.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import StrEnum
from typing import NamedTuple

from lxml import etree
from lxml.html import defs

from domtrim.errors import InvalidTreeError
from domtrim.parser import is_element, is_empty

# Synthetic wrapper some producers put around bare text runs; only its content is rendered.
TEXT_CONTAINER_TAG = "text"

PAGE_CONTENTS_NOTE = "\nAbove are the pruned HTML contents of the page."

PAGE_TITLE_PREFIX = "Page Title: "

VOID_TAGS: frozenset[str] = frozenset(defs.empty_tags)

# Applied in order.
HTML_ESCAPE_TABLE: tuple[tuple[str, str], ...] = (
    ("&quot;", '"'),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&nbsp;", " "),
    ("&ndash;", "-"),
    ("&rsquo;", "'"),
    ("&lsquo;", "'"),
    ("&ldquo;", '"'),
    ("&rdquo;", '"'),
    ("&#39;", "'"),
    ("&#40;", "("),
    ("&#41;", ")"),
)

_ANGLE_ENTITIES = frozenset({"&lt;", "&gt;"})

# The parser decodes entities into characters; re-encode the ones the table
# knows so "&rsquo;" in the source and a literal "’" normalize the same way.
_CHAR_ENTITIES = {
    "\xa0": "&nbsp;",
    "–": "&ndash;",
    "’": "&rsquo;",
    "‘": "&lsquo;",
    "“": "&ldquo;",
    "”": "&rdquo;",
}
_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", **_CHAR_ENTITIES})
_ATTR_ESCAPES = str.maketrans({"&": "&amp;", '"': "&quot;", **_CHAR_ENTITIES})

_WHITESPACE_RE = re.compile(r"\s+")
_CLOSE_GAP_RE = re.compile(r"\)\s+(?=\))")
_OPEN_GAP_RE = re.compile(r"\(\s+(?=\()")


class TokenKind(StrEnum):
    START = "start"
    END = "end"
    TEXT = "text"


class Token(NamedTuple):
    kind: TokenKind
    data: str  # tag name, or text content
    attrs: tuple[tuple[str, str], ...] = ()
    void: bool = False  # childless, textless void element (no end tag in HTML)


def _is_void(el: etree._Element) -> bool:
    return el.tag in VOID_TAGS and len(el) == 0 and not el.text


def iter_tokens(root: etree._Element) -> Iterator[Token]:
    """Yield the document-order token stream of *root*.

    Comments and processing instructions yield nothing themselves, but the
    text following them does. The text container tag yields only its
    content. *root*'s own tail lies outside the tree and is skipped.
    """
    stack: list[tuple[etree._Element, bool]] = [(root, False)]
    while stack:
        node, closing = stack.pop()
        if closing:
            if node.tag != TEXT_CONTAINER_TAG:
                yield Token(TokenKind.END, node.tag, void=_is_void(node))
            if node is not root and node.tail:
                yield Token(TokenKind.TEXT, node.tail)
            continue

        if not is_element(node):
            if node is not root and node.tail:
                yield Token(TokenKind.TEXT, node.tail)
            continue

        if node.tag != TEXT_CONTAINER_TAG:
            yield Token(TokenKind.START, node.tag, tuple(node.attrib.items()), _is_void(node))
        if node.text:
            yield Token(TokenKind.TEXT, node.text)
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node))


def _render_bracket(tokens: Iterator[Token]) -> str:
    parts: list[str] = []
    after_open = False
    for tok in tokens:
        if tok.kind is TokenKind.START:
            parts.append(f" ({tok.data}")
            after_open = True
        elif tok.kind is TokenKind.END:
            parts.append(")")
            after_open = False
        else:
            if after_open:
                parts.append(" ")
                after_open = False
            parts.append(tok.data.translate(_TEXT_ESCAPES))
    return "".join(parts)


def _render_angle(tokens: Iterator[Token]) -> str:
    parts: list[str] = []
    for tok in tokens:
        if tok.kind is TokenKind.START:
            attrs = "".join(
                f' {name}="{value.translate(_ATTR_ESCAPES)}"' if value else f" {name}" for name, value in tok.attrs
            )
            parts.append(f"<{tok.data}{attrs}>")
        elif tok.kind is TokenKind.END:
            if not tok.void:
                parts.append(f"</{tok.data}>")
        else:
            parts.append(tok.data.translate(_TEXT_ESCAPES))
    return "".join(parts)


def normalize_entities(text: str, *, keep_angle_escapes: bool = False) -> str:
    """Replace the entities of :data:`HTML_ESCAPE_TABLE` with literal characters.

    With *keep_angle_escapes*, ``&lt;``/``&gt;`` stay encoded so the result
    cannot contain tag brackets.
    """
    for entity, literal in HTML_ESCAPE_TABLE:
        if keep_angle_escapes and entity in _ANGLE_ENTITIES:
            continue
        text = text.replace(entity, literal)
    return text


def compact_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def tighten_brackets(text: str) -> str:
    """``) )`` → ``))`` and ``( (`` → ``((``, for whole runs."""
    text = _CLOSE_GAP_RE.sub(")", text)
    return _OPEN_GAP_RE.sub("(", text)


def serialize(
    root: etree._Element,
    *,
    use_bracket_notation: bool = False,
    trailing_note: str | None = None,
) -> str:
    """Render *root* to a single compact string.

    Does not modify the tree. An empty tree renders as ``""``.
    """
    if root is None:
        raise InvalidTreeError("serialize")
    if not is_element(root) or is_empty(root):
        return ""

    tokens = iter_tokens(root)
    rendered = _render_bracket(tokens) if use_bracket_notation else _render_angle(tokens)
    rendered = normalize_entities(rendered, keep_angle_escapes=use_bracket_notation)
    rendered = tighten_brackets(compact_whitespace(rendered))

    if trailing_note:
        rendered += trailing_note
    return rendered
