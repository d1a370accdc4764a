# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Alternative page-content formats and token counting.

Formats:
  raw:   the HTML exactly as given
  html:  noise elements (media, forms, chrome, scripts) and noise attributes
         (styling, accessibility, event handlers, data-*) removed
  text:  page title + visible text
  markdown: the <body> content converted to Markdown
  clean: the bracket-notation tree from :func:`domtrim.pruning.pipeline.clean`
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import StrEnum

import tiktoken
from bs4 import BeautifulSoup, Comment
from markdownify import markdownify as md

from domtrim.serializer import PAGE_TITLE_PREFIX

NOISE_TAGS = (
    "script",
    "style",
    "noscript",
    "iframe",
    "svg",
    "img",
    "audio",
    "video",
    "canvas",
    "map",
    "source",
    "dialog",
    "menu",
    "menuitem",
    "track",
    "object",
    "embed",
    "form",
    "input",
    "button",
    "select",
    "textarea",
    "label",
    "option",
    "optgroup",
    "aside",
    "footer",
    "header",
    "nav",
    "head",
)

NOISE_ATTR_PREFIXES = (
    "style",
    "src",
    "alt",
    "title",
    "role",
    "aria-",
    "tabindex",
    "on",
    "data-",
)

_TEXT_SKIP_TAGS = ("script", "style", "noscript", "template", "head")

_CJK_APPROX_RE = re.compile(r"[\u3000-\u9fff\uac00-\ud7af]")
_WHITESPACE_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


class Format(StrEnum):
    RAW = "raw"
    HTML = "html"
    TEXT = "text"
    MARKDOWN = "markdown"
    CLEAN = "clean"


@dataclass(frozen=True, slots=True)
class PreprocessResult:
    content: str
    format: Format


@functools.cache
def _get_encoder() -> tiktoken.Encoding:
    # Loaded on first use: the encoding file is fetched and cached by tiktoken.
    return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str) -> int:
    """Count tokens using cl100k_base (GPT-4 tokenizer approximation)."""
    if not text:
        return 0
    return len(_get_encoder().encode(text, disallowed_special=()))


def count_tokens_approx(text: str) -> int:
    """CJK-aware approximate token count, no tokenizer needed.

    ~4 chars/token for Latin text, ~2 for CJK. Good enough for metrics;
    do not use for hard budgets.
    """
    sample = text[:2000]
    if not sample:
        return 0
    ratio = len(_CJK_APPROX_RE.findall(sample)) / len(sample)
    chars_per_token = 4.0 - 2.0 * ratio
    return int(len(text) / chars_per_token)


def strip_noise(html: str) -> str:
    """Remove noise elements and noise attributes, returning HTML."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(list(NOISE_TAGS)):
        if not tag.decomposed:  # nested inside an already removed tag
            tag.decompose()

    for tag in soup.find_all(True):
        doomed = [name for name in tag.attrs if name.startswith(NOISE_ATTR_PREFIXES)]
        for name in doomed:
            del tag[name]

    return str(soup)


def _drop_unreadable(soup: BeautifulSoup) -> None:
    for tag in soup.find_all(list(_TEXT_SKIP_TAGS)):
        if not tag.decomposed:
            tag.decompose()
    for comment in soup.find_all(string=lambda t: isinstance(t, Comment)):
        comment.extract()


def page_text(html: str) -> str:
    """``Page Title: <title>`` followed by the page's visible text."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else ""

    _drop_unreadable(soup)

    body = _WHITESPACE_RE.sub(" ", soup.get_text(" ")).strip()
    return f"{PAGE_TITLE_PREFIX}{title}\n{body}"


def page_markdown(html: str) -> str:
    """Convert the page's ``<body>`` content to Markdown (ATX headings, ``-`` bullets)."""
    soup = BeautifulSoup(html, "html.parser")
    _drop_unreadable(soup)

    body = soup.body or soup
    text = md(body.decode_contents(), heading_style="ATX", bullets="-")
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def preprocess(raw_html: str, fmt: Format | str = Format.HTML) -> PreprocessResult:
    """Render *raw_html* in the requested format.

    Raises:
        ValueError: unknown format name.
    """
    fmt = Format(fmt)
    if fmt is Format.RAW:
        content = raw_html
    elif fmt is Format.HTML:
        content = strip_noise(raw_html)
    elif fmt is Format.TEXT:
        content = page_text(raw_html)
    elif fmt is Format.MARKDOWN:
        content = page_markdown(raw_html)
    else:
        from domtrim.pruning.pipeline import clean

        content = clean(raw_html)
    return PreprocessResult(content=content, format=fmt)
