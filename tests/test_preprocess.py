# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for domtrim.preprocessing.preprocess: output formats and token counts."""

from __future__ import annotations

import pytest

from domtrim.preprocessing.preprocess import (
    Format,
    PreprocessResult,
    count_tokens,
    count_tokens_approx,
    page_markdown,
    page_text,
    preprocess,
    strip_noise,
)
from tests._dom_helpers import html

_PAGE = html(
    '<header><nav><a href="/">Home</a></nav></header>'
    '<main><h1 style="color:red" data-id="1" id="t">Title</h1>'
    '<p onclick="x()" class="lead" aria-label="intro">Intro <img src="a.png" alt="pic"> text</p>'
    "<form><input name='q'><button>Go</button></form>"
    "<script>var secret = 1;</script><!-- note --></main>"
    "<footer>Footer</footer>",
    head="<title>My Page</title><style>h1{}</style>",
)


class TestStripNoise:
    def test_noise_elements_removed(self):
        out = strip_noise(_PAGE)
        for tag in ("<header", "<nav", "<footer", "<form", "<input", "<button", "<script", "<img", "<head", "<title"):
            assert tag not in out
        assert "Title" in out and "Intro" in out

    def test_noise_attributes_removed(self):
        out = strip_noise(_PAGE)
        for attr in ("style=", "data-id=", "onclick=", "aria-label="):
            assert attr not in out
        assert 'class="lead"' in out
        assert 'id="t"' in out

    def test_nested_noise_tags(self):
        out = strip_noise(html("<aside><form><button>b</button></form></aside><p>kept</p>"))
        assert "kept" in out
        assert "button" not in out


class TestPageText:
    def test_title_and_visible_text(self):
        out = page_text(_PAGE)
        title_line, text = out.split("\n", 1)
        assert title_line == "Page Title: My Page"
        assert "Intro text" in text
        assert "secret" not in text
        assert "note" not in text
        assert "h1{}" not in text

    def test_missing_title(self):
        assert page_text("<p>x</p>") == "Page Title: \nx"


class TestPageMarkdown:
    def test_structure_converted(self):
        out = page_markdown(
            html(
                "<h1>Title</h1><p>Some <b>bold</b> text</p><ul><li>a</li><li>b</li></ul>"
                "<p><a href='/x'>link</a></p><script>var secret = 1;</script><!-- note -->",
                head="<title>Head Only</title>",
            )
        )
        assert out.startswith("# Title")
        assert "**bold**" in out
        assert "- a\n- b" in out
        assert "[link](/x)" in out
        assert "secret" not in out
        assert "note" not in out
        assert "Head Only" not in out

    def test_no_triple_blank_lines(self):
        out = page_markdown(html("<p>a</p><div></div><div></div><p>b</p>"))
        assert "\n\n\n" not in out
        assert out == out.strip()


class TestPreprocess:
    def test_raw_is_passthrough(self):
        assert preprocess(_PAGE, Format.RAW) == PreprocessResult(content=_PAGE, format=Format.RAW)

    def test_default_is_html(self):
        result = preprocess(_PAGE)
        assert result.format is Format.HTML
        assert result.content == strip_noise(_PAGE)

    def test_format_by_name(self):
        assert preprocess(_PAGE, "text").format is Format.TEXT

    def test_markdown_format(self):
        result = preprocess(html("<h2>Hi</h2>"), "markdown")
        assert result.format is Format.MARKDOWN
        assert result.content == "## Hi"

    def test_clean_format(self):
        result = preprocess(html("<div><div><span>Hi</span></div></div>"), Format.CLEAN)
        assert result.content == "(body (span Hi))"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            preprocess(_PAGE, "image")


class TestTokenCounts:
    def test_empty_text_needs_no_encoder(self, monkeypatch):
        def _fail():
            raise AssertionError("encoder loaded")

        monkeypatch.setattr("domtrim.preprocessing.preprocess._get_encoder", _fail)
        assert count_tokens("") == 0

    def test_uses_encoder(self, monkeypatch):
        class _FakeEncoding:
            def encode(self, text, disallowed_special=()):
                return text.split()

        monkeypatch.setattr("domtrim.preprocessing.preprocess._get_encoder", lambda: _FakeEncoding())
        assert count_tokens("a b c") == 3

    def test_approx_latin(self):
        assert count_tokens_approx("x" * 400) == 100

    def test_approx_cjk_denser(self):
        assert count_tokens_approx("가" * 400) == 200

    def test_approx_empty(self):
        assert count_tokens_approx("") == 0
