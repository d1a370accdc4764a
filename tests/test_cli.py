# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for domtrim.cli: calls main() in-process with argv lists."""

from __future__ import annotations

import io

import pytest

from domtrim.cli import main

pytestmark = pytest.mark.usefixtures("restore_logging")

_PAGE = "<html><head><title>T</title></head><body><div><p>x<br>y</p></div></body></html>"


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(_PAGE, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# TestOutput
# ---------------------------------------------------------------------------


class TestOutput:
    def test_clean_from_file(self, page_file, capsys):
        assert main([str(page_file)]) == 0
        assert capsys.readouterr().out == "(body (p x y))\n"

    def test_reads_stdin_by_default(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(_PAGE))
        assert main([]) == 0
        assert capsys.readouterr().out == "(body (p x y))\n"

    def test_markdown_format(self, page_file, capsys):
        assert main([str(page_file), "--format", "markdown"]) == 0
        out = capsys.readouterr().out
        assert "x" in out and "y" in out
        assert "<" not in out

    def test_text_format(self, page_file, capsys):
        assert main([str(page_file), "--format", "text"]) == 0
        assert capsys.readouterr().out.startswith("Page Title: T\n")

    def test_env_settings_applied(self, page_file, monkeypatch, capsys):
        monkeypatch.setenv("DOMTRIM_BRACKET_NOTATION", "0")
        monkeypatch.setenv("DOMTRIM_INCLUDE_TITLE", "1")
        assert main([str(page_file)]) == 0
        assert capsys.readouterr().out == "Page Title: T\n<body><p>x y</p></body>\n"

    def test_stats_logged_to_stderr(self, page_file, monkeypatch, capsys):
        monkeypatch.setattr("domtrim.pruning.pipeline.count_tokens", lambda text: len(text.split()))
        assert main([str(page_file), "--stats"]) == 0
        captured = capsys.readouterr()
        assert captured.out == "(body (p x y))\n"
        assert "tokens" in captured.err


# ---------------------------------------------------------------------------
# TestErrors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.html")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "cannot read" in captured.err

    def test_invalid_env_flag(self, page_file, monkeypatch, capsys):
        monkeypatch.setenv("DOMTRIM_STRIP_ID", "maybe")
        assert main([str(page_file)]) == 2
        assert "DOMTRIM_STRIP_ID" in capsys.readouterr().err

    def test_unknown_format_rejected(self, page_file):
        with pytest.raises(SystemExit) as exc:
            main([str(page_file), "--format", "image"])
        assert exc.value.code == 2

    def test_empty_input_prints_empty_line(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert main([]) == 0
        assert capsys.readouterr().out == "\n"
