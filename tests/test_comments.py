# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for domtrim.pruning.comments."""

from __future__ import annotations

import pytest
from lxml import etree

from domtrim.errors import InvalidTreeError
from domtrim.pruning.comments import strip_comments
from tests._dom_helpers import body, comment_count, element_tags


class TestStripComments:
    def test_removes_comments_at_every_depth(self):
        root = body("<!-- top --><div><!-- mid --><p>x<!-- deep -->y</p></div>")
        removed = strip_comments(root)
        assert removed == 3
        assert comment_count(root) == 0

    def test_text_after_comment_stays_in_place(self):
        root = body("<p>x<!-- deep -->y</p>")
        strip_comments(root)
        assert root[0].text == "xy"

    def test_leading_comment_tail_becomes_parent_text(self):
        root = body("<p><!-- c -->hello</p>")
        strip_comments(root)
        assert root[0].text == "hello"

    def test_tail_joins_previous_sibling(self):
        root = body("<p><b>a</b><!-- c -->b</p>")
        strip_comments(root)
        assert root[0][0].tail == "b"

    def test_elements_untouched(self):
        root = body('<div class="c"><!-- x --><span>s</span></div>')
        strip_comments(root)
        assert element_tags(root) == ["body", "div", "span"]
        assert root[0].get("class") == "c"

    def test_idempotent(self):
        root = body("<div><!-- a --><p>b</p></div>")
        strip_comments(root)
        once = etree.tostring(root)
        assert strip_comments(root) == 0
        assert etree.tostring(root) == once

    def test_no_comments_is_noop(self):
        root = body("<p>plain</p>")
        assert strip_comments(root) == 0

    def test_none_root_raises(self):
        with pytest.raises(InvalidTreeError):
            strip_comments(None)
