# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""In-place tree simplification stages.

Each stage takes the root of an lxml element tree, mutates it, and returns
a small count/stat record for logging:

- :func:`~domtrim.pruning.pruner.prune_tree`: collapse wrapper elements
- :func:`~domtrim.pruning.comments.strip_comments`: drop comment nodes
- :func:`~domtrim.pruning.attributes.sanitize_attributes`: drop noisy attributes
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PruneStats:
    """What a :func:`prune_tree` run removed."""

    unwrapped: int = 0  # wrapper elements collapsed into their parent
    removed_scripts: int = 0  # <script>/<style> elements dropped

    @property
    def total(self) -> int:
        return self.unwrapped + self.removed_scripts
