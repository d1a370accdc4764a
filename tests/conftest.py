# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import domtrim  # noqa: F401
except ImportError:
    raise ImportError("domtrim is not installed. Run: pip install -e '.[dev]'") from None

import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep DOMTRIM_* variables from the developer's shell out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("DOMTRIM_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def restore_logging():
    """Restore root logger handlers/level and structlog defaults after a test."""
    import structlog

    root = logging.getLogger()
    old_handlers = root.handlers[:]
    old_level = root.level
    yield
    root.handlers = old_handlers
    root.setLevel(old_level)
    structlog.reset_defaults()
