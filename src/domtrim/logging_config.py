# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for applications embedding domtrim.

Library modules only ever call ``logging.getLogger(__name__)``; nothing in
domtrim configures logging on import. An application (or a test) calls
:func:`configure` once to route those records through structlog, rendered
either for a terminal or as JSON lines.

Leaf module: no domtrim imports.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def resolve_level(level: str | int) -> int:
    """Map a level name (``"debug"``, ``"INFO"``) or number to a logging level.

    Unknown names fall back to INFO rather than failing startup.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def configure(
    *,
    json_output: bool = False,
    level: str | int = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Install the structlog formatter on the root logger.

    Args:
        json_output: True for JSON lines (log shippers), False for ConsoleRenderer.
        level: Root logger level, by name or number.
        stream: Destination stream (default ``sys.stderr``, keeping stdout
            free for cleaned output).
    """
    shared = _shared_processors()
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
