# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""structlog + stdlib bridge for the carriermap CLI.

Leaf module: no carriermap imports. Safe to call early in startup.
Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves; only the CLI (or an embedding application)
calls configure().
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import structlog

LOG_LEVEL_ENV = "CARRIERMAP_LOG_LEVEL"

# Chatty dependencies kept at WARNING unless the root level is DEBUG
_NOISY_LOGGERS = ("asyncio", "playwright")


def level_from_env(default: str = "WARNING") -> str:
    """Level name from CARRIERMAP_LOG_LEVEL, or *default* when unset/invalid."""
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return default


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def configure(*, json_output: bool = False, level: str = "INFO", stream: TextIO | None = None) -> None:
    """Route stdlib and structlog records through one structlog renderer.

    Args:
        json_output: True for JSON lines, False for human-readable console output.
        level: Root logger level name (default INFO).
        stream: Destination stream (default stderr, keeping stdout for results).
    """
    shared = _shared_processors()
    renderer = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root_level = logging.getLevelName(level.upper())
    root.setLevel(root_level if isinstance(root_level, int) else logging.INFO)

    if root.level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
