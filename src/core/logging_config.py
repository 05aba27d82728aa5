"""Structured logging configuration.

This module initializes structlog with a stable JSON line format on stderr.
The minimum level comes from the TABLESINK_LOG_LEVEL variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL, ENV_PREFIX

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger with structured output.
    """
    _configure_once()
    return structlog.get_logger(name)


def resolve_log_level(raw_level: str | None) -> int:
    """Map a level name onto a stdlib logging level.

    Unknown names fall back to INFO.
    """
    level_name = (raw_level or DEFAULT_LOG_LEVEL).strip().upper()
    if level_name == "WARN":
        level_name = "WARNING"
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else logging.INFO


def _configure_once() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    level = resolve_log_level(os.getenv(f"{ENV_PREFIX}LOG_LEVEL"))
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True


def _stderr_logger(*_args: Any) -> structlog.PrintLogger:
    # stdout carries CLI results; resolve sys.stderr per logger so redirects apply
    return structlog.PrintLogger(sys.stderr)
