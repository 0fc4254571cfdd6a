"""Structured logging for pxpr.

Configures structlog to render human-readable events on stderr, so that
evaluation results written to stdout stay machine-readable.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.types import Processor

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def configure_logging(log_level: str = "warning") -> None:
    """Configure structured logging for the application.

    Args:
        log_level: One of ``LOG_LEVELS`` (case-insensitive).
    """
    level = getattr(logging, log_level.upper())

    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None) -> Any:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'pxpr'.
    """
    return structlog.get_logger(name or "pxpr")


if not structlog.is_configured():
    configure_logging()
