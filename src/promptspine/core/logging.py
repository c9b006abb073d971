"""
Structured logging for prompt-spine.

Provides a single structlog configuration used by the CLI and any
automation that drives the prompt core. Library modules only ever call
``get_logger(__name__)`` and emit debug-level events; the host process
decides level and format once at startup.

Configuration is read from arguments or environment variables:
- PROMPTSPINE_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- PROMPTSPINE_LOG_FORMAT: json | console (default: console)

Examples:
    >>> from promptspine.core.logging import configure_logging, get_logger
    >>> configure_logging(level="DEBUG")
    >>> logger = get_logger(__name__)
    >>> logger.debug("snapshot_stored", hash="a1b2c3d4e5f6")

Tags:
    logging, structlog, observability, json-logging, prompt-spine
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.types import Processor

_configured = False


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    force: bool = False,
) -> None:
    """Configure structured logging for the application.

    Subsequent calls are no-ops unless ``force=True``. Logs go to stderr so
    rendered prompts on stdout stay clean for piping.

    Args:
        level: Log level (overrides PROMPTSPINE_LOG_LEVEL)
        json_format: True for JSON, False for console (overrides PROMPTSPINE_LOG_FORMAT)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("PROMPTSPINE_LOG_LEVEL", "WARNING")).upper()
    if json_format is None:
        json_format = os.environ.get("PROMPTSPINE_LOG_FORMAT", "console").lower() == "json"

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level),
        force=True,
    )
    logging.getLogger("promptspine").setLevel(getattr(logging, log_level))

    _configured = True


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs.

    Example:
        bind_context(template="deep-research.md", topic_id="dairy_harms_acne")
        logger.info("render_started")  # Includes template and topic_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(template="deep-research.md", topic_id="dairy_harms_acne"):
            logger.info("render_started")
        # Context cleared here
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "is_configured",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
