"""
Logging for the swap form.

swapform loggers log at the configured level; everything else (httpx and
other libraries) only reports warnings. Both structlog events and stdlib
records go through the same renderer, with any context bound through
structlog.contextvars (e.g. the pair being swapped) merged in.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings

PACKAGE_LOGGER = "swapform"
LIBRARY_LEVEL = logging.WARNING


def resolve_level(log_level: Optional[str] = None) -> int:
    return getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)


def build_renderer(level: int, log_format: Optional[str] = None) -> structlog.types.Processor:
    log_format = log_format or settings.log_format
    if log_format == "auto":
        log_format = "console" if level == logging.DEBUG else "json"
    if log_format == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Configure structlog and the stdlib handler.

    Args:
        log_level: Override level for swapform loggers (default: settings.log_level)
        log_format: "json", "console" or "auto" (default: settings.log_format)
    """
    level = resolve_level(log_level)
    renderer = build_renderer(level, log_format)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if isinstance(renderer, structlog.processors.JSONRenderer):
        shared_processors.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(LIBRARY_LEVEL)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
