"""structlog configuration for envbind.

Two output modes:
- Human (default): console-rendered lines to stderr
- JSON (--log-json): Structured JSON lines to stderr

Library modules log through ``logging.getLogger(__name__)``; the stdlib
records are routed through structlog's ProcessorFormatter so both styles
render the same way.
"""

from __future__ import annotations

import logging
import sys

import structlog

from envbind.domain.levels import LogLevel


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    level: LogLevel = LogLevel.WARN,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Force DEBUG-level output for the ``envbind`` logger.
        log_json: Use JSON renderer instead of console renderer.
        level: Level for the ``envbind`` logger when not verbose.
    """
    envbind_level = logging.DEBUG if verbose else int(level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("envbind").setLevel(envbind_level)
