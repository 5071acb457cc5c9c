"""Structured logging helpers."""

from __future__ import annotations

import logging

import structlog


def configure_logging(level: int = logging.INFO, *, json_output: bool = True) -> None:
    """Route structlog output through stdlib logging handlers.

    The client only emits events; applications call this once at startup.
    """

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        # `logger` below is created on import, before the host application
        # calls this; caching would pin it to the first configuration seen.
        cache_logger_on_first_use=False,
    )


logger = structlog.get_logger("saucenao")

__all__ = ["configure_logging", "logger"]
