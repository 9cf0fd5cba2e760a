"""
structlog setup for the CLI and for services embedding the pipeline.
"""
from __future__ import annotations

import logging
import sys

import structlog

from .config import get_settings


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure structlog processors. Logs go to stderr; console rendering unless json=True."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def configure_default_logging() -> None:
    """
    Send pipeline logs to stderr when the host application has not configured structlog.
    structlog's own default prints to stdout, which would mix with program output.
    """
    if structlog.is_configured():
        return
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
