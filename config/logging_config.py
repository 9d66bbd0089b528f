"""structlog setup shared by the web front end and scripts."""

import logging
import sys

import structlog
from config.settings import settings


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure stdlib logging and structlog with console or JSON output."""
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    renderer = (
        structlog.processors.JSONRenderer()
        if (fmt or settings.log_format) == "json"
        else structlog.dev.ConsoleRenderer()
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
