"""Logging setup: stdlib logging as the sink, structlog for key/value events."""
import logging
import sys

import structlog

from .config import config


def configure_logging(level=None, json=None):
    """
    Configure stdlib logging and structlog once for the process.

    Args:
        level: Level name or number; defaults to ``LOG_LEVEL``.
        json: Render JSON lines instead of the console format; defaults to ``LOG_JSON``.

    Returns:
        The numeric level that was applied.
    """
    level = level if level is not None else config.LOG_LEVEL
    json = config.LOG_JSON if json is None else json
    numeric_level = level if isinstance(level, int) else logging.getLevelName(str(level).upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(level=numeric_level, format="%(message)s", stream=sys.stdout, force=True)

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    return numeric_level
