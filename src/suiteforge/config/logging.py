"""Logging configuration using structlog.

Events are rendered by structlog and handed to the standard ``logging``
module under the ``suiteforge`` logger, so pytest's log capture (the
"Captured log" report section and the ``caplog`` fixture) shows them next
to the failing test.
"""

import logging
import sys

import structlog

from suiteforge.config.settings import Settings, get_settings

ROOT_LOGGER = "suiteforge"


def configure_logging(settings: Settings | None = None, *, install_handler: bool = True) -> None:
    """Configure structlog for the toolkit.

    Args:
        settings: Source of log_level and debug (default: get_settings()).
        install_handler: Attach a stdout handler to the root logger. The
            pytest plugin passes False because pytest installs its own
            capturing handlers.
    """
    settings = settings or get_settings()

    log_level = getattr(logging, settings.log_level)
    logging.getLogger(ROOT_LOGGER).setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            # JSON for CI logs, pretty print in debug
            structlog.dev.ConsoleRenderer(colors=False)
            if settings.debug
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if install_handler:
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=log_level,
        )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
