"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

import structlog

LOGGER_NAME = "wayback_harvest"


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger.

    Results own stdout, so every handler writes to stderr or to ``log_file``.
    Calling it again replaces the previous handlers.
    """

    level = "DEBUG" if verbose else "WARNING"
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "plain",
            "stream": "ext://sys.stderr",
        },
    }
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["run_file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG" if verbose else "INFO",
            "filename": str(log_file),
            "formatter": "plain",
            "encoding": "utf-8",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "()": "pythonjsonlogger.json.JsonFormatter",
                    "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": handlers,
            "loggers": {
                LOGGER_NAME: {
                    "handlers": list(handlers),
                    "level": "DEBUG" if (verbose or log_file) else level,
                    "propagate": False,
                },
            },
        }
    )

    # Forward structlog events to stdlib logging; JSON rendering happens at handler level
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger(LOGGER_NAME)


def get_logger(component: str) -> structlog.BoundLogger:
    """Return a logger bound to a pipeline component."""

    return structlog.get_logger(f"{LOGGER_NAME}.{component}").bind(component=component)


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
