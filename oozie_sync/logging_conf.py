"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Optional

import structlog

from .errors import ConfigInvalidError

LOGGER_NAME = "oozie_sync"

_STRUCTLOG_CONFIGURED = False


def _handlers(level: str, log_file: Optional[Path]) -> dict[str, dict[str, Any]]:
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json",
            "stream": "ext://sys.stderr",
        },
    }
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigInvalidError(
                f"failed to create log directory for {log_file}: {exc}"
            ) from exc
        handlers["sync_file"] = {
            "class": "logging.FileHandler",
            "level": "INFO",
            "filename": str(log_file),
            "encoding": "utf-8",
            "formatter": "json",
        }
    return handlers


def configure_logging(
    verbose: bool = False, log_file: Optional[Path] = None
) -> structlog.stdlib.BoundLogger:
    """Configure structlog + stdlib handlers and return the application logger.

    The stdlib side is rebuilt on every call so handlers follow the current
    ``sys.stderr``; structlog itself is configured once per process.
    """

    global _STRUCTLOG_CONFIGURED
    level = "DEBUG" if verbose else "INFO"
    handlers = _handlers(level, log_file)
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            }
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAME: {
                "handlers": list(handlers),
                "level": level,
                "propagate": False,
            },
        },
    }
    try:
        logging.config.dictConfig(config)
    except (OSError, ValueError) as exc:
        raise ConfigInvalidError(f"failed to configure logging: {exc}") from exc

    if not _STRUCTLOG_CONFIGURED:
        # Event dicts become msg + extra, which the JSON formatter flattens.
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.render_to_log_kwargs,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        _STRUCTLOG_CONFIGURED = True
    return structlog.get_logger(LOGGER_NAME)


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Return a logger under the application namespace bound to ``component``."""

    return structlog.get_logger(f"{LOGGER_NAME}.{component}").bind(component=component)


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger"]
