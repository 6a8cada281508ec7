from __future__ import annotations

import logging
import os
from typing import Any

import structlog

_LIBRARY_LOGGER = "geocode_client"


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _resolve_format(log_format: str | None) -> str:
    if log_format:
        return log_format.lower()
    if os.getenv("APP_ENV") == "dev" and "LOG_FORMAT" not in os.environ:
        return "console"
    return os.getenv("LOG_FORMAT", "json").lower()


def setup_logging(level: str | int | None = None, log_format: str | None = None) -> None:
    """Route structlog through stdlib logging for applications embedding the client.

    - JSON lines (or console output) with ISO/UTC timestamp, level and logger name
    - Bound fields such as ``cache_key`` are rendered as keys
    - ``LOG_LEVEL`` / ``LOG_FORMAT`` are read when arguments are omitted

    The library itself never calls this; it only emits debug events.
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if _resolve_format(log_format) == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    library_logger = logging.getLogger(_LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(_resolve_level(level))
    library_logger.propagate = False


def get_logger(name: str, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger backed by the stdlib logger ``name``.

    Events stay silent until the host configures logging (``setup_logging`` or
    its own stdlib handlers); nothing is printed by default.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        **initial_values,
    )
