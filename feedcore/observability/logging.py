"""Structured logging for feedcore.

Every event carries the ``service`` name, and loggers obtained through
:func:`get_logger` also carry the ``component`` that emitted them (``fetch``,
``etag``, ``update`` and so on). httpx and httpcore log each request through
the standard library; those records are held at WARNING or above because
the fetch client already reports every request as ``fetch_complete``.
"""

import logging
import sys
from typing import TextIO

import structlog
from structlog.typing import EventDict, WrappedLogger


SERVICE_NAME = "feedcore"

# Standard library loggers that duplicate the fetch client's own events.
CHATTY_LOGGERS = ("httpx", "httpcore")


def add_service_name(
    _logger: WrappedLogger, _method: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structured logging for the CLI and library callers.

    Args:
        level: Logging level (default: INFO).
        output: Output stream (default: stderr).
        json_format: Whether to use JSON format (default: True). The console
            renderer only colors output when the stream is a terminal.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=output.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=output,
        level=level,
    )
    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(component: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, bound to ``component`` when one is given.

    Args:
        component: Subsystem name added to every event.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(SERVICE_NAME)
    if component is not None:
        logger = logger.bind(component=component)
    return logger
