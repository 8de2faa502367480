"""Structured logging for the gateway.

Every forwarding step emits a key/value event through structlog.  Logging is
a side channel only: nothing in the request path reads it back.

Output format follows ``LOG_FORMAT``: ``console`` for human-readable lines
(local development, tests) or ``json`` for one JSON object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor

SERVICE_NAME = "worklog-gateway"


def add_service_name(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Tag every event with the service name."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure stdlib logging and structlog for the whole process.

    Safe to call more than once; the last call wins.
    """
    processors: list[Processor] = [
        merge_contextvars,
        add_service_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if log_format.lower() == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Return a lazy structlog logger, bound to *name* when given.

    The logger resolves the active configuration on every ``bind()``, so it
    can be created at import time, before :func:`configure_logging` runs.
    """
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
