"""
Booksearch - Structured Logging Module

The service logs JSON lines to stdout. The CLI prints results on stdout,
so it sends its log lines to stderr instead.

Patterns Applied:
- One-time configure_logging() at startup
- structlog BoundLogger with JSON output

Anti-Patterns Avoided:
- structlog.configure() called per get_logger() - prevented via _configured flag
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.typing import EventDict

SERVICE_NAME = "booksearch-service"

_configured: bool = False
_service_name: str = SERVICE_NAME


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Stamp the configured service name on every log entry."""
    event_dict["service"] = _service_name
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    service_name: str = SERVICE_NAME,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog for the application.

    Must be called once at startup; later calls are no-ops until
    reset_logging() is called.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
        json_output: JSON lines when True, console rendering otherwise
        service_name: Value of the "service" key on every entry
        stream: Destination of log lines (default: stdout)
    """
    global _configured, _service_name

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    output = stream if stream is not None else sys.stdout
    _service_name = service_name

    logging.basicConfig(format="%(message)s", stream=output, level=level)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_service_info,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to a module name."""
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Reset logging configuration for testing."""
    global _configured, _service_name
    _configured = False
    _service_name = SERVICE_NAME
    structlog.reset_defaults()
