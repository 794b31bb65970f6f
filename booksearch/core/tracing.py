"""
Booksearch - OpenTelemetry Tracing Module

Patterns Applied:
- One-time configure_tracing() at startup
- Minimal manual instrumentation (one span per aggregate call)
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from booksearch import __version__

# Module-level flag for one-time configuration
_configured: bool = False

SERVICE_NAME = "booksearch-service"


def configure_tracing(
    service_name: str = SERVICE_NAME,
    console_export: bool = False,
) -> None:
    """Configure OpenTelemetry tracing for the application.

    This function must be called exactly ONCE at application startup.
    Until it is called, get_tracer() hands out no-op tracers.

    Args:
        service_name: Name of the service for trace attribution
        console_export: Whether to export spans to console (for development)
    """
    global _configured

    if _configured:
        return

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )

    provider = TracerProvider(resource=resource)

    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _configured = True


def get_tracer(name: str) -> Any:
    """Get a tracer instance for creating spans.

    Args:
        name: Tracer name (typically module name)

    Returns:
        OpenTelemetry Tracer instance
    """
    return trace.get_tracer(name)


def reset_tracing() -> None:
    """Allow configure_tracing() to run again; used by tests.

    OpenTelemetry keeps the first global provider, so only the module flag
    is cleared.
    """
    global _configured
    _configured = False
