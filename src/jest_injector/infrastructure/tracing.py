"""OpenTelemetry tracing for resolutions."""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

TRACER_NAME = "jest_injector"

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "jest_injector",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider and return the injector tracer.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export to console (for debugging)

    Returns:
        Configured tracer instance
    """
    global _tracer

    from jest_injector import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the injector tracer, a no-op one until a provider is installed."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Open a span on the injector tracer.

    Exceptions are recorded on the span, which is marked as failed, and
    re-raised.

    Args:
        name: Name of the span
        attributes: Optional attributes; None values are skipped

    Yields:
        The created span
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, value)
        yield span


def resolution_span(operation: str, **attributes: Any) -> AbstractContextManager[trace.Span]:
    """
    Open the span for one top-level injector operation.

    Args:
        operation: ``get``, ``invoke`` or ``create``
        **attributes: Recorded under the ``injector.`` namespace

    Returns:
        A context manager yielding the span
    """
    return trace_span(
        f"injector.{operation}",
        {f"injector.{key}": value for key, value in attributes.items()},
    )
