"""Infrastructure layer - cross-cutting concerns."""

from jest_injector.infrastructure.config import Config, get_config
from jest_injector.infrastructure.logging import setup_logging, get_logger
from jest_injector.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from jest_injector.infrastructure.tracing import setup_tracing, get_tracer, trace_span, resolution_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "resolution_span",
]
