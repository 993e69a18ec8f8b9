"""Process-default injector built from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jest_injector.infrastructure.config import Config, get_config
from jest_injector.infrastructure.logging import get_logger, setup_logging
from jest_injector.infrastructure.metrics import MetricsRegistry, setup_metrics
from jest_injector.infrastructure.tracing import setup_tracing

if TYPE_CHECKING:
    from jest_injector.application.injector import Injector


def build_injector(
    config: Config | None = None,
    metrics: MetricsRegistry | None = None,
    configure_observability: bool = True,
) -> Injector:
    """
    Build an injector wired to logging, metrics and tracing.

    Args:
        config: Settings, the global configuration if None
        metrics: Metrics sink; created from config when metrics are enabled
        configure_observability: Install logging and tracing providers

    Returns:
        A new, empty injector
    """
    from jest_injector.application.injector import Injector

    config = config or get_config()
    observability = config.observability

    if configure_observability:
        setup_logging(observability.log_level, observability.log_format)
        if observability.otel_endpoint:
            setup_tracing(
                service_name=observability.otel_service_name,
                otlp_endpoint=observability.otel_endpoint,
            )

    if metrics is None and observability.metrics_enabled:
        metrics = setup_metrics(port=observability.metrics_port)

    injector = Injector(config=config, metrics=metrics)
    get_logger(__name__).info(
        "injector_initialized",
        thread_safe=config.resolution.thread_safe,
        metrics_enabled=metrics is not None,
    )
    return injector


_injector: Injector | None = None


def get_injector() -> Injector:
    """Get the process-default injector, building it on first use."""
    global _injector
    if _injector is None:
        _injector = build_injector()
    return _injector


def reset_injector() -> None:
    """Drop the process-default injector (useful for testing)."""
    global _injector
    if _injector is not None:
        _injector.clear()
    _injector = None
