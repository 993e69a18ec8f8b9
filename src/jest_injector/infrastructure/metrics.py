"""Prometheus metrics for dependency resolution."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all injector metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        self.resolutions_total = Counter(
            "injector_resolutions_total",
            "Total type resolutions",
            ["outcome"],  # success, instance, not_found, cycle, error
            registry=self._registry,
        )

        self.resolution_seconds = Histogram(
            "injector_resolution_seconds",
            "Time spent running a factory, including its own dependencies",
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.cycles_total = Counter(
            "injector_cycles_total",
            "Total dependency cycles detected",
            registry=self._registry,
        )

        self.invocations_total = Counter(
            "injector_invocations_total",
            "Total callables invoked with injected arguments",
            ["shape"],  # function, method_pair, callable_object, named, class
            registry=self._registry,
        )

        self.bindings = Gauge(
            "injector_bindings",
            "Number of registered bindings",
            registry=self._registry,
        )

        self.info = Info(
            "injector",
            "Injector build information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_resolution(self, outcome: str, duration_seconds: float | None = None) -> None:
        """Record the outcome of one resolution.

        Args:
            outcome: success, instance, not_found, cycle or error.
            duration_seconds: Factory run time, when a factory ran.
        """
        self.resolutions_total.labels(outcome=outcome).inc()
        if duration_seconds is not None:
            self.resolution_seconds.observe(duration_seconds)

    def record_cycle(self) -> None:
        self.cycles_total.inc()

    def record_invocation(self, shape: str) -> None:
        self.invocations_total.labels(shape=shape).inc()

    def set_binding_count(self, count: int) -> None:
        self.bindings.set(count)


_metrics: MetricsRegistry | None = None


def setup_metrics(
    port: int | None = None,
    registry: CollectorRegistry | None = None,
) -> MetricsRegistry:
    """
    Create the global metrics registry.

    Args:
        port: Serve metrics over HTTP on this port; nothing is served if None
        registry: Collector registry, the process default if None

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from jest_injector import __version__
    _metrics.info.info({"version": __version__})

    if port is not None:
        start_http_server(port, registry=registry or REGISTRY)
    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
