"""Injector facade.

Wires the registry, resolution engine, invoker and introspection port
into the object application code talks to:

    def make_session(request: Request) -> Session:
        return Session(request)

    injector = Injector()
    injector[Request] = injector.share(Request)
    injector[Session] = injector.share(make_session)

    report = injector.invoke(build_report)  # def build_report(session: Session)
    service = injector.create(ReportService)
"""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Iterator, Optional

from jest_injector.adapters.outbound import ReflectionIntrospector
from jest_injector.domain.entities import Binding
from jest_injector.domain.services import (
    CallableInvoker,
    ResolutionEngine,
    SharedFactory,
    TypeRegistry,
)
from jest_injector.domain.value_objects import TypeId, type_id_of
from jest_injector.infrastructure.config import Config, get_config
from jest_injector.infrastructure.logging import get_logger
from jest_injector.infrastructure.metrics import MetricsRegistry
from jest_injector.infrastructure.tracing import resolution_span
from jest_injector.ports.inbound import InjectorError
from jest_injector.ports.outbound import TypeIntrospectionPort


class Injector:
    """Dependency injector.

    Bindings are not shared by default: a plain factory runs on every
    resolution. Wrap it with ``share`` for singleton behaviour.
    """

    def __init__(
        self,
        source: Optional[Injector] = None,
        *,
        introspector: Optional[TypeIntrospectionPort] = None,
        config: Optional[Config] = None,
        metrics: Optional[MetricsRegistry] = None,
    ) -> None:
        """Initialize the injector.

        Args:
            source: Injector whose bindings are copied into this one.
            introspector: Type introspection port, reflection by default.
            config: Settings, the global configuration by default.
            metrics: Optional Prometheus metrics sink.
        """
        if source is not None and not isinstance(source, Injector):
            raise TypeError(f"Can only copy bindings from an Injector, got {type(source).__name__}")

        self._config = config or get_config()
        resolution = self._config.resolution

        self._registry = TypeRegistry()
        if source is not None:
            self._registry.copy_from(source._registry)

        self._metrics = metrics
        self._introspector = introspector or ReflectionIntrospector()
        self._engine = ResolutionEngine(
            self._registry,
            metrics=metrics,
            log_resolutions=resolution.log_resolutions,
        )
        self._invoker = CallableInvoker(self._engine, self._introspector, metrics=metrics)
        self._rlock: threading.RLock | None = (
            threading.RLock() if resolution.thread_safe else None
        )
        self._lock: AbstractContextManager[Any] = self._rlock or nullcontext()
        self._trace = resolution.trace_resolutions
        self._logger = get_logger(__name__)
        self._update_binding_gauge()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def introspector(self) -> TypeIntrospectionPort:
        return self._introspector

    @property
    def resolving(self) -> tuple[TypeId, ...]:
        """Type identifiers whose factories are currently running."""
        return self._engine.chain

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def set(self, key: type | str, value: Any) -> Binding:
        """Register a factory (any callable) or an instance (anything else)."""
        with self._lock:
            binding = self._registry.set(key, value)
            self._update_binding_gauge()
        self._logger.debug("binding_registered", type_id=binding.type_id, kind=binding.kind.value)
        return binding

    def set_instance(self, key: type | str, value: Any) -> Binding:
        """Register a value returned verbatim, even when it is callable."""
        with self._lock:
            binding = self._registry.set_instance(key, value)
            self._update_binding_gauge()
        self._logger.debug("binding_registered", type_id=binding.type_id, kind=binding.kind.value)
        return binding

    def has(self, key: type | str) -> bool:
        with self._lock:
            return self._registry.has(key)

    def delete(self, key: type | str) -> None:
        with self._lock:
            self._registry.delete(key)
            self._update_binding_gauge()
        self._logger.debug("binding_deleted", type_id=type_id_of(key))

    def binding(self, key: type | str) -> Binding:
        """Return the raw binding without resolving it."""
        with self._lock:
            return self._registry.binding(key)

    def type_ids(self) -> list[TypeId]:
        with self._lock:
            return self._registry.type_ids()

    def clear(self) -> None:
        """Remove every binding."""
        with self._lock:
            self._registry.clear()
            self._update_binding_gauge()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def get(self, key: type | str) -> Any:
        """Resolve a type to its value."""
        type_id = type_id_of(key)
        with self._lock, self._span("get", type_id=type_id):
            return self._run(self._engine.resolve, type_id, type_id=type_id)

    def invoke(self, target: Any) -> Any:
        """Call a target with its declared dependencies resolved.

        Accepts a function, a bound method, a ``(receiver, "method")``
        pair, an object with ``__call__``, a class, or a string naming a
        free function or static method.
        """
        with self._lock, self._span("invoke", target=_describe(target)):
            return self._run(self._invoker.invoke, target, target=_describe(target))

    def create(self, cls: type | str) -> Any:
        """Instantiate a class (or dotted path to one) with its dependencies."""
        with self._lock, self._span("create", target=_describe(cls)):
            return self._run(self._invoker.object_factory.create, cls, target=_describe(cls))

    def share(self, factory: Any) -> SharedFactory:
        """Wrap a factory so it runs once and its value is reused.

        The wrapped factory still has its own dependencies injected on
        that first run. Each call returns an independent wrapper. On a
        thread-safe injector the wrapper guards its first run with the
        injector lock.
        """
        return SharedFactory(factory, self._invoke_shared, lock=self._rlock)

    def _invoke_shared(self, factory: Any) -> Any:
        value = self.invoke(factory)
        self._logger.debug("shared_factory_resolved", factory=_describe(factory))
        return value

    def _run(self, operation: Any, argument: Any, **context: Any) -> Any:
        depth = self._engine.depth
        try:
            return operation(argument)
        except InjectorError as exc:
            if depth == 0:
                self._logger.debug(
                    "resolution_failed",
                    error=type(exc).__name__,
                    message=str(exc),
                    **context,
                )
            raise

    def _span(self, operation: str, **attributes: Any) -> AbstractContextManager[Any]:
        if not self._trace or self._engine.depth:
            return nullcontext()
        return resolution_span(operation, **attributes)

    def _update_binding_gauge(self) -> None:
        if self._metrics is not None:
            self._metrics.set_binding_count(len(self._registry))

    # ------------------------------------------------------------------
    # Subscript sugar
    # ------------------------------------------------------------------

    def __getitem__(self, key: type | str) -> Any:
        return self.get(key)

    def __setitem__(self, key: type | str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: type | str) -> None:
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[TypeId]:
        return iter(self.type_ids())

    def __repr__(self) -> str:
        return f"Injector(bindings={len(self._registry)})"


def _describe(target: Any) -> str:
    if isinstance(target, str):
        return target
    if isinstance(target, tuple):
        return ", ".join(_describe(part) for part in target)
    name = getattr(target, "__qualname__", None)
    if name:
        return f"{getattr(target, '__module__', '')}.{name}".lstrip(".")
    return type(target).__qualname__
