"""Recursive resolution with cycle detection.

The engine turns a type identifier into a value:

1. Unregistered types fail with NotFoundError.
2. A type already on the resolution stack fails with CycleError,
   aborting the whole in-flight chain, whatever it is bound to now.
3. Instance bindings are returned verbatim and never enter the stack.
4. Otherwise the type is pushed, its factory is invoked (which may
   resolve further types) and the type is popped on every exit path.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator, Optional

from jest_injector.domain.services.type_registry import TypeRegistry
from jest_injector.domain.value_objects import TypeId, type_id_of
from jest_injector.ports.inbound import CycleError, NotFoundError, UnresolvableParameterError
from jest_injector.ports.outbound import ParameterSpec

if TYPE_CHECKING:
    from jest_injector.domain.services.callable_invoker import CallableInvoker
    from jest_injector.infrastructure.metrics import MetricsRegistry

logger = logging.getLogger(__name__)


class ResolutionStack:
    """Ordered set of type identifiers whose factories are running."""

    def __init__(self) -> None:
        self._entries: list[TypeId] = []

    @contextmanager
    def entered(self, type_id: TypeId) -> Iterator[None]:
        """Push a type for the duration of the block."""
        self._entries.append(type_id)
        try:
            yield
        finally:
            self._entries.pop()

    @property
    def chain(self) -> tuple[TypeId, ...]:
        """Snapshot of the stack, outermost first."""
        return tuple(self._entries)

    @property
    def depth(self) -> int:
        return len(self._entries)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ResolutionEngine:
    """Resolves type identifiers against a registry.

    The engine owns its resolution stack; two engines never share one.
    Factory invocation is delegated to a CallableInvoker attached after
    construction, since the invoker in turn resolves through the engine.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        metrics: Optional[MetricsRegistry] = None,
        log_resolutions: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Bindings to resolve against.
            metrics: Optional Prometheus metrics sink.
            log_resolutions: Emit a debug record per factory resolution.
        """
        self._registry = registry
        self._metrics = metrics
        self._log_resolutions = log_resolutions
        self._stack = ResolutionStack()
        self._invoker: CallableInvoker | None = None

    def attach_invoker(self, invoker: CallableInvoker) -> None:
        """Set the invoker used to run factories."""
        self._invoker = invoker

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    @property
    def chain(self) -> tuple[TypeId, ...]:
        """Type identifiers currently being resolved."""
        return self._stack.chain

    @property
    def depth(self) -> int:
        return self._stack.depth

    def is_resolving(self, key: type | str) -> bool:
        """Check if a type's factory is currently running."""
        return type_id_of(key) in self._stack

    def resolve(self, key: type | str) -> Any:
        """Resolve a type to a value.

        Args:
            key: Class or type identifier.

        Returns:
            The instance, or the value produced by the factory.

        Raises:
            NotFoundError: If the type is not registered.
            CycleError: If the type is already being resolved.
        """
        type_id = type_id_of(key)

        if not self._registry.has(type_id):
            self._record("not_found")
            logger.debug(f"No binding for {type_id} (chain: {self._stack.chain})")
            raise NotFoundError(type_id, self._stack.chain)

        if type_id in self._stack:
            chain = (*self._stack.chain, type_id)
            self._record("cycle")
            if self._metrics is not None:
                self._metrics.record_cycle()
            logger.warning(f"Dependency cycle detected: {' -> '.join(chain)}")
            raise CycleError(type_id, chain)

        binding = self._registry.binding(type_id)
        if not binding.is_factory:
            self._record("instance")
            return binding.value

        if self._invoker is None:
            raise RuntimeError("ResolutionEngine has no invoker attached")

        started = time.perf_counter()
        try:
            with self._stack.entered(type_id):
                value = self._invoker.invoke(binding.value)
        except Exception:
            self._record("error", time.perf_counter() - started)
            raise

        self._record("success", time.perf_counter() - started)
        if self._log_resolutions:
            logger.debug(f"Resolved {type_id} at depth {self._stack.depth}")
        return value

    def resolve_parameter(self, spec: ParameterSpec, target: Any = None) -> Any:
        """Resolve a declared parameter, honouring nullability.

        A nullable parameter whose type is unregistered receives None;
        a registered one is resolved normally.

        Raises:
            UnresolvableParameterError: If the parameter declares no type.
        """
        if spec.type_id is None:
            raise UnresolvableParameterError(target, spec.name, spec.annotation)
        if spec.nullable and not self._registry.has(spec.type_id):
            return None
        return self.resolve(spec.type_id)

    def _record(self, outcome: str, duration: float | None = None) -> None:
        if self._metrics is not None:
            self._metrics.record_resolution(outcome, duration)
