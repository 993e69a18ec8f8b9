"""Invocation of callables with injected arguments."""

from __future__ import annotations

import functools
import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

from jest_injector.domain.services.object_factory import ObjectFactory
from jest_injector.domain.services.resolution_engine import ResolutionEngine
from jest_injector.ports.inbound import InvalidCallableError, UnresolvableParameterError
from jest_injector.ports.outbound import ParameterKind, ParameterSpec, TypeIntrospectionPort

if TYPE_CHECKING:
    from jest_injector.infrastructure.metrics import MetricsRegistry


class CallableShape(Enum):
    """Supported forms of an invokable target."""
    FUNCTION = "function"  # function, lambda, bound method, partial
    METHOD_PAIR = "method_pair"  # (receiver, "method")
    CALLABLE_OBJECT = "callable_object"  # instance with __call__
    NAMED = "named"  # "pkg.mod.func", "pkg.mod:Class.method", "pkg.mod.Class::method"
    CLASS = "class"  # constructed through the object factory


class CallableInvoker:
    """Classifies targets, gathers their dependencies and calls them.

    Every shape goes through the same path: read the declared parameters
    from the introspection port, resolve each through the engine, then
    call the target with positional arguments in declaration order and
    keyword-only parameters as keywords.
    """

    def __init__(
        self,
        engine: ResolutionEngine,
        introspector: TypeIntrospectionPort,
        metrics: Optional[MetricsRegistry] = None,
    ) -> None:
        """Initialize the invoker.

        Args:
            engine: Engine used to resolve each parameter.
            introspector: Source of declared parameter types.
            metrics: Optional Prometheus metrics sink.
        """
        self._engine = engine
        self._introspector = introspector
        self._metrics = metrics
        self._objects = ObjectFactory(introspector, self)
        engine.attach_invoker(self)

    @property
    def object_factory(self) -> ObjectFactory:
        return self._objects

    def classify(self, target: Any) -> tuple[CallableShape, Any]:
        """Determine a target's shape and the Python object to call.

        Raises:
            InvalidCallableError: If the target fits no supported shape.
        """
        if isinstance(target, str):
            return CallableShape.NAMED, self._load_named(target)

        if isinstance(target, tuple):
            return CallableShape.METHOD_PAIR, self._bind_pair(target)

        if isinstance(target, type):
            return CallableShape.CLASS, target

        if (
            inspect.isfunction(target)
            or inspect.ismethod(target)
            or inspect.isbuiltin(target)
            or isinstance(target, functools.partial)
        ):
            return CallableShape.FUNCTION, target

        if callable(target):
            return CallableShape.CALLABLE_OBJECT, target

        raise InvalidCallableError(target)

    def invoke(self, target: Any) -> Any:
        """Call a target with its dependencies resolved.

        Args:
            target: Any supported shape.

        Returns:
            Whatever the target returns.
        """
        shape, func = self.classify(target)
        if self._metrics is not None:
            self._metrics.record_invocation(shape.value)

        if isinstance(func, type):
            return self._objects.create(func)

        args, kwargs = self.gather_arguments(target, self._introspector.parameters(func))
        return func(*args, **kwargs)

    def gather_arguments(
        self,
        target: Any,
        parameters: list[ParameterSpec],
    ) -> tuple[list[Any], dict[str, Any]]:
        """Resolve declared parameters into call arguments.

        All parameters are checked for an injectable type before any is
        resolved, so a misconfigured target never triggers factories.

        Raises:
            UnresolvableParameterError: If a parameter declares no type.
        """
        for spec in parameters:
            if not spec.is_injectable:
                raise UnresolvableParameterError(target, spec.name, spec.annotation)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for spec in parameters:
            value = self._engine.resolve_parameter(spec, target)
            if spec.kind is ParameterKind.KEYWORD:
                kwargs[spec.name] = value
            else:
                args.append(value)
        return args, kwargs

    def _load_named(self, path: str) -> Any:
        try:
            func = self._introspector.load(path)
        except LookupError as exc:
            raise InvalidCallableError(path, "does not name an importable callable") from exc
        if not callable(func):
            raise InvalidCallableError(path)
        return func

    def _bind_pair(self, pair: tuple) -> Any:
        if len(pair) != 2 or not isinstance(pair[1], str):
            raise InvalidCallableError(pair, "is not a (receiver, method name) pair")
        receiver, name = pair
        if isinstance(receiver, str):
            try:
                receiver = self._introspector.load(receiver)
            except LookupError as exc:
                raise InvalidCallableError(pair, "names a receiver that does not exist") from exc
        method = getattr(receiver, name, None)
        if method is None or not callable(method):
            raise InvalidCallableError(pair, f"has no callable attribute '{name}'")
        return method
