"""Type introspection from caller-supplied declarations.

For targets whose annotations are missing or misleading, the caller
declares the parameter types up front:

    introspector = ExplicitIntrospector()
    introspector.declare(make_session, Request, Optional[Cache])
    introspector.declare(Mailer, transport="smtp.Transport")

Positional declarations map to positional parameters in order; keyword
declarations become keyword arguments. Undeclared targets fall through
to another introspector (reflection by default).
"""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from jest_injector.adapters.outbound.reflection_introspector import (
    ReflectionIntrospector,
    classify_annotation,
)
from jest_injector.ports.outbound import (
    ParameterKind,
    ParameterSpec,
    TargetInfo,
    TypeIntrospectionPort,
)

T = TypeVar("T")


class ExplicitIntrospector:
    """Introspection port backed by explicit parameter declarations."""

    def __init__(self, fallback: Optional[TypeIntrospectionPort] = None) -> None:
        """Initialize the introspector.

        Args:
            fallback: Port consulted for undeclared targets. Defaults to
                a ReflectionIntrospector.
        """
        self._fallback = fallback or ReflectionIntrospector()
        self._declarations: dict[Any, list[ParameterSpec]] = {}

    def declare(self, target: T, *types: Any, **keyword_types: Any) -> T:
        """Declare the parameter types of a target.

        Each type may be a class, a type identifier string, or an
        ``Optional[...]`` of either. Re-declaring replaces the previous
        declaration.

        Returns:
            The target, unchanged.
        """
        specs = [
            self._spec(f"arg{index}", annotation, ParameterKind.POSITIONAL)
            for index, annotation in enumerate(types)
        ]
        specs.extend(
            self._spec(name, annotation, ParameterKind.KEYWORD)
            for name, annotation in keyword_types.items()
        )
        self._declarations[target] = specs
        return target

    def declares(self, *types: Any, **keyword_types: Any) -> Callable[[T], T]:
        """Decorator form of ``declare``."""

        def decorator(target: T) -> T:
            return self.declare(target, *types, **keyword_types)

        return decorator

    def is_declared(self, target: Any) -> bool:
        return target in self._declarations

    def parameters(self, target: Any) -> list[ParameterSpec]:
        """Return declared parameters, or ask the fallback."""
        declared = self._declarations.get(target)
        if declared is not None:
            return list(declared)
        return self._fallback.parameters(target)

    def target_info(self, target: type | str) -> TargetInfo:
        return self._fallback.target_info(target)

    def load(self, path: str) -> Any:
        return self._fallback.load(path)

    @staticmethod
    def _spec(name: str, annotation: Any, kind: ParameterKind) -> ParameterSpec:
        type_id, nullable = classify_annotation(annotation)
        return ParameterSpec(
            name=name,
            type_id=type_id,
            nullable=nullable,
            kind=kind,
            annotation=annotation,
        )
