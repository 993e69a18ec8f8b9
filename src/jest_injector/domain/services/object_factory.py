"""Object construction with injected constructor arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jest_injector.ports.inbound import InvalidTargetError
from jest_injector.ports.outbound import TypeIntrospectionPort

if TYPE_CHECKING:
    from jest_injector.domain.services.callable_invoker import CallableInvoker


class ObjectFactory:
    """Instantiates classes, resolving their constructor parameters."""

    def __init__(self, introspector: TypeIntrospectionPort, invoker: CallableInvoker) -> None:
        self._introspector = introspector
        self._invoker = invoker

    def create(self, target: type | str) -> Any:
        """Instantiate a class with its dependencies.

        Args:
            target: A class, or a dotted/colon path naming one.

        Returns:
            The new object.

        Raises:
            InvalidTargetError: If the class does not exist or cannot be
                instantiated (not a class, abstract, or a protocol).
        """
        info = self._introspector.target_info(target)
        if not info.exists or info.cls is None:
            raise InvalidTargetError(target, info.reason or "does not exist")
        if not info.instantiable:
            raise InvalidTargetError(target, info.reason or "is not instantiable")

        cls = info.cls
        args, kwargs = self._invoker.gather_arguments(cls, self._introspector.parameters(cls))
        return cls(*args, **kwargs)
