"""Inbound ports - the injector surface offered to application code.

The inbound port defines what callers may do with an injector:
register bindings, resolve them, invoke callables and construct
objects with their dependencies supplied. It also defines the error
taxonomy every implementation raises.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, Protocol, Sequence


# =============================================================================
# Errors
# =============================================================================


class InjectorError(Exception):
    """Base class for every error raised by the injector."""

    pass


class NotFoundError(InjectorError, KeyError):
    """Raised when a type has no binding and the request is not nullable."""

    def __init__(self, type_id: str, chain: Sequence[str] = ()) -> None:
        self.type_id = type_id
        self.chain = tuple(chain)
        message = f"Type {type_id} has not been defined"
        if self.chain:
            message += f" (required by {' -> '.join(self.chain)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidBindingError(InjectorError, TypeError):
    """Raised when a value or key cannot be stored in the registry."""

    pass


class CycleError(InjectorError):
    """Raised when a type is requested while its own factory is running.

    Attributes:
        type_id: The type requested a second time.
        chain: The resolution stack at the time, ending with ``type_id``.
    """

    def __init__(self, type_id: str, chain: Sequence[str]) -> None:
        self.type_id = type_id
        self.chain = tuple(chain)
        super().__init__(
            f"{type_id} is currently being resolved and cannot be used: "
            f"{' -> '.join(self.chain)}"
        )


class InvalidTargetError(InjectorError, TypeError):
    """Raised when ``create`` is given a missing or non-instantiable type."""

    def __init__(self, target: Any, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"{target!r} {reason}")


class InvalidCallableError(InjectorError, TypeError):
    """Raised when ``invoke`` is given something it cannot call."""

    def __init__(self, target: Any, reason: str = "does not appear to be callable") -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Supplied argument {target!r} {reason}")


class UnresolvableParameterError(InvalidCallableError):
    """Raised when a parameter declares no injectable type."""

    def __init__(self, target: Any, parameter: str, annotation: Any = None) -> None:
        self.parameter = parameter
        self.annotation = annotation
        detail = "has no type annotation" if annotation is None else f"is typed {annotation!r}"
        super().__init__(
            target,
            f"has parameter '{parameter}' that {detail} and cannot be injected",
        )


# =============================================================================
# Injector Port
# =============================================================================


class InjectorPort(Protocol):
    """Protocol for a dependency injector.

    Keys may be classes or strings. A class and its fully qualified
    name address the same binding.

    Thread Safety:
        Not thread-safe unless the implementation is configured with
        a resolution lock.
    """

    @abstractmethod
    def set(self, key: type | str, value: Any) -> None:
        """Register a factory (callable) or an instance (anything else).

        Raises:
            InvalidBindingError: If the value is None or the key is unusable.
        """
        ...

    @abstractmethod
    def has(self, key: type | str) -> bool:
        """Return True if a binding exists for the key."""
        ...

    @abstractmethod
    def delete(self, key: type | str) -> None:
        """Remove the binding for the key, if any."""
        ...

    @abstractmethod
    def get(self, key: type | str) -> Any:
        """Resolve the key to a value.

        Raises:
            NotFoundError: If nothing is registered for the key.
            CycleError: If the key is already being resolved.
        """
        ...

    @abstractmethod
    def invoke(self, target: Any) -> Any:
        """Call a target with its declared dependencies.

        Raises:
            InvalidCallableError: If the target cannot be classified.
        """
        ...

    @abstractmethod
    def create(self, cls: type | str) -> Any:
        """Instantiate a class with its constructor dependencies.

        Raises:
            InvalidTargetError: If the class is missing or not instantiable.
        """
        ...

    @abstractmethod
    def share(self, factory: Any) -> Callable[[], Any]:
        """Wrap a factory so it runs once and its result is reused."""
        ...


__all__ = [
    "CycleError",
    "InjectorError",
    "InjectorPort",
    "InvalidBindingError",
    "InvalidCallableError",
    "InvalidTargetError",
    "NotFoundError",
    "UnresolvableParameterError",
]
