"""Outbound ports - collaborators the injector depends on.

The injector does not discover parameter types itself. It asks a type
introspection port, which may use runtime reflection or annotations
supplied explicitly by the caller.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from jest_injector.domain.value_objects import TypeId


class ParameterKind(Enum):
    """How an argument is passed to the target."""
    POSITIONAL = "positional"
    KEYWORD = "keyword"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """A declared parameter of a callable or constructor.

    Attributes:
        name: Parameter name.
        type_id: Type identifier to resolve, or None when the parameter
            declares no injectable type.
        nullable: True if the parameter accepts None.
        kind: Positional or keyword-only.
        annotation: The raw annotation, kept for error messages.
    """

    name: str
    type_id: TypeId | None
    nullable: bool = False
    kind: ParameterKind = ParameterKind.POSITIONAL
    annotation: Any = None

    @property
    def is_injectable(self) -> bool:
        """Return True if the parameter names a resolvable type."""
        return self.type_id is not None


@dataclass(frozen=True, slots=True)
class TargetInfo:
    """Whether a ``create`` target exists and can be instantiated."""

    cls: type | None
    exists: bool
    instantiable: bool
    reason: str = ""


class TypeIntrospectionPort(Protocol):
    """Protocol for reading declared parameter types.

    Implementations receive already-unwrapped Python callables; shape
    classification happens in the invoker.
    """

    @abstractmethod
    def parameters(self, target: Any) -> list[ParameterSpec]:
        """Return the ordered parameters a target declares.

        Args:
            target: A function, bound method, class or callable object.

        Raises:
            InvalidCallableError: If no signature can be read.
        """
        ...

    @abstractmethod
    def target_info(self, target: type | str) -> TargetInfo:
        """Describe a class (or dotted path to one) for instantiation."""
        ...

    @abstractmethod
    def load(self, path: str) -> Any:
        """Import the object named by a dotted or colon path.

        Raises:
            LookupError: If the path does not name an importable object.
        """
        ...


__all__ = [
    "ParameterKind",
    "ParameterSpec",
    "TargetInfo",
    "TypeIntrospectionPort",
]
