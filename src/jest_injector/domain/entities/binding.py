"""Registry binding entity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from jest_injector.domain.value_objects import TypeId


class BindingKind(Enum):
    """How a binding produces its value."""
    FACTORY = "factory"  # invoked on every resolution
    INSTANCE = "instance"  # returned verbatim


@dataclass(frozen=True, slots=True)
class Binding:
    """A registry entry pairing a type identifier with a factory or instance.

    Attributes:
        type_id: Registry key.
        kind: Factory or instance.
        value: The factory callable or the stored object.
    """

    type_id: TypeId
    kind: BindingKind
    value: Any

    @property
    def is_factory(self) -> bool:
        """Return True if the binding must be invoked to produce a value."""
        return self.kind is BindingKind.FACTORY

    def __repr__(self) -> str:
        return f"Binding({self.type_id}, {self.kind.value})"
