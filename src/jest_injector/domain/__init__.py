"""Injector domain layer."""

from jest_injector.domain.entities import Binding, BindingKind
from jest_injector.domain.services import (
    CallableInvoker,
    CallableShape,
    ObjectFactory,
    ResolutionEngine,
    ResolutionStack,
    SharedFactory,
    TypeRegistry,
)
from jest_injector.domain.value_objects import TypeId, qualified_name, type_id_of

__all__ = [
    # Entities
    "Binding",
    "BindingKind",
    # Services
    "CallableInvoker",
    "CallableShape",
    "ObjectFactory",
    "ResolutionEngine",
    "ResolutionStack",
    "SharedFactory",
    "TypeRegistry",
    # Value objects
    "TypeId",
    "qualified_name",
    "type_id_of",
]
