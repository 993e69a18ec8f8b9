"""Domain services for dependency resolution.

The registry stores bindings, the engine resolves them recursively with
cycle detection, the invoker and object factory supply arguments to
callables and constructors, and the shared factory memoizes a value.
"""

from jest_injector.domain.services.callable_invoker import CallableInvoker, CallableShape
from jest_injector.domain.services.object_factory import ObjectFactory
from jest_injector.domain.services.resolution_engine import ResolutionEngine, ResolutionStack
from jest_injector.domain.services.shared_factory import SharedFactory
from jest_injector.domain.services.type_registry import TypeRegistry

__all__ = [
    "CallableInvoker",
    "CallableShape",
    "ObjectFactory",
    "ResolutionEngine",
    "ResolutionStack",
    "SharedFactory",
    "TypeRegistry",
]
