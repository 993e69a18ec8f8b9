"""
Jest Injector - runtime dependency injection

Maps type identifiers to factories, resolves the parameter types a
callable or constructor declares by recursively invoking registered
factories, detects circular resolution chains, and memoizes shared
factories.
"""

__version__ = "0.1.0"

from jest_injector.application import Injector
from jest_injector.domain import Binding, BindingKind, SharedFactory, TypeId, type_id_of
from jest_injector.ports.inbound import (
    CycleError,
    InjectorError,
    InvalidBindingError,
    InvalidCallableError,
    InvalidTargetError,
    NotFoundError,
    UnresolvableParameterError,
)
from jest_injector.infrastructure.container import build_injector, get_injector, reset_injector

__all__ = [
    "Binding",
    "BindingKind",
    "CycleError",
    "Injector",
    "InjectorError",
    "InvalidBindingError",
    "InvalidCallableError",
    "InvalidTargetError",
    "NotFoundError",
    "SharedFactory",
    "TypeId",
    "UnresolvableParameterError",
    "build_injector",
    "get_injector",
    "reset_injector",
    "type_id_of",
]
