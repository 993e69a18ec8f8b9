"""Outbound adapters - type introspection implementations."""

from jest_injector.adapters.outbound.explicit_introspector import ExplicitIntrospector
from jest_injector.adapters.outbound.reflection_introspector import (
    ReflectionIntrospector,
    classify_annotation,
)

__all__ = [
    "ExplicitIntrospector",
    "ReflectionIntrospector",
    "classify_annotation",
]
