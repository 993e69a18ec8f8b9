"""Type identifiers used as registry keys.

A binding is addressed by a plain string. Classes are accepted wherever
a key is expected and are normalized to their fully qualified name, so
``Session`` and ``"app.http.Session"`` address the same binding.
"""

from __future__ import annotations

from typing import Any, NewType

from jest_injector.ports.inbound import InvalidBindingError


TypeId = NewType("TypeId", str)
"""Registry key naming an abstract or concrete type."""


def qualified_name(cls: type) -> str:
    """Return ``module.QualName`` for a class."""
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", None) or cls.__name__
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def type_id_of(key: Any) -> TypeId:
    """Normalize a registry key.

    Args:
        key: A class or a non-empty string.

    Returns:
        The type identifier.

    Raises:
        InvalidBindingError: If the key is neither.
    """
    if isinstance(key, str):
        if not key.strip():
            raise InvalidBindingError("Type identifier must be a non-empty string")
        return TypeId(key)
    if isinstance(key, type):
        return TypeId(qualified_name(key))
    raise InvalidBindingError(
        f"Type identifier must be a class or a string, got {type(key).__name__}"
    )
