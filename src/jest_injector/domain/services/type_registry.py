"""Type registry: type identifier to binding storage."""

from __future__ import annotations

from typing import Any, Iterator

from jest_injector.domain.entities import Binding, BindingKind
from jest_injector.domain.value_objects import TypeId, type_id_of
from jest_injector.ports.inbound import InvalidBindingError, NotFoundError


class TypeRegistry:
    """Stores bindings keyed by type identifier.

    Classification rule for ``set``:
    - None is rejected
    - anything callable (function, method, class, object with __call__)
      becomes a factory
    - any other object becomes an instance

    Use ``set_instance`` to store a callable as a plain value.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._bindings: dict[TypeId, Binding] = {}

    def set(self, key: type | str, value: Any) -> Binding:
        """Register a value, classifying it as factory or instance.

        Args:
            key: Class or type identifier.
            value: Factory callable or ready object.

        Returns:
            The stored binding.

        Raises:
            InvalidBindingError: If value is None or key is unusable.
        """
        kind = BindingKind.FACTORY if callable(value) else BindingKind.INSTANCE
        return self._store(key, kind, value)

    def set_instance(self, key: type | str, value: Any) -> Binding:
        """Register a value that is returned verbatim, even if callable."""
        return self._store(key, BindingKind.INSTANCE, value)

    def has(self, key: type | str) -> bool:
        """Check if a binding exists."""
        return type_id_of(key) in self._bindings

    def delete(self, key: type | str) -> None:
        """Remove a binding. Unknown keys are ignored."""
        self._bindings.pop(type_id_of(key), None)

    def binding(self, key: type | str) -> Binding:
        """Get the raw binding for a key.

        Raises:
            NotFoundError: If nothing is registered.
        """
        type_id = type_id_of(key)
        try:
            return self._bindings[type_id]
        except KeyError:
            raise NotFoundError(type_id) from None

    def type_ids(self) -> list[TypeId]:
        """List registered type identifiers in registration order."""
        return list(self._bindings)

    def copy_from(self, other: TypeRegistry) -> None:
        """Copy every binding of another registry into this one."""
        self._bindings.update(other._bindings)

    def clear(self) -> None:
        """Remove all bindings."""
        self._bindings.clear()

    def _store(self, key: type | str, kind: BindingKind, value: Any) -> Binding:
        type_id = type_id_of(key)
        if value is None:
            raise InvalidBindingError(
                f"Cannot bind {type_id} to None; register a factory or an instance"
            )
        binding = Binding(type_id=type_id, kind=kind, value=value)
        self._bindings[type_id] = binding
        return binding

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (str, type)):
            return False
        return self.has(key)

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[TypeId]:
        return iter(list(self._bindings))
