"""Memoizing factory wrapper."""

from __future__ import annotations

import threading
from typing import Any, Callable

_UNSET: Any = object()


class SharedFactory:
    """Factory that invokes its wrapped factory once and reuses the result.

    The first call runs ``invoke(factory)`` so the wrapped factory gets
    its own dependencies injected; later calls return the memoized value.
    Each instance owns its cell, so wrapping the same factory twice gives
    two independent singletons. A factory that raises leaves the cell
    unset and the next call tries again.

    The wrapper takes no parameters itself, which lets the injector
    resolve it like any other factory.

    When the owning injector serializes its operations, the wrapper shares
    that lock, so calling it directly and resolving it through the
    injector acquire locks in the same order.
    """

    def __init__(
        self,
        factory: Any,
        invoke: Callable[[Any], Any],
        lock: threading.RLock | None = None,
    ) -> None:
        """Initialize the wrapper.

        Args:
            factory: Any target the injector can invoke.
            invoke: Callable that resolves and calls ``factory``.
            lock: Re-entrant lock guarding the first call, a private one
                if None.
        """
        self._factory = factory
        self._invoke = invoke
        self._value: Any = _UNSET
        self._lock = lock or threading.RLock()

    @property
    def factory(self) -> Any:
        return self._factory

    @property
    def is_resolved(self) -> bool:
        """Check whether the value has been computed."""
        return self._value is not _UNSET

    def reset(self) -> None:
        """Drop the memoized value so the next call recomputes it."""
        with self._lock:
            self._value = _UNSET

    def __call__(self) -> Any:
        value = self._value
        if value is not _UNSET:
            return value
        with self._lock:
            if self._value is _UNSET:
                self._value = self._invoke(self._factory)
            return self._value

    def __repr__(self) -> str:
        state = "resolved" if self.is_resolved else "pending"
        return f"SharedFactory({self._factory!r}, {state})"
