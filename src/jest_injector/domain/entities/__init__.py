"""Domain entities."""

from jest_injector.domain.entities.binding import Binding, BindingKind

__all__ = [
    "Binding",
    "BindingKind",
]
