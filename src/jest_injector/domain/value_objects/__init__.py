"""Value objects for the injector domain."""

from jest_injector.domain.value_objects.identifiers import TypeId, qualified_name, type_id_of

__all__ = [
    "TypeId",
    "qualified_name",
    "type_id_of",
]
