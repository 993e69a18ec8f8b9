"""Unit tests for the type registry and registry keys."""

from __future__ import annotations

import pytest

from jest_injector.domain.entities import Binding, BindingKind
from jest_injector.domain.services import TypeRegistry
from jest_injector.domain.value_objects import TypeId, qualified_name, type_id_of
from jest_injector.ports.inbound import InvalidBindingError, NotFoundError

from sample_services import CallableReportFactory, Clock, Session


@pytest.mark.unit
class TestTypeIds:
    """Tests for registry key normalization."""

    def test_string_key_is_verbatim(self) -> None:
        assert type_id_of("Session") == TypeId("Session")

    def test_class_key_is_qualified_name(self) -> None:
        assert type_id_of(Session) == "sample_services.Session"
        assert qualified_name(Session) == "sample_services.Session"

    def test_builtin_class_has_bare_name(self) -> None:
        assert type_id_of(int) == "int"

    def test_empty_string_rejected(self) -> None:
        with pytest.raises(InvalidBindingError):
            type_id_of("   ")

    def test_other_keys_rejected(self) -> None:
        with pytest.raises(InvalidBindingError):
            type_id_of(42)  # type: ignore[arg-type]


@pytest.mark.unit
class TestTypeRegistry:
    """Tests for TypeRegistry."""

    @pytest.fixture
    def registry(self) -> TypeRegistry:
        return TypeRegistry()

    def test_unregistered_type(self, registry: TypeRegistry) -> None:
        """Unknown types are reported absent and raw lookup fails."""
        assert registry.has("Missing") is False
        with pytest.raises(NotFoundError) as exc_info:
            registry.binding("Missing")
        assert exc_info.value.type_id == "Missing"

    def test_callable_is_factory(self, registry: TypeRegistry) -> None:
        binding = registry.set(Session, lambda: "session")

        assert binding.kind is BindingKind.FACTORY
        assert binding.is_factory

    def test_class_is_factory(self, registry: TypeRegistry) -> None:
        assert registry.set(Clock, Clock).kind is BindingKind.FACTORY

    def test_callable_object_is_factory(self, registry: TypeRegistry) -> None:
        assert registry.set("reports", CallableReportFactory()).kind is BindingKind.FACTORY

    def test_plain_object_is_instance(self, registry: TypeRegistry) -> None:
        clock = Clock()
        binding = registry.set(Clock, clock)

        assert binding.kind is BindingKind.INSTANCE
        assert binding.value is clock

    def test_scalar_is_instance(self, registry: TypeRegistry) -> None:
        assert registry.set("timeout", 30).kind is BindingKind.INSTANCE

    def test_set_instance_keeps_callable_verbatim(self, registry: TypeRegistry) -> None:
        factory = CallableReportFactory()
        binding = registry.set_instance("reports", factory)

        assert binding.kind is BindingKind.INSTANCE
        assert binding.value is factory

    def test_none_rejected(self, registry: TypeRegistry) -> None:
        with pytest.raises(InvalidBindingError):
            registry.set(Session, None)
        with pytest.raises(InvalidBindingError):
            registry.set_instance(Session, None)
        assert not registry.has(Session)

    def test_class_and_name_share_binding(self, registry: TypeRegistry) -> None:
        registry.set(Session, Clock())

        assert registry.has("sample_services.Session")
        assert Session in registry
        assert "sample_services.Session" in registry

    def test_reregistration_overwrites(self, registry: TypeRegistry) -> None:
        first, second = Clock(), Clock()
        registry.set(Clock, first)
        registry.set(Clock, second)

        assert registry.binding(Clock).value is second
        assert len(registry) == 1

    def test_delete(self, registry: TypeRegistry) -> None:
        registry.set(Clock, Clock)
        registry.delete(Clock)

        assert not registry.has(Clock)
        with pytest.raises(NotFoundError):
            registry.binding(Clock)

    def test_delete_unknown_is_noop(self, registry: TypeRegistry) -> None:
        registry.delete("Missing")
        assert len(registry) == 0

    def test_copy_from_is_independent(self, registry: TypeRegistry) -> None:
        registry.set("a", 1)
        other = TypeRegistry()
        other.copy_from(registry)
        other.set("b", 2)
        registry.delete("a")

        assert other.type_ids() == ["a", "b"]
        assert registry.type_ids() == []

    def test_contains_ignores_foreign_keys(self, registry: TypeRegistry) -> None:
        assert 42 not in registry

    def test_binding_repr(self) -> None:
        binding = Binding(TypeId("x"), BindingKind.INSTANCE, 1)
        assert repr(binding) == "Binding(x, instance)"
