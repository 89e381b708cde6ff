"""Tests for the check registry and its namespace view."""

from threading import Thread

import pytest

from scrutiny import Scrutiny
from scrutiny.exceptions import DuplicateCheckError, InvalidArgumentError, NotFoundError
from scrutiny.registry import CheckNamespace, CheckRegistry


def noop(value):
    pass


class TestCheckRegistry:
    """Test basic CheckRegistry functionality."""

    def test_create_registry(self):
        registry = CheckRegistry("test_registry")
        assert registry.name == "test_registry"
        assert registry.count() == 0

    def test_register_check(self):
        registry = CheckRegistry()
        registry.register("veggie", noop)

        assert registry.count() == 1
        assert registry.has("veggie")
        assert registry.get("veggie") is noop
        assert "veggie" in registry

    def test_register_with_metadata(self):
        registry = CheckRegistry()
        registry.register("veggie", noop, metadata={"source": "app"})

        metadata = registry.get_metadata("veggie")
        assert "registered_at" in metadata
        assert metadata["metadata"] == {"source": "app"}
        assert registry.get_metadata("missing") == {}

    @pytest.mark.parametrize(
        "name",
        ["", None, 42, "not-an-identifier", "1st", "_registry", "_private", "__len__", "__init__"],
    )
    def test_invalid_name_raises_error(self, name):
        registry = CheckRegistry()
        with pytest.raises(InvalidArgumentError):
            registry.register(name, noop)
        assert registry.count() == 0

    @pytest.mark.parametrize("check", [None, "string", 3, {}])
    def test_non_callable_check_raises_error(self, check):
        registry = CheckRegistry()
        with pytest.raises(InvalidArgumentError):
            registry.register("invalid", check)
        assert not registry.has("invalid")

    def test_register_duplicate_raises_error(self):
        registry = CheckRegistry()
        registry.register("veggie", noop)

        def other(value):
            pass

        with pytest.raises(DuplicateCheckError) as exc_info:
            registry.register("veggie", other)

        assert "already exists" in str(exc_info.value)
        assert registry.get("veggie") is noop

    def test_get_nonexistent_raises_error(self):
        registry = CheckRegistry()
        with pytest.raises(NotFoundError) as exc_info:
            registry.get("fruit")
        assert exc_info.value.context["name"] == "fruit"

    def test_get_optional(self):
        registry = CheckRegistry()
        registry.register("veggie", noop)
        assert registry.get_optional("veggie") is noop
        assert registry.get_optional("fruit") is None

    def test_list_operations(self):
        registry = CheckRegistry()
        registry.register("a", noop)
        registry.register("b", noop)

        assert registry.list_keys() == ["a", "b"]
        assert registry.items() == [("a", noop), ("b", noop)]
        assert list(registry) == ["a", "b"]
        assert len(registry) == 2

    def test_concurrent_registration(self):
        registry = CheckRegistry()

        def register_checks(start, end):
            for i in range(start, end):
                registry.register(f"check_{i}", noop)

        threads = [Thread(target=register_checks, args=(i * 50, (i + 1) * 50)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert registry.count() == 200


class TestCheckNamespace:
    """Test the read-only namespace view."""

    def test_attribute_and_item_access(self):
        registry = CheckRegistry()
        registry.register("veggie", noop)
        checks = CheckNamespace(registry)

        assert checks.veggie is noop
        assert checks["veggie"] is noop

    def test_missing_check(self):
        checks = CheckNamespace(CheckRegistry())
        assert getattr(checks, "fruit", None) is None
        assert "fruit" not in checks
        with pytest.raises(AttributeError):
            checks.fruit
        with pytest.raises(KeyError):
            checks["fruit"]

    def test_view_is_live(self):
        registry = CheckRegistry()
        checks = CheckNamespace(registry)
        registry.register("late", noop)
        assert checks.late is noop
        assert list(checks) == ["late"]
        assert len(checks) == 1

    def test_view_is_read_only(self):
        checks = CheckNamespace(CheckRegistry())
        with pytest.raises(AttributeError):
            checks.veggie = noop
        with pytest.raises(AttributeError):
            del checks.veggie


class TestEngineRegistration:
    """Test registration through the engine."""

    def test_should_not_register_invalid_function(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.register("invalid", None)

    def test_empty_name_rejected(self, engine):
        with pytest.raises(InvalidArgumentError):
            engine.register("", noop)

    def test_primitives_are_preinstalled(self, engine):
        for name in ["undef", "string", "bool", "number", "func", "array", "object"]:
            assert name in engine.checks
            assert engine.registry.get_metadata(name)["metadata"] == {"builtin": True}

    def test_primitive_names_cannot_be_reused(self, engine):
        with pytest.raises(DuplicateCheckError):
            engine.register("string", noop)

    def test_should_not_mix_checks_of_different_instances(self):
        instance1 = Scrutiny()
        instance2 = Scrutiny()

        instance1.register("type1", noop)
        instance2.register("type2", noop)

        assert "type1" in instance1.checks and "type2" not in instance1.checks
        assert "type2" in instance2.checks and "type1" not in instance2.checks
        assert instance1.registry is not instance2.registry

    def test_same_name_on_different_instances(self):
        instance1 = Scrutiny()
        instance2 = Scrutiny()

        def other(value):
            pass

        instance1.register("shared", noop)
        instance2.register("shared", other)

        assert instance1.checks.shared is noop
        assert instance2.checks.shared is other

    def test_underscore_name_cannot_shadow_namespace(self, engine):
        def mine(value):
            pass

        with pytest.raises(InvalidArgumentError):
            engine.register("_registry", mine)
        assert isinstance(engine.checks._registry, CheckRegistry)
        assert "_registry" not in engine.checks
