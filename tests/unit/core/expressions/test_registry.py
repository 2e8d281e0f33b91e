"""Unit tests for the operation registry."""

import pytest

from exprkit.core.expressions import (
    Literal,
    Operation,
    OperationRegistrationError,
    OperationRegistry,
    create_default_registry,
    evaluate,
    get_default_registry,
    register_operation,
)
from exprkit.core.expressions.coercion import to_string

GROUP_SIZES = {
    "math": 12,
    "string": 13,
    "date": 10,
    "logical": 8,
    "comparison": 8,
    "array": 13,
    "permission": 7,
}


def slugify(args, context):
    return to_string(args[0]).lower().replace(" ", "-")


def test_default_registry_contains_all_groups():
    registry = create_default_registry()
    assert registry.groups() == sorted(GROUP_SIZES)
    for group, size in GROUP_SIZES.items():
        assert len(registry.names(group=group)) == size
    assert len(registry) == sum(GROUP_SIZES.values())


def test_builtin_operations_are_marked():
    registry = create_default_registry()
    operation = registry.get("add")
    assert operation.is_builtin is True
    assert operation.group == "math"
    assert registry.get("missing") is None
    assert "hasRole" in registry


def test_register_custom_operation():
    registry = OperationRegistry()
    registry.register("slugify", slugify)
    assert registry.get("slugify").group == "custom"
    assert registry.get("slugify")(["Hello World"], None) == "hello-world"


def test_duplicate_registration_requires_override():
    registry = create_default_registry()
    with pytest.raises(OperationRegistrationError, match="already registered"):
        registry.register("add", slugify)

    registry.register("add", slugify, override=True)
    assert registry.get("add").func is slugify


def test_frozen_registry_rejects_registration():
    registry = create_default_registry().freeze()
    assert registry.is_frozen
    with pytest.raises(OperationRegistrationError, match="frozen"):
        registry.register("slugify", slugify)


def test_copy_is_independent_and_unfrozen():
    registry = create_default_registry().freeze()
    clone = registry.copy()
    clone.register("slugify", slugify)
    assert "slugify" in clone
    assert "slugify" not in registry


def test_invalid_registrations():
    registry = OperationRegistry()
    with pytest.raises(OperationRegistrationError):
        registry.register("", slugify)
    with pytest.raises(OperationRegistrationError):
        registry.register("bad", "not callable")


def test_as_mapping_is_read_only():
    mapping = create_default_registry().as_mapping()
    with pytest.raises(TypeError):
        mapping["add"] = None


def test_register_operation_extends_default_registry():
    register_operation("slugify", slugify)
    assert "slugify" in get_default_registry()
    assert evaluate(Operation("slugify", [Literal("Hello World")])) == "hello-world"
