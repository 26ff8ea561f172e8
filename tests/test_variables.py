"""Tests for the variable registry."""

import pytest

from demoshader.pipeline.errors import DuplicateVariableError, InvalidVariableError
from demoshader.pipeline.models import Variable, VariableKind
from demoshader.pipeline.variables import VariableRegistry


def test_registry_keeps_insertion_order() -> None:
    """Test that variables are iterated in registration order."""
    registry = VariableRegistry()
    registry.add_uniform("float", "time")
    registry.add_constant("float", "PI", 3.14159)
    registry.add_global("vec3", "color")

    assert [v.name for v in registry] == ["time", "PI", "color"]
    assert [v.kind for v in registry] == [
        VariableKind.UNIFORM,
        VariableKind.CONST,
        VariableKind.GLOBAL,
    ]
    assert len(registry) == 3
    assert "PI" in registry
    assert "pi" not in registry


def test_values_are_stored_as_text() -> None:
    """Test that constant values keep their literal representation."""
    registry = VariableRegistry()
    variable = registry.add_constant("int", "COUNT", 4)

    assert variable.value == "4"
    assert variable.active
    assert variable.display_name is None
    assert registry.get("COUNT") is variable
    assert registry.get("missing") is None


def test_add_variable_accepts_kind_names() -> None:
    """Test creating variables from configuration strings."""
    registry = VariableRegistry()
    variable = registry.add_variable("uniform", "vec2", "mouse")
    assert variable.kind == VariableKind.UNIFORM

    with pytest.raises(ValueError):
        registry.add_variable("attribute", "vec2", "position")


def test_duplicate_names_are_rejected() -> None:
    """Test that a name can only be registered once."""
    registry = VariableRegistry()
    registry.add_uniform("float", "time")

    with pytest.raises(DuplicateVariableError, match='"time"'):
        registry.add_global("int", "time")
    assert len(registry) == 1


@pytest.mark.parametrize("name", ["", "2d", "a-b", "a b", "x.y"])
def test_invalid_names_are_rejected(name: str) -> None:
    """Test that names must be identifiers."""
    with pytest.raises(InvalidVariableError):
        VariableRegistry().add_global("float", name)


def test_constant_requires_value() -> None:
    """Test that constants cannot be declared without a value."""
    with pytest.raises(InvalidVariableError):
        VariableRegistry([Variable(kind=VariableKind.CONST, type="float", name="k")])


def test_active_iterates_active_variables() -> None:
    """Test filtering out deactivated variables."""
    registry = VariableRegistry()
    registry.add_global("float", "a")
    registry.add_global("float", "b").active = False

    assert [v.name for v in registry.active()] == ["a"]
