"""Unit tests for typed arguments, type hierarchies, and pools of constants."""

import pytest

from symbolic_planning.lifted import ROOT_TYPE, Argument, ConstantPool, TypeHierarchy


def test_type_hierarchy_subtypes_are_transitive() -> None:
    """Verify that a type is a subtype of itself, its parent, and its parent's ancestors."""
    # Arrange - Create the hierarchy truck -> vehicle -> object
    types = TypeHierarchy({"truck": "vehicle"})

    # Act/Assert - Expect reflexive and transitive subtyping
    assert types.is_subtype("truck", "truck")
    assert types.is_subtype("truck", "vehicle")
    assert types.is_subtype("truck", ROOT_TYPE)
    assert not types.is_subtype("vehicle", "truck")
    assert types.ancestors_of("truck") == ["truck", "vehicle", ROOT_TYPE]


def test_type_hierarchy_rejects_cycles() -> None:
    """Verify that a cyclic type hierarchy is reported as invalid."""
    # Act/Assert - Expect an error when two types are each other's parents
    with pytest.raises(ValueError, match="cycle"):
        TypeHierarchy({"a": "b", "b": "a"})


def test_constant_pool_includes_subtypes() -> None:
    """Verify that the constants of a type include the constants of its subtypes."""
    # Arrange - Create a pool with a truck, a vehicle, and a city
    types = TypeHierarchy({"truck": "vehicle", "city": ROOT_TYPE})
    t1 = Argument.constant("t1", "truck")
    v1 = Argument.constant("v1", "vehicle")
    boston = Argument.constant("boston", "city")
    pool = ConstantPool([t1, v1, boston], types)

    # Act/Assert - Expect each query to return constants in declaration order
    assert pool.constants_of_type("vehicle") == (t1, v1)
    assert pool.constants_of_type("truck") == (t1,)
    assert pool.constants_of_type(ROOT_TYPE) == (t1, v1, boston)
    assert pool.constants_of_type("boat") == ()


def test_constant_pool_rejects_variables() -> None:
    """Verify that variables cannot be added to a pool of constants."""
    # Act/Assert - Expect an error for a variable argument
    with pytest.raises(ValueError):
        ConstantPool([Argument.variable("x")])


def test_variables_are_prefixed() -> None:
    """Verify that variable names are given the PDDL `?` prefix when it's missing."""
    # Act - Create variables with and without the prefix
    without_prefix = Argument.variable("x")
    with_prefix = Argument.variable("?x")

    # Assert - Expect identical variables
    assert without_prefix == with_prefix
    assert not without_prefix.is_constant
