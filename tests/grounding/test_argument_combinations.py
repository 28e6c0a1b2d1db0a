"""Unit tests for the ArgumentCombinations class."""

from hypothesis import given
from hypothesis import strategies as st

from symbolic_planning.grounding.argument_combinations import ArgumentCombinations
from symbolic_planning.lifted import Argument, ConstantPool, TypeHierarchy

TYPES = TypeHierarchy({"truck": "vehicle", "city": "location"})
CONSTANTS = (
    Argument.constant("t1", "truck"),
    Argument.constant("t2", "truck"),
    Argument.constant("v1", "vehicle"),
    Argument.constant("boston", "city"),
)
POOL = ConstantPool(CONSTANTS, TYPES)


def test_zero_variables_yield_one_empty_binding() -> None:
    """Verify that enumerating no variables yields exactly one empty binding."""
    # Act - Enumerate the bindings of an empty list of variables
    combinations = ArgumentCombinations([], POOL)

    # Assert - Expect a single empty binding
    assert list(combinations) == [()]
    assert len(combinations) == 1


def test_variable_without_eligible_constants_yields_nothing() -> None:
    """Verify that a variable with no eligible constants collapses the product to nothing."""
    # Arrange - Create a variable whose type has no constants
    variables = [Argument.variable("?v", "vehicle"), Argument.variable("?b", "boat")]

    # Act - Enumerate the bindings
    combinations = ArgumentCombinations(variables, POOL)

    # Assert - Expect no bindings at all
    assert list(combinations) == []
    assert len(combinations) == 0


def test_bindings_respect_subtypes() -> None:
    """Verify that each position is bound to constants of its type or of any subtype."""
    # Arrange - Create variables of type vehicle and location
    variables = [Argument.variable("?v", "vehicle"), Argument.variable("?l", "location")]

    # Act - Enumerate the bindings
    bindings = list(ArgumentCombinations(variables, POOL))

    # Assert - Expect every vehicle (including trucks) paired with the only location
    t1, t2, v1, boston = CONSTANTS
    assert bindings == [(t1, boston), (t2, boston), (v1, boston)]


def test_enumeration_is_restartable() -> None:
    """Verify that the same enumerator can be iterated more than once."""
    # Arrange - Create an enumerator over two vehicle variables
    variables = [Argument.variable("?x", "vehicle"), Argument.variable("?y", "vehicle")]
    combinations = ArgumentCombinations(variables, POOL)

    # Act - Iterate over the bindings twice
    first_pass = list(combinations)
    second_pass = list(combinations)

    # Assert - Expect both passes to produce the same bindings
    assert first_pass == second_pass
    assert len(first_pass) == 9


@given(st.lists(st.sampled_from(["object", "vehicle", "truck", "city", "boat"]), max_size=4))
def test_length_matches_enumeration(type_names: list[str]) -> None:
    """Verify that the computed length equals the number of enumerated bindings."""
    # Arrange - Create one variable per randomly chosen type
    variables = [Argument.variable(f"?x{i}", t) for i, t in enumerate(type_names)]

    # Act - Enumerate the bindings
    combinations = ArgumentCombinations(variables, POOL)

    # Assert - Expect the length to match the number of bindings produced
    assert len(combinations) == sum(1 for _ in combinations)
