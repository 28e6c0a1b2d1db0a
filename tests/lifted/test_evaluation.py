"""Unit tests for evaluating lifted conditions in closed-world states."""

import pytest

from symbolic_planning.errors import RepresentationError, UnsupportedConditionError
from symbolic_planning.lifted import (
    EQUALITY,
    Argument,
    AtomicCondition,
    Comparator,
    NumericComparison,
    NumericExpression,
    Quantification,
    Quantifier,
)
from symbolic_planning.lifted.evaluation import holds_in

from ..strategies.condition_strategies import CONSTANTS, POOL, PREDICATES

_, P, Q = PREDICATES
A, B, C = CONSTANTS


def test_holds_in_compares_atoms_by_name() -> None:
    """Verify that atoms match facts with the same names, regardless of argument types."""
    # Arrange - Create a fact over a typed constant and a query over an untyped one
    fact = AtomicCondition(P, (Argument.constant("a", "block"),))
    query = AtomicCondition(P, (A,))

    # Act/Assert - Expect the query to hold and its negation not to
    assert holds_in(query, [fact])
    assert not holds_in(query.negate(), [fact])


def test_holds_in_evaluates_equality() -> None:
    """Verify that the built-in equality predicate compares the names of its arguments."""
    # Arrange - Create equality literals over equal and different constants
    same = AtomicCondition(EQUALITY, (A, A))
    different = AtomicCondition(EQUALITY, (A, B))

    # Act/Assert - Expect equality to depend only on the arguments
    assert holds_in(same, [])
    assert not holds_in(different, [])
    assert holds_in(different.negate(), [])


def test_holds_in_ranges_quantifiers_over_the_pool() -> None:
    """Verify that quantifications are evaluated over every constant in the pool."""
    # Arrange - Create quantifications over p(?v) and a state where only p(a) and p(b) hold
    v = Argument.variable("?v")
    forall = Quantification(Quantifier.UNIVERSAL, (v,), AtomicCondition(P, (v,)))
    exists = Quantification(Quantifier.EXISTENTIAL, (v,), AtomicCondition(P, (v,)))
    state = [AtomicCondition(P, (A,)), AtomicCondition(P, (B,))]

    # Act/Assert - Expect the existential to hold but not the universal (p(c) is false)
    assert holds_in(exists, state, POOL)
    assert not holds_in(forall, state, POOL)


def test_holds_in_requires_ground_conditions() -> None:
    """Verify that evaluating a literal with a free variable raises an error."""
    # Arrange - Create a literal with a variable
    literal = AtomicCondition(Q, (A, Argument.variable("?x")))

    # Act/Assert - Expect a representation error
    with pytest.raises(RepresentationError):
        holds_in(literal, [])


def test_holds_in_rejects_numeric_comparisons() -> None:
    """Verify that numeric comparisons cannot be evaluated in a set of atoms."""
    # Arrange - Create a comparison between two constants
    comparison = NumericComparison(
        Comparator.LESS,
        NumericExpression.constant(1),
        NumericExpression.constant(2),
    )

    # Act/Assert - Expect an unsupported-condition error
    with pytest.raises(UnsupportedConditionError):
        holds_in(comparison, [])
