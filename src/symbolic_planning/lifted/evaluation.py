"""Define functions to evaluate variable-free lifted conditions in closed-world states."""

from __future__ import annotations

from typing import AbstractSet, Iterable, assert_never

from symbolic_planning.errors import RepresentationError, UnsupportedConditionError
from symbolic_planning.grounding.argument_combinations import ArgumentCombinations
from symbolic_planning.lifted.arguments import ConstantPool
from symbolic_planning.lifted.conditions import (
    AbstractCondition,
    AtomicCondition,
    ConditionalEffect,
    ConditionSet,
    Implication,
    Negation,
    NumericComparison,
    NumericEffect,
    NumericExpression,
    Quantification,
    Quantifier,
)
from symbolic_planning.lifted.rewriting import bind

Signature = tuple[str, tuple[str, ...]]
"""Predicate name and argument names identifying a ground atom."""


def holds_in(
    condition: AbstractCondition,
    facts: Iterable[AtomicCondition],
    pool: ConstantPool | None = None,
) -> bool:
    """Evaluate whether a condition holds given the atoms that are true (closed-world).

    Atoms are compared by predicate and argument names. The built-in equality predicate holds
    exactly when both of its arguments name the same object.

    :param condition: Condition without free variables
    :param facts: Positive ground atoms that are true; all other atoms are false
    :param pool: Constants over which quantifications range (required only by quantifications)
    :return: True if the condition holds, otherwise False
    :raises RepresentationError: If the condition has free variables or is an effect
    :raises UnsupportedConditionError: If the condition compares numeric values
    """
    return _holds(condition, frozenset(f.signature for f in facts), pool)


def _holds(
    condition: AbstractCondition,
    signatures: AbstractSet[Signature],
    pool: ConstantPool | None,
) -> bool:
    match condition:
        case AtomicCondition():
            if not condition.is_ground:
                raise RepresentationError(f"Cannot evaluate {condition}, which has variables.")
            if condition.is_equality:
                left, right = condition.arguments
                value = left.name == right.name
            else:
                value = condition.signature in signatures
            return value != condition.negated

        case ConditionSet() if condition.is_conjunction:
            return all(_holds(c, signatures, pool) for c in condition.conditions)

        case ConditionSet():
            return any(_holds(c, signatures, pool) for c in condition.conditions)

        case Negation():
            return not _holds(condition.condition, signatures, pool)

        case Implication():
            if not _holds(condition.premise, signatures, pool):
                return True
            return _holds(condition.conclusion, signatures, pool)

        case Quantification():
            if pool is None:
                raise RepresentationError(f"Evaluating {condition} requires a pool of constants.")
            results = (
                _holds(bind(condition.condition, condition.variables, values), signatures, pool)
                for values in ArgumentCombinations(condition.variables, pool)
            )
            return all(results) if condition.quantifier is Quantifier.UNIVERSAL else any(results)

        case ConditionalEffect() | NumericEffect() | NumericExpression():
            raise RepresentationError(f"The effect or term {condition} has no truth value.")

        case NumericComparison():
            raise UnsupportedConditionError(f"Cannot evaluate numeric condition {condition}.")

        case _:
            assert_never(condition)
