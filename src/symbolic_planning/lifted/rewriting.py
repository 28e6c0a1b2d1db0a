"""Define term-rewriting operations over lifted condition trees.

Every function here is total and purely functional: input trees are only read and new trees
are returned. Each function matches exhaustively over the `AbstractCondition` union.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from itertools import product
from typing import Callable, Iterable, Mapping, Optional, Sequence, assert_never

from symbolic_planning.errors import RepresentationError
from symbolic_planning.lifted.arguments import Argument
from symbolic_planning.lifted.conditions import (
    FALSE,
    TRUE,
    AbstractCondition,
    AtomicCondition,
    ConditionalEffect,
    ConditionSet,
    Connective,
    Implication,
    Negation,
    NumericComparison,
    NumericEffect,
    NumericExpression,
    Quantification,
)
from symbolic_planning.lifted.symbols import Function

Rewrite = Callable[[AbstractCondition], Optional[AbstractCondition]]
"""Maps a condition node to its replacement, or to None to delete it from its parent."""


class TraversalOrder(Enum):
    """Enumeration of the orders in which `traverse` applies a rewrite to a tree."""

    HEAD_FIRST = "head_first"
    """Rewrite each node after its children have been rewritten (bottom-up)."""

    TAIL_FIRST = "tail_first"
    """Rewrite each node before descending into its (rewritten) children (top-down)."""


def junction(connective: Connective, conditions: Iterable[AbstractCondition]) -> AbstractCondition:
    """Join conditions with a connective, flattening and pruning trivial members.

    Members with the same connective are merged into the result, identity elements (TRUE in a
    conjunction, FALSE in a disjunction) and duplicates are dropped, an absorbing element makes
    the whole set absorbing, and a single remaining member is returned as-is.

    :param connective: Connective joining the conditions
    :param conditions: Conditions to be joined
    :return: Flattened condition set (or its only member)
    """
    absorbing = ConditionSet(connective.dual)
    members: list[AbstractCondition] = []
    seen: set[AbstractCondition] = set()

    for condition in conditions:
        if isinstance(condition, ConditionSet) and condition.connective is connective:
            nested = condition.conditions
        elif condition == absorbing:
            return absorbing
        else:
            nested = (condition,)

        for member in nested:
            if member not in seen:
                seen.add(member)
                members.append(member)

    if len(members) == 1:
        return members[0]
    return ConditionSet(connective, tuple(members))


def simplify(condition: AbstractCondition, negated: bool = False) -> AbstractCondition:
    """Push negations down to the literals and flatten nested condition sets.

    Reference: De Morgan's laws; the result is in negation normal form (NNF).

    :param condition: Condition to be simplified
    :param negated: Whether the condition occurs under a negation (defaults to False)
    :return: Equivalent condition in which only literals carry negations
    :raises RepresentationError: If an effect occurs under a negation
    """
    match condition:
        case AtomicCondition():
            return condition.negate() if negated else condition

        case ConditionSet():
            connective = condition.connective.dual if negated else condition.connective
            return junction(connective, (simplify(c, negated) for c in condition.conditions))

        case Negation():
            return simplify(condition.condition, not negated)

        case Implication():
            as_disjunction = ConditionSet.disjunction(
                Negation(condition.premise),
                condition.conclusion,
            )
            return simplify(as_disjunction, negated)

        case Quantification():
            quantifier = condition.quantifier.dual if negated else condition.quantifier
            inner = simplify(condition.condition, negated)

            # A quantification of an identity element (e.g., forall x. TRUE) is that element
            if inner == ConditionSet(quantifier.connective):
                return inner
            return Quantification(quantifier, condition.variables, inner)

        case ConditionalEffect():
            if negated:
                raise RepresentationError(f"Cannot negate the conditional effect {condition}.")
            return ConditionalEffect(
                simplify(condition.prerequisite),
                simplify(condition.consequence),
            )

        case NumericEffect() | NumericExpression():
            if negated:
                raise RepresentationError(f"Cannot negate the numeric term {condition}.")
            return condition

        case NumericComparison():
            return condition.negated() if negated else condition

        case _:
            assert_never(condition)


def get_dnf(condition: AbstractCondition) -> AbstractCondition:
    """Convert a condition in negation normal form into disjunctive normal form (DNF).

    Conjunction is distributed over disjunction until the result is a disjunction of
    conjunctions of literals, or a single conjunction if no disjunction remains. Conjunctions
    containing a literal and its negation are dropped. The size of the result can be
    exponential in the nesting depth of the input.

    :param condition: Condition to be converted (non-NNF input is simplified first)
    :return: Equivalent condition in DNF
    """
    match condition:
        case AtomicCondition() | NumericEffect() | NumericExpression() | NumericComparison():
            return condition

        case ConditionSet() if condition.is_disjunction:
            return junction(Connective.DISJUNCTION, (get_dnf(c) for c in condition.conditions))

        case ConditionSet():
            return _distribute(get_dnf(c) for c in condition.conditions)

        case Negation() | Implication():
            return get_dnf(simplify(condition))

        case Quantification():
            return replace(condition, condition=get_dnf(condition.condition))

        case ConditionalEffect():
            return ConditionalEffect(
                get_dnf(condition.prerequisite),
                get_dnf(condition.consequence),
            )

        case _:
            assert_never(condition)


def _disjuncts(condition: AbstractCondition) -> tuple[AbstractCondition, ...]:
    """Retrieve the disjuncts of a condition (the condition itself, unless it's a disjunction)."""
    if isinstance(condition, ConditionSet) and condition.is_disjunction:
        return condition.conditions
    return (condition,)


def _is_contradictory(conjunction: AbstractCondition) -> bool:
    """Check whether a conjunction contains some literal together with its negation."""
    if not isinstance(conjunction, ConditionSet):
        return False
    literals = {c for c in conjunction.conditions if isinstance(c, AtomicCondition)}
    return any(lit.negate() in literals for lit in literals)


def _distribute(conjuncts: Iterable[AbstractCondition]) -> AbstractCondition:
    """Distribute a conjunction of DNF conditions over their disjunctions."""
    combinations = product(*(_disjuncts(c) for c in conjuncts))
    disjuncts = (junction(Connective.CONJUNCTION, combo) for combo in combinations)
    return junction(Connective.DISJUNCTION, (d for d in disjuncts if not _is_contradictory(d)))


def bind(
    condition: AbstractCondition,
    ref_vars: Sequence[Argument],
    values: Sequence[Argument],
) -> AbstractCondition:
    """Create a copy of a condition with the given variables bound to the given values.

    Variables are matched positionally by name; variables absent from `ref_vars` are left
    untouched, as are occurrences shadowed by a nested quantification over the same name.

    :param condition: Condition in which variables are substituted
    :param ref_vars: Variables to be replaced
    :param values: Replacement argument for each variable (in the same order)
    :return: Structural copy of the condition with the substitution applied
    :raises RepresentationError: If the numbers of variables and values differ
    """
    if len(ref_vars) != len(values):
        raise RepresentationError(
            f"Cannot bind {len(ref_vars)} variables to {len(values)} values: "
            f"({', '.join(map(str, ref_vars))}) <- ({', '.join(map(str, values))}).",
        )

    substitution = {var.name: value for var, value in zip(ref_vars, values)}
    return substitute(condition, substitution)


def _substitute_args(
    arguments: tuple[Argument, ...],
    substitution: Mapping[str, Argument],
) -> tuple[Argument, ...]:
    return tuple(
        arg if arg.is_constant else substitution.get(arg.name, arg) for arg in arguments
    )


def substitute(
    condition: AbstractCondition,
    substitution: Mapping[str, Argument],
) -> AbstractCondition:
    """Replace variables in a condition according to a map from variable names to arguments."""
    if not substitution:
        return condition

    match condition:
        case AtomicCondition():
            return replace(
                condition,
                arguments=_substitute_args(condition.arguments, substitution),
            )

        case ConditionSet():
            return replace(
                condition,
                conditions=tuple(substitute(c, substitution) for c in condition.conditions),
            )

        case Negation():
            return Negation(substitute(condition.condition, substitution))

        case Implication():
            return Implication(
                substitute(condition.premise, substitution),
                substitute(condition.conclusion, substitution),
            )

        case Quantification():
            shadowed = {v.name for v in condition.variables}
            inner_substitution = {k: v for k, v in substitution.items() if k not in shadowed}
            return replace(
                condition,
                condition=substitute(condition.condition, inner_substitution),
            )

        case ConditionalEffect():
            return ConditionalEffect(
                substitute(condition.prerequisite, substitution),
                substitute(condition.consequence, substitution),
            )

        case NumericEffect():
            return replace(
                condition,
                arguments=_substitute_args(condition.arguments, substitution),
                expression=_substitute_expression(condition.expression, substitution),
            )

        case NumericExpression():
            return _substitute_expression(condition, substitution)

        case NumericComparison():
            return replace(
                condition,
                left=_substitute_expression(condition.left, substitution),
                right=_substitute_expression(condition.right, substitution),
            )

        case _:
            assert_never(condition)


def _substitute_expression(
    expression: NumericExpression,
    substitution: Mapping[str, Argument],
) -> NumericExpression:
    return replace(
        expression,
        arguments=_substitute_args(expression.arguments, substitution),
        operands=tuple(_substitute_expression(o, substitution) for o in expression.operands),
    )


def traverse(
    condition: AbstractCondition,
    rewrite: Rewrite,
    order: TraversalOrder = TraversalOrder.HEAD_FIRST,
) -> AbstractCondition:
    """Apply a rewrite function to every node of a condition tree.

    With `HEAD_FIRST`, each node is rewritten after its children, so the rewrite receives a
    node whose children are already in their final form. With `TAIL_FIRST`, each node is
    rewritten first and the traversal continues into the children of the replacement.

    A rewrite returning None deletes the node from its parent; a deleted sub-condition of any
    other node (or a deleted root) is replaced by the empty conjunction.

    :param condition: Root of the tree to be rewritten
    :param rewrite: Function mapping each node to its replacement (or None to delete it)
    :param order: Order in which nodes are rewritten (defaults to head-first)
    :return: Rewritten tree
    """
    result = _traverse(condition, rewrite, order)
    return TRUE if result is None else result


def _traverse(
    condition: AbstractCondition,
    rewrite: Rewrite,
    order: TraversalOrder,
) -> AbstractCondition | None:
    if order is TraversalOrder.TAIL_FIRST:
        rewritten = rewrite(condition)
        return None if rewritten is None else _rebuild(rewritten, rewrite, order)

    return rewrite(_rebuild(condition, rewrite, order))


def _rebuild(
    condition: AbstractCondition,
    rewrite: Rewrite,
    order: TraversalOrder,
) -> AbstractCondition:
    """Reconstruct a node from its traversed children."""

    def child(sub_condition: AbstractCondition) -> AbstractCondition:
        result = _traverse(sub_condition, rewrite, order)
        return TRUE if result is None else result

    match condition:
        case AtomicCondition() | NumericEffect() | NumericExpression() | NumericComparison():
            return condition

        case ConditionSet():
            children = (_traverse(c, rewrite, order) for c in condition.conditions)
            return replace(condition, conditions=tuple(c for c in children if c is not None))

        case Negation():
            return Negation(child(condition.condition))

        case Implication():
            return Implication(child(condition.premise), child(condition.conclusion))

        case Quantification():
            return replace(condition, condition=child(condition.condition))

        case ConditionalEffect():
            return ConditionalEffect(child(condition.prerequisite), child(condition.consequence))

        case _:
            assert_never(condition)


def subconditions(condition: AbstractCondition) -> Iterable[AbstractCondition]:
    """Iterate over every node of a condition tree, parents before children."""
    yield condition

    match condition:
        case AtomicCondition():
            pass
        case NumericExpression():
            for operand in condition.operands:
                yield from subconditions(operand)
        case ConditionSet():
            for c in condition.conditions:
                yield from subconditions(c)
        case Negation():
            yield from subconditions(condition.condition)
        case Implication():
            yield from subconditions(condition.premise)
            yield from subconditions(condition.conclusion)
        case Quantification():
            yield from subconditions(condition.condition)
        case ConditionalEffect():
            yield from subconditions(condition.prerequisite)
            yield from subconditions(condition.consequence)
        case NumericEffect():
            yield from subconditions(condition.expression)
        case NumericComparison():
            yield from subconditions(condition.left)
            yield from subconditions(condition.right)
        case _:
            assert_never(condition)


def functions_in(condition: AbstractCondition) -> set[Function]:
    """Collect every numeric function referenced anywhere in a condition tree."""
    functions: set[Function] = set()
    for node in subconditions(condition):
        if isinstance(node, NumericEffect):
            functions.add(node.function)
        elif isinstance(node, NumericExpression) and node.function is not None:
            functions.add(node.function)
    return functions


def free_variables(condition: AbstractCondition) -> set[str]:
    """Collect the names of all variables not bound by a quantification within the condition."""

    def of_arguments(arguments: tuple[Argument, ...]) -> set[str]:
        return {arg.name for arg in arguments if not arg.is_constant}

    def of_expression(expression: NumericExpression) -> set[str]:
        names = of_arguments(expression.arguments)
        for operand in expression.operands:
            names |= of_expression(operand)
        return names

    match condition:
        case AtomicCondition():
            return of_arguments(condition.arguments)
        case ConditionSet():
            return set().union(*(free_variables(c) for c in condition.conditions))
        case Negation():
            return free_variables(condition.condition)
        case Implication():
            return free_variables(condition.premise) | free_variables(condition.conclusion)
        case Quantification():
            return free_variables(condition.condition) - {v.name for v in condition.variables}
        case ConditionalEffect():
            return free_variables(condition.prerequisite) | free_variables(condition.consequence)
        case NumericEffect():
            return of_arguments(condition.arguments) | of_expression(condition.expression)
        case NumericExpression():
            return of_expression(condition)
        case NumericComparison():
            return of_expression(condition.left) | of_expression(condition.right)
        case _:
            assert_never(condition)

