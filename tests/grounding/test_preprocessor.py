"""Unit tests for the Preprocessor class and its module-level helpers."""

from __future__ import annotations

import logging
from dataclasses import replace

import pytest
from hypothesis import given

from symbolic_planning.grounding.preprocessor import (
    Preprocessor,
    eliminate_quantifiers,
    split_operator,
)
from symbolic_planning.io.configuration import PlannerConfiguration
from symbolic_planning.lifted import (
    TOTAL_COST,
    AbstractCondition,
    Argument,
    AtomicCondition,
    Comparator,
    ConditionalEffect,
    ConditionSet,
    NumericComparison,
    NumericExpression,
    Operator,
    PlanningProblem,
    Quantification,
)
from symbolic_planning.lifted.evaluation import holds_in
from symbolic_planning.lifted.rewriting import bind, functions_in, subconditions
from symbolic_planning.pddl import parse_planning_problem

from ..strategies.condition_strategies import POOL, PREDICATES, facts, quantified_conditions

FLAG, P, Q = PREDICATES
X = Argument.variable("?x")


@given(quantified_conditions(), facts())
def test_eliminate_quantifiers_preserves_truth(
    condition: AbstractCondition,
    state: frozenset,
) -> None:
    """Verify that eliminating quantifiers over a pool doesn't change a condition's truth."""
    # Act - Replace every quantification by a condition set over the pool
    result = eliminate_quantifiers(condition, POOL)

    # Assert - Expect no quantifications and the same truth value in the random state
    assert not any(isinstance(node, Quantification) for node in subconditions(result))
    assert holds_in(result, state) == holds_in(condition, state, POOL)


def test_extract_action_costs(action_costs_domain: str, action_costs_problem: str) -> None:
    """Verify that constant `total-cost` increases are compiled into operator costs."""
    # Arrange - Parse a domain whose single operator increases the total cost by 5
    problem = parse_planning_problem(action_costs_domain, action_costs_problem)

    # Act - Extract the action costs
    result = Preprocessor().extract_action_costs(problem)

    # Assert - Expect cost 5 and no remaining references to the `total-cost` function
    drive = result.get_operator("drive")
    assert drive.cost == 5
    assert not functions_in(drive.effect)
    assert TOTAL_COST not in result.functions
    assert not result.initial_function_values


def test_extract_action_costs_falls_back_on_precondition_use(
    action_costs_domain: str,
    action_costs_problem: str,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that a `total-cost` reference in a precondition keeps the fluent in the problem."""
    # Arrange - Require the total cost to be non-negative in the operator's precondition
    problem = parse_planning_problem(action_costs_domain, action_costs_problem)
    total_cost = problem.functions[TOTAL_COST]
    drive = problem.get_operator("drive")
    within_budget = NumericComparison(
        Comparator.GREATER_EQUAL,
        NumericExpression.application(total_cost),
        NumericExpression.constant(0),
    )
    precondition = ConditionSet.conjunction(drive.precondition, within_budget)
    problem = replace(problem, operators=(replace(drive, precondition=precondition),))

    # Act - Attempt to extract the action costs
    with caplog.at_level(logging.WARNING):
        result = Preprocessor().extract_action_costs(problem)

    # Assert - Expect the problem to be unchanged and the violation to be logged
    assert result is problem
    assert TOTAL_COST in result.functions
    assert any("precondition" in message for message in caplog.messages)


def test_extract_action_costs_falls_back_on_conditional_use(
    action_costs_domain: str,
    action_costs_problem: str,
) -> None:
    """Verify that a `total-cost` increase inside a conditional effect prevents extraction."""
    # Arrange - Move the operator's effect inside a conditional effect
    problem = parse_planning_problem(action_costs_domain, action_costs_problem)
    drive = problem.get_operator("drive")
    conditional = ConditionalEffect(AtomicCondition(FLAG), drive.effect)
    problem = replace(problem, operators=(replace(drive, effect=conditional),))

    # Act - Attempt to extract the action costs
    result = Preprocessor().extract_action_costs(problem)

    # Assert - Expect the fluent to be kept
    assert result is problem


def test_extract_action_costs_falls_back_on_goal_use(
    action_costs_domain: str,
    action_costs_problem: str,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verify that a `total-cost` reference in the goal keeps the fluent in the problem."""
    # Arrange - Additionally require the total cost to stay within a budget of 10
    problem = parse_planning_problem(action_costs_domain, action_costs_problem)
    within_budget = NumericComparison(
        Comparator.LESS_EQUAL,
        NumericExpression.application(problem.functions[TOTAL_COST]),
        NumericExpression.constant(10),
    )
    problem = replace(problem, goals=(*problem.goals, within_budget))

    # Act - Attempt to extract the action costs
    with caplog.at_level(logging.WARNING):
        result = Preprocessor().extract_action_costs(problem)

    # Assert - Expect the problem to be unchanged and the goal's violation to be logged
    assert result is problem
    assert any("used in the goal" in message for message in caplog.messages)


def test_preprocess_combines_goals() -> None:
    """Verify that the goals of a problem are simplified into a single conjoined goal."""
    # Arrange - Create a problem with two separate goals
    a = Argument.constant("a")
    problem = PlanningProblem(
        name="two-goals",
        domain_name="test",
        constants=(a,),
        goals=(AtomicCondition(P, (a,)), AtomicCondition(FLAG)),
    )

    # Act - Preprocess the problem
    result = Preprocessor().preprocess(problem)

    # Assert - Expect one conjunctive goal
    expected_goal = ConditionSet.conjunction(AtomicCondition(P, (a,)), AtomicCondition(FLAG))
    assert result.goals == (expected_goal,)


def test_split_operator_clones_per_disjunct() -> None:
    """Verify that k top-level disjuncts yield k operators applicable exactly per disjunct."""
    # Arrange - Create an operator whose precondition has three disjuncts
    a = Argument.constant("a")
    disjuncts = (
        AtomicCondition(FLAG),
        AtomicCondition(P, (X,)),
        ConditionSet.conjunction(AtomicCondition(Q, (X, X)), AtomicCondition(FLAG, negated=True)),
    )
    operator = Operator(
        "act",
        parameters=(X,),
        precondition=ConditionSet.disjunction(*disjuncts),
        effect=AtomicCondition(P, (X,), negated=True),
    )

    # Act - Split the operator
    split = split_operator(operator)

    # Assert - Expect three clones, each with one disjunct and the original effect
    assert [op.name for op in split] == ["act$1$", "act$2$", "act$3$"]
    assert tuple(op.precondition for op in split) == disjuncts
    assert all(op.effect == operator.effect and op.parameters == (X,) for op in split)

    state = frozenset({AtomicCondition(Q, (a, a))})
    applicable = [holds_in(bind(op.precondition, op.parameters, (a,)), state) for op in split]
    assert applicable == [False, False, True]


def test_split_operator_splits_conditional_effects() -> None:
    """Verify that a disjunctive prerequisite becomes one conditional effect per disjunct."""
    # Arrange - Create an operator with the effect: when (flag or p(?x)) then q(?x, ?x)
    consequence = AtomicCondition(Q, (X, X))
    effect = ConditionalEffect(
        ConditionSet.disjunction(AtomicCondition(FLAG), AtomicCondition(P, (X,))),
        consequence,
    )
    operator = Operator("act", parameters=(X,), effect=effect)

    # Act - Split the operator
    (result,) = split_operator(operator)

    # Assert - Expect the same name and a conjunction of two conditional effects
    assert result.name == "act"
    assert result.effect == ConditionSet.conjunction(
        ConditionalEffect(AtomicCondition(FLAG), consequence),
        ConditionalEffect(AtomicCondition(P, (X,)), consequence),
    )


def test_preprocess_splits_disjunctive_preconditions(
    switches_domain: str,
    switches_problem: str,
) -> None:
    """Verify that preprocessing splits operators unless disjunctions are kept."""
    # Arrange - Parse a domain whose `light` operator has a disjunctive precondition
    problem = parse_planning_problem(switches_domain, switches_problem)
    keep_disjunctions = PlannerConfiguration(keep_disjunctions=True)

    # Act - Preprocess the problem with and without DNF conversion
    split = Preprocessor().preprocess(problem)
    kept = Preprocessor(keep_disjunctions).preprocess(problem)

    # Assert - Expect two clones of `light` only when converting into DNF
    assert {op.name for op in split.operators} == {"flip-b", "light$1$", "light$2$"}
    assert {op.name for op in kept.operators} == {"flip-b", "light"}
    assert kept.get_operator("light").precondition.is_disjunction
