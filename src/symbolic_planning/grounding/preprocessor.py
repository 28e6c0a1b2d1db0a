"""Define a preprocessor that simplifies the structure of lifted planning problems.

The preprocessor compiles a `total-cost` fluent into per-operator costs (when possible),
eliminates quantifications over the problem's constants, pushes negations down to the
literals, and (unless disjunctions are kept) converts conditions into disjunctive normal form
and splits operators along their top-level disjunctions.
"""

from __future__ import annotations

import itertools
from dataclasses import replace

from symbolic_planning.grounding.argument_combinations import ArgumentCombinations
from symbolic_planning.io.configuration import PlannerConfiguration
from symbolic_planning.io.logging import log_debug, log_warning
from symbolic_planning.lifted.arguments import ConstantPool
from symbolic_planning.lifted.conditions import (
    AbstractCondition,
    ConditionalEffect,
    ConditionSet,
    Connective,
    NumericEffect,
    NumericEffectKind,
    Quantification,
)
from symbolic_planning.lifted.operators import Operator
from symbolic_planning.lifted.planning_problem import PlanningProblem
from symbolic_planning.lifted.rewriting import (
    TraversalOrder,
    bind,
    functions_in,
    get_dnf,
    simplify,
    traverse,
)
from symbolic_planning.lifted.symbols import TOTAL_COST, Function


class TotalCostPatternError(ValueError):
    """An error raised when an operator uses `total-cost` beyond constant increases."""

    def __init__(self, violations: list[str]) -> None:
        """Initialize the error with a description of each violated rule."""
        super().__init__("; ".join(violations))
        self.violations = violations


class Preprocessor:
    """Simplifies lifted planning problems into the form expected by the grounders."""

    def __init__(self, config: PlannerConfiguration | None = None) -> None:
        """Initialize the preprocessor using the given planner configuration."""
        self.config = config if config is not None else PlannerConfiguration()

    @property
    def convert_to_dnf(self) -> bool:
        """Check whether conditions are converted into disjunctive normal form."""
        return not self.config.keep_disjunctions

    def preprocess(self, problem: PlanningProblem) -> PlanningProblem:
        """Simplify a lifted planning problem, returning the simplified problem.

        :param problem: Lifted planning problem (left unmodified)
        :return: Equivalent problem without quantifications, negations only on literals, and
            (unless disjunctions are kept) one conjunctive precondition per operator
        """
        problem = self.extract_action_costs(problem)
        problem = self.simplify_problem(problem)

        if self.convert_to_dnf:
            operators = tuple(itertools.chain.from_iterable(map(split_operator, problem.operators)))
            log_debug(f"Split {len(problem.operators)} operators into {len(operators)}.")
            problem = replace(problem, operators=operators)

        return problem

    def extract_action_costs(self, problem: PlanningProblem) -> PlanningProblem:
        """Compile the `total-cost` fluent (if any) into per-operator integer costs.

        Extraction succeeds only if neither the goal nor any derived-predicate rule refers to
        `total-cost`, and every operator leaves it out of its precondition and only increases
        it by constants outside of conditional effects. Otherwise, each violation is logged as
        a warning and the problem is returned unchanged.

        :param problem: Lifted planning problem
        :return: Problem without the `total-cost` function, or the given problem on failure
        """
        total_cost = problem.functions.get(TOTAL_COST)
        if total_cost is None:
            return problem

        violations: list[str] = []
        if total_cost in functions_in(problem.goal):
            violations.append(f"({TOTAL_COST}) is used in the goal.")
        violations += [
            f"({TOTAL_COST}) is used in the rule deriving '{axiom.predicate.name}'."
            for axiom in problem.axioms
            if total_cost in functions_in(axiom.condition)
        ]

        costs: list[int] = []
        for operator in problem.operators:
            try:
                costs.append(_operator_cost(operator, total_cost))
            except TotalCostPatternError as error:
                violations += error.violations

        if violations:
            for violation in violations:
                log_warning(violation)
            log_warning(
                f"The ({TOTAL_COST}) function will be kept as a full-featured numeric fluent "
                "in the problem definition. This can affect performance.",
            )
            return problem

        def remove_cost_effects(node: AbstractCondition) -> AbstractCondition | None:
            if isinstance(node, NumericEffect) and node.function == total_cost:
                return None
            return node

        operators = tuple(
            replace(op, effect=traverse(op.effect, remove_cost_effects), cost=cost)
            for op, cost in zip(problem.operators, costs)
        )
        functions = {name: f for name, f in problem.functions.items() if f != total_cost}
        initial_values = {
            term: value
            for term, value in problem.initial_function_values.items()
            if term.function != total_cost
        }

        log_debug(f"Extracted ({TOTAL_COST}) into the costs of {len(operators)} operators.")
        return replace(
            problem,
            operators=operators,
            functions=functions,
            initial_function_values=initial_values,
        )

    def simplify_problem(self, problem: PlanningProblem) -> PlanningProblem:
        """Simplify every operator, the conjoined goal, and every derived-predicate axiom."""
        pool = problem.constant_pool

        operators = tuple(
            replace(
                op,
                precondition=self.simplify_condition(op.precondition, pool),
                effect=self.simplify_effect(op.effect, pool),
            )
            for op in problem.operators
        )
        goal = self.simplify_condition(ConditionSet.conjunction(*problem.goals), pool)
        axioms = tuple(
            replace(axiom, condition=self.simplify_condition(axiom.condition, pool))
            for axiom in problem.axioms
        )

        return replace(problem, operators=operators, goals=(goal,), axioms=axioms)

    def simplify_condition(
        self,
        condition: AbstractCondition,
        pool: ConstantPool,
    ) -> AbstractCondition:
        """Eliminate quantifiers, push down negations, and optionally convert into DNF."""
        result = simplify(eliminate_quantifiers(condition, pool))
        return get_dnf(result) if self.convert_to_dnf else result

    def simplify_effect(
        self,
        effect: AbstractCondition,
        pool: ConstantPool,
    ) -> AbstractCondition:
        """Simplify an effect, converting only the prerequisites of its conditional effects."""
        result = simplify(eliminate_quantifiers(effect, pool))
        if not self.convert_to_dnf:
            return result

        def prerequisite_to_dnf(node: AbstractCondition) -> AbstractCondition:
            if isinstance(node, ConditionalEffect):
                return replace(node, prerequisite=get_dnf(node.prerequisite))
            return node

        return traverse(result, prerequisite_to_dnf)


def _operator_cost(operator: Operator, total_cost: Function) -> int:
    """Compute the total constant increase of `total-cost` caused by an operator.

    :raises TotalCostPatternError: If the operator uses `total-cost` in any other way
    """
    violations = []
    if total_cost in functions_in(operator.precondition):
        violations.append(f"({TOTAL_COST}) is used in the precondition of '{operator.name}'.")

    cost = 0
    pending = [operator.effect]
    while pending:
        effect = pending.pop(0)

        match effect:
            case NumericEffect() if effect.function == total_cost:
                value = effect.expression.value
                if effect.kind is not NumericEffectKind.INCREASE:
                    violations.append(
                        f"({TOTAL_COST}) is changed using '{effect.kind}' rather than "
                        f"'increase' in '{operator.name}'.",
                    )
                elif value is None or not effect.expression.is_constant or value != int(value):
                    violations.append(
                        f"({TOTAL_COST}) is increased by the non-constant or non-integer "
                        f"value {effect.expression} in '{operator.name}'.",
                    )
                else:
                    cost += int(value)
            case ConditionSet() if effect.is_conjunction:
                pending.extend(effect.conditions)
            case ConditionalEffect() | Quantification() if total_cost in functions_in(effect):
                violations.append(
                    f"({TOTAL_COST}) appears in a conditional or quantified effect "
                    f"of '{operator.name}'.",
                )

    if violations:
        raise TotalCostPatternError(violations)
    return cost


def eliminate_quantifiers(condition: AbstractCondition, pool: ConstantPool) -> AbstractCondition:
    """Replace each quantification by a conjunction or disjunction over the given constants.

    Universal quantifications become conjunctions and existential quantifications become
    disjunctions, containing one copy of the inner condition per binding of the quantified
    variables. Inner quantifications are eliminated first.

    :param condition: Condition that may contain quantifications
    :param pool: Constants over which the quantified variables range
    :return: Equivalent condition without quantifications
    """

    def dequantify(node: AbstractCondition) -> AbstractCondition:
        if not isinstance(node, Quantification):
            return node
        instances = tuple(
            bind(node.condition, node.variables, values)
            for values in ArgumentCombinations(node.variables, pool)
        )
        return ConditionSet(node.quantifier.connective, instances)

    return traverse(condition, dequantify, TraversalOrder.HEAD_FIRST)


def split_conditional_effect(effect: ConditionalEffect) -> list[ConditionalEffect]:
    """Split a conditional effect along the top-level disjunction of its prerequisite."""
    prerequisite = effect.prerequisite
    if isinstance(prerequisite, ConditionSet) and prerequisite.is_disjunction:
        return [replace(effect, prerequisite=p) for p in prerequisite.conditions]
    return [effect]


def split_operator(operator: Operator) -> list[Operator]:
    """Split an operator in DNF into operators with conjunctive preconditions.

    Each conditional effect with a disjunctive prerequisite is replaced by one conditional
    effect per disjunct. If the precondition is a disjunction, the operator is cloned once per
    disjunct, with the clones named `name$1$`, `name$2$`, and so on.

    :param operator: Operator whose precondition and effect are in DNF
    :return: Operators that together reproduce the behavior of the given operator
    """
    effect = operator.effect
    match effect:
        case ConditionalEffect():
            effect = ConditionSet.conjunction(*split_conditional_effect(effect))
        case ConditionSet() if effect.is_conjunction:
            members: list[AbstractCondition] = []
            for member in effect.conditions:
                if isinstance(member, ConditionalEffect):
                    members.extend(split_conditional_effect(member))
                else:
                    members.append(member)
            effect = ConditionSet(Connective.CONJUNCTION, tuple(members))

    precondition = operator.precondition
    if isinstance(precondition, ConditionSet) and precondition.is_disjunction:
        return [
            replace(operator, name=f"{operator.name}${i}$", precondition=disjunct, effect=effect)
            for i, disjunct in enumerate(precondition.conditions, start=1)
        ]

    return [replace(operator, effect=effect)]
