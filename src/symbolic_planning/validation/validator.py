"""Define functions to validate plans by replaying them against a ground planning problem."""

from __future__ import annotations

from dataclasses import dataclass

from symbolic_planning.ground.actions import Action
from symbolic_planning.ground.plan import Plan
from symbolic_planning.ground.problem import GroundPlanningProblem
from symbolic_planning.ground.state import State
from symbolic_planning.io.logging import log_error


@dataclass(frozen=True)
class PlanValidation:
    """The verdict of replaying a plan, with diagnostics describing the first violation."""

    valid: bool
    step: int | None = None
    """1-based index of the first inapplicable action (None if every action was applicable)."""

    action: Action | None = None
    """First inapplicable action (None if every action was applicable)."""

    state: State | None = None
    """State in which the violation was detected (None for valid plans)."""

    message: str = ""

    def __bool__(self) -> bool:
        """Evaluate whether the plan was found to be valid."""
        return self.valid


def validate_plan(problem: GroundPlanningProblem, plan: Plan) -> PlanValidation:
    """Replay a plan from the initial state, stopping at the first violation.

    :param problem: Ground planning problem the plan is meant to solve
    :param plan: Sequence of actions to be validated
    :return: Verdict, with the step, action, and state of any violation
    """
    state = problem.initial_state

    for step, action in enumerate(plan, start=1):
        if not action.is_applicable(state):
            return PlanValidation(
                valid=False,
                step=step,
                action=action,
                state=state,
                message=(
                    f"Error at step {step}: The action {action} is not applicable "
                    f"in state {problem.describe(state)}."
                ),
            )
        state = problem.successor(state, action)

    if not problem.is_goal(state):
        return PlanValidation(
            valid=False,
            state=state,
            message=(
                f"Error: The goal {problem.goal.describe(problem.atoms)} is not satisfied "
                f"in the final state {problem.describe(state)}."
            ),
        )

    return PlanValidation(valid=True)


def plan_is_valid(problem: GroundPlanningProblem, plan: Plan) -> bool:
    """Check whether a plan solves a ground problem, logging the first violation (if any)."""
    validation = validate_plan(problem, plan)
    if not validation.valid:
        log_error(validation.message)
    return validation.valid
