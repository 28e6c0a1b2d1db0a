"""Define the planning pipeline: preprocess, ground, search, and (optionally) validate."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from symbolic_planning.ground.plan import Plan
from symbolic_planning.ground.problem import GroundPlanningProblem
from symbolic_planning.grounding.grounders import make_grounder
from symbolic_planning.grounding.preprocessor import Preprocessor
from symbolic_planning.io.configuration import PlannerConfiguration
from symbolic_planning.io.logging import log_info, log_warning
from symbolic_planning.lifted.planning_problem import PlanningProblem
from symbolic_planning.search.forward_search import ForwardSearchPlanner
from symbolic_planning.validation.validator import validate_plan


@dataclass(frozen=True)
class PlanningResult:
    """The outcome of running the planning pipeline on a lifted problem."""

    ground_problem: GroundPlanningProblem
    plan: Plan | None
    """Plan found by the search (None if no plan was found within the limits)."""

    valid: bool | None = None
    """Validator verdict for the plan (None if no plan was found or validation was skipped)."""

    timings: dict[str, float] = field(default_factory=dict)
    """Wall-clock time (seconds) spent in each stage of the pipeline."""

    @property
    def solved(self) -> bool:
        """Check whether a plan was found that wasn't rejected by the validator."""
        return self.plan is not None and self.valid is not False


def solve(
    problem: PlanningProblem,
    config: PlannerConfiguration | None = None,
) -> PlanningResult:
    """Preprocess, ground, and search the given lifted planning problem.

    :param problem: Lifted planning problem to be solved
    :param config: Planner configuration (defaults to the default configuration)
    :return: Ground problem, plan (if any), validator verdict, and per-stage timings
    """
    config = config if config is not None else PlannerConfiguration()
    timings: dict[str, float] = {}

    start = time.perf_counter()
    preprocessed = Preprocessor(config).preprocess(problem)
    timings["preprocess"] = time.perf_counter() - start
    log_info(
        f"Preprocessed '{problem.name}' into {len(preprocessed.operators)} operators "
        f"in {timings['preprocess']:.3f} seconds.",
    )

    start = time.perf_counter()
    ground_problem = make_grounder(config.grounding).ground(preprocessed)
    timings["ground"] = time.perf_counter() - start
    log_info(
        f"Grounded {len(ground_problem.atoms)} atoms and {len(ground_problem.actions)} actions "
        f"using the '{config.grounding}' strategy in {timings['ground']:.3f} seconds.",
    )

    start = time.perf_counter()
    planner = ForwardSearchPlanner(
        ground_problem,
        strategy=config.search,
        max_expansions=config.max_expansions,
        time_limit_s=config.time_limit_s,
    )
    plan = planner.plan()
    timings["search"] = time.perf_counter() - start

    if plan is None:
        log_warning(
            f"No plan found after expanding {planner.nodes_expanded} states "
            f"in {timings['search']:.3f} seconds.",
        )
        return PlanningResult(ground_problem, None, timings=timings)

    log_info(
        f"Found a plan with {len(plan)} actions (cost {plan.cost}) after expanding "
        f"{planner.nodes_expanded} states in {timings['search']:.3f} seconds.",
    )

    if not config.validate_plan:
        return PlanningResult(ground_problem, plan, timings=timings)

    start = time.perf_counter()
    validation = validate_plan(ground_problem, plan)
    timings["validate"] = time.perf_counter() - start
    if validation.valid:
        log_info("The plan was validated successfully.")
    else:
        log_warning(validation.message)

    return PlanningResult(ground_problem, plan, validation.valid, timings)
