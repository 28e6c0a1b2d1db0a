"""Unit tests for the ForwardSearchPlanner class."""

import pytest

from symbolic_planning.ground import GroundPlanningProblem
from symbolic_planning.grounding.grounders import RelaxedPlanningGraphGrounder
from symbolic_planning.grounding.preprocessor import Preprocessor
from symbolic_planning.io.configuration import SearchStrategy
from symbolic_planning.lifted import PlanningProblem
from symbolic_planning.pddl import parse_planning_problem
from symbolic_planning.search import ForwardSearchPlanner
from symbolic_planning.validation import plan_is_valid


def _ground(problem: PlanningProblem) -> GroundPlanningProblem:
    """Preprocess and ground a lifted problem using the default configuration."""
    return RelaxedPlanningGraphGrounder().ground(Preprocessor().preprocess(problem))


def test_breadth_first_search_finds_single_move(simple_move_problem: PlanningProblem) -> None:
    """Verify that breadth-first search solves the move example with one action."""
    # Arrange - Ground the problem of moving from a to b
    ground_problem = _ground(simple_move_problem)
    planner = ForwardSearchPlanner(ground_problem)

    # Act - Search for a plan
    plan = planner.plan()

    # Assert - Expect the plan [move(a,b)]
    assert plan is not None
    assert plan.action_names == ["move(a,b)"]
    assert planner.nodes_expanded == 1


def test_search_returns_none_for_unreachable_goals(chain_problem: PlanningProblem) -> None:
    """Verify that exhausting the state space without reaching the goal returns None."""
    # Arrange - Ground the chain problem after removing every adjacency fact
    ground_problem = _ground(chain_problem)
    adjacency = {
        ground_problem.atoms.id_of(atom)
        for atom in ground_problem.atoms
        if atom.predicate == "adjacent"
    }
    initial_state = ground_problem.initial_state.transition(add=set(), delete=adjacency)
    planner = ForwardSearchPlanner(
        GroundPlanningProblem(
            ground_problem.atoms,
            initial_state,
            ground_problem.goal,
            ground_problem.actions,
        ),
    )

    # Act - Search for a plan
    plan = planner.plan()

    # Assert - Expect no plan and an empty frontier
    assert plan is None
    assert not planner.frontier


def test_search_respects_expansion_limit(chain_problem: PlanningProblem) -> None:
    """Verify that the planner gives up once it has expanded the maximum number of states."""
    # Arrange - Limit search to a single expansion (the goal is two moves away)
    planner = ForwardSearchPlanner(_ground(chain_problem), max_expansions=1)

    # Act - Search for a plan
    plan = planner.plan()

    # Assert - Expect no plan after exactly one expansion
    assert plan is None
    assert planner.nodes_expanded == 1


@pytest.mark.parametrize("strategy", list(SearchStrategy))
def test_search_strategies_find_valid_plans(
    strategy: SearchStrategy,
    chain_problem: PlanningProblem,
) -> None:
    """Verify that every search strategy returns a plan accepted by the validator."""
    # Arrange - Ground the chain problem
    ground_problem = _ground(chain_problem)

    # Act - Search for a plan using the strategy
    plan = ForwardSearchPlanner(ground_problem, strategy=strategy).plan()

    # Assert - Expect a valid plan
    assert plan is not None
    assert plan_is_valid(ground_problem, plan)


def test_search_solves_briefcase_world(briefcase_world_domain: str, get_paid_problem: str) -> None:
    """Verify that breadth-first search finds a shortest plan for the `get-paid` problem."""
    # Arrange - Parse and ground the `get-paid` problem
    ground_problem = _ground(parse_planning_problem(briefcase_world_domain, get_paid_problem))

    # Act - Search for a plan
    plan = ForwardSearchPlanner(ground_problem).plan()

    # Assert - Expect three actions: unload the paycheck, load the dictionary, and move
    assert plan is not None
    assert len(plan) == 3
    assert set(plan.action_names) == {"take-out(p)", "put-in(d,home)", "mov-b(home,office)"}
    assert plan.action_names[-1] == "mov-b(home,office)"
    assert plan_is_valid(ground_problem, plan)


def test_step_reports_completion(simple_move_problem: PlanningProblem) -> None:
    """Verify that stepping the planner reports completion once a goal state is popped."""
    # Arrange - Create a planner for the move example
    planner = ForwardSearchPlanner(_ground(simple_move_problem))

    # Act - Expand the initial state, then pop the goal state
    first_done = planner.step()
    second_done = planner.step()

    # Assert - Expect completion only on the second step
    assert not first_done
    assert second_done
    assert planner.steps_taken == 2
    assert planner.reconstruct_plan() is not None
