"""Define an uninformed forward-search planner over the states of a ground planning problem.

Reference: Section 3.4 of AIMA (4th Ed.) by Russell and Norvig.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass

from symbolic_planning.ground.actions import Action
from symbolic_planning.ground.plan import Plan
from symbolic_planning.ground.problem import GroundPlanningProblem
from symbolic_planning.ground.state import State
from symbolic_planning.io.configuration import SearchStrategy
from symbolic_planning.io.logging import console, log_debug


@dataclass(frozen=True)
class SearchNode:
    """A node in the search tree (represents a particular path to a state)."""

    state: State
    parent: SearchNode | None = None
    action: Action | None = None
    """Action applied in the parent's state to reach this node (None for the root)."""

    depth: int = 0


class ForwardSearchPlanner:
    """Explores the state space of a ground planning problem by applying actions.

    Breadth-first search (the default) returns a plan with the fewest actions; depth-first
    search may return longer plans. Both detect duplicate states and are complete on the
    finite state spaces of ground problems.
    """

    def __init__(
        self,
        problem: GroundPlanningProblem,
        strategy: SearchStrategy = SearchStrategy.BREADTH_FIRST,
        max_expansions: int | None = None,
        time_limit_s: float | None = None,
    ) -> None:
        """Initialize the planner for the given ground problem.

        :param problem: Ground planning problem to be solved
        :param strategy: Order in which states are expanded (defaults to breadth-first)
        :param max_expansions: Optional limit on the number of expanded states
        :param time_limit_s: Optional limit (seconds) on the search's wall-clock time
        """
        self.problem = problem
        self.strategy = strategy
        self.max_expansions = max_expansions
        self.time_limit_s = time_limit_s

        self.frontier: deque[SearchNode] = deque([SearchNode(problem.initial_state)])
        """Nodes whose states have been reached but not yet expanded."""

        self.reached: set[State] = {problem.initial_state}
        """States for which some node has been added to the frontier."""

        self._num_step_calls: int = 0
        """Number of times the `step()` method has been called."""

        self._nodes_expanded: int = 0
        """Number of nodes whose successors have been enumerated and added to the frontier."""

        self._solution_node: SearchNode | None = None

    @property
    def steps_taken(self) -> int:
        """Retrieve the number of search steps that the planner has taken."""
        return self._num_step_calls

    @property
    def nodes_expanded(self) -> int:
        """Retrieve the number of nodes whose successors have been generated."""
        return self._nodes_expanded

    def pop_node(self) -> SearchNode:
        """Remove the next node to be expanded from the frontier."""
        if self.strategy is SearchStrategy.DEPTH_FIRST:
            return self.frontier.pop()
        return self.frontier.popleft()

    def step(self) -> bool:
        """Expand the next node of the frontier.

        :return: True if search is complete (a goal was found or no states remain), else False
        """
        self._num_step_calls += 1

        if not self.frontier:
            return True

        node = self.pop_node()
        if self.problem.is_goal(node.state):
            self._solution_node = node
            return True

        for action in self.problem.applicable_actions(node.state):
            successor = self.problem.successor(node.state, action)
            if successor not in self.reached:
                self.reached.add(successor)
                self.frontier.append(SearchNode(successor, node, action, node.depth + 1))

        self._nodes_expanded += 1

        return False

    def plan(self) -> Plan | None:
        """Search until a goal state is found, the space is exhausted, or a limit is reached.

        :return: Plan reaching the first goal state found, or None if no plan was found
        """
        deadline = None if self.time_limit_s is None else time.monotonic() + self.time_limit_s

        while not self.step():
            if self.max_expansions is not None and self._nodes_expanded >= self.max_expansions:
                log_debug(f"Search stopped after {self._nodes_expanded} expansions.")
                return None
            if deadline is not None and time.monotonic() > deadline:
                log_debug(f"Search stopped after {self.time_limit_s} seconds.")
                return None

        return self.reconstruct_plan()

    def reconstruct_plan(self) -> Plan | None:
        """Reconstruct the plan leading to the stored solution node.

        :return: Plan whose actions lead from the initial state to the goal, or None
        """
        if self._solution_node is None:
            return None

        actions: list[Action] = []
        current: SearchNode | None = self._solution_node
        while current is not None and current.action is not None:
            actions.append(current.action)
            current = current.parent
        actions.reverse()
        return Plan(tuple(actions))

    def log_info(self) -> None:
        """Log the current state of the search to the console."""
        console.print(f"Current frontier size: {len(self.frontier)}.")
        console.print(f"Current number of reached states: {len(self.reached)}.")
        console.print(f"Search steps taken: {self._num_step_calls}.")
        console.print(f"Nodes expanded: {self._nodes_expanded}.")
