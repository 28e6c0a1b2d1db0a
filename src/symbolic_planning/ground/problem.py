"""Define a class to represent a ground planning problem (a state-transition system)."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Iterator

from symbolic_planning.errors import RepresentationError
from symbolic_planning.ground.actions import Action, GroundAxiom
from symbolic_planning.ground.atoms import AtomTable
from symbolic_planning.ground.conditions import GroundCondition
from symbolic_planning.ground.state import State


@dataclass(frozen=True)
class GroundPlanningProblem:
    """A fully instantiated planning problem over a fixed numbering of ground atoms."""

    atoms: AtomTable
    initial_state: State
    """Initial state, already closed under the derived-predicate rules."""

    goal: GroundCondition
    actions: tuple[Action, ...]
    axioms: tuple[GroundAxiom, ...] = ()
    """Rules deriving the derived atoms from the other atoms."""

    def __str__(self) -> str:
        """Return a short summary of the problem's size."""
        return (
            f"GroundPlanningProblem({len(self.atoms)} atoms, {len(self.actions)} actions, "
            f"{len(self.axioms)} axioms)"
        )

    @cached_property
    def derived_atoms(self) -> frozenset[int]:
        """Retrieve the identifiers of all derived atoms."""
        return frozenset(axiom.head for axiom in self.axioms)

    @cached_property
    def axiom_strata(self) -> tuple[tuple[GroundAxiom, ...], ...]:
        """Partition the axioms into strata, which are evaluated in order by `close()`.

        An axiom's stratum is at least that of every derived atom its body requires, and
        strictly greater than that of every derived atom its body negates. Hence a negated
        derived atom is final before any rule reading it is evaluated.

        :return: Non-empty strata of axioms, lowest first
        :raises RepresentationError: If a derived atom depends on its own negation
        """
        derived = self.derived_atoms
        level = dict.fromkeys(derived, 0)

        changed = True
        while changed:
            changed = False
            for axiom in self.axioms:
                for literal in axiom.body.literals():
                    if literal.atom not in derived:
                        continue
                    required = level[literal.atom] + int(literal.negated)
                    if required <= level[axiom.head]:
                        continue
                    if required >= len(derived):
                        raise RepresentationError(
                            f"Derived atom {self.atoms[axiom.head]} depends on the negation of "
                            f"{self.atoms[literal.atom]} within a cycle; the rules aren't "
                            "stratifiable.",
                        )
                    level[axiom.head] = required
                    changed = True

        strata: dict[int, list[GroundAxiom]] = {}
        for axiom in self.axioms:
            strata.setdefault(level[axiom.head], []).append(axiom)
        return tuple(tuple(strata[i]) for i in sorted(strata))

    def close(self, state: State) -> State:
        """Recompute the derived atoms of a state by applying the axioms until a fixpoint.

        Derived atoms in the given state are discarded first. Each stratum of axioms is then
        applied to its own fixpoint before the next stratum is considered.

        :param state: State whose basic (non-derived) atoms are taken as given
        :return: State containing the basic atoms and every derivable atom
        :raises RepresentationError: If the axioms can't be stratified
        """
        if not self.axioms:
            return state

        closed = State(state.atoms - self.derived_atoms)
        for stratum in self.axiom_strata:
            changed = True
            while changed:
                derived = {
                    axiom.head
                    for axiom in stratum
                    if axiom.head not in closed and axiom.body.holds_in(closed)
                }
                changed = bool(derived)
                closed = State(closed.atoms | derived)
        return closed

    def is_goal(self, state: State) -> bool:
        """Evaluate whether the goal condition holds in the given state."""
        return self.goal.holds_in(state)

    def applicable_actions(self, state: State) -> Iterator[Action]:
        """Iterate over all actions applicable in the given state."""
        return (action for action in self.actions if action.is_applicable(state))

    def successor(self, state: State, action: Action) -> State:
        """Apply an action to a state and close the result under the axioms."""
        return self.close(action.apply(state))

    def describe(self, state: State) -> str:
        """Render a state as a sorted list of its true atoms."""
        return "{" + ", ".join(self.atoms.describe(state.atoms)) + "}"
