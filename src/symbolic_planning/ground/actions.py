"""Define classes to represent ground actions and ground derived-predicate rules."""

from __future__ import annotations

from dataclasses import dataclass

from symbolic_planning.ground.conditions import GroundCondition
from symbolic_planning.ground.state import State


@dataclass(frozen=True)
class GroundConditionalEffect:
    """Atoms added and deleted by an action if a condition holds in the pre-state."""

    condition: GroundCondition
    add: frozenset[int] = frozenset()
    delete: frozenset[int] = frozenset()


@dataclass(frozen=True)
class Action:
    """A ground operator instance applied to specific objects."""

    name: str
    """Name of the action, formatted as `operator(arg1,arg2,...)`."""

    operator: str
    arguments: tuple[str, ...]
    precondition: GroundCondition
    add: frozenset[int] = frozenset()
    """Atoms made true by the action."""

    delete: frozenset[int] = frozenset()
    """Atoms made false by the action (add effects take priority)."""

    conditional_effects: tuple[GroundConditionalEffect, ...] = ()
    cost: int = 0

    def __str__(self) -> str:
        """Return the name of the action."""
        return self.name

    def is_applicable(self, state: State) -> bool:
        """Evaluate whether the action is applicable in the given state."""
        return self.precondition.holds_in(state)

    def apply(self, state: State) -> State:
        """Apply the action to transition from the given state into a new state.

        Conditional effects are evaluated against the given (pre-)state.

        :param state: State in which the action is applied (left unmodified)
        :return: Successor state
        :raises ValueError: If the action isn't applicable in the given state
        """
        if not self.is_applicable(state):
            raise ValueError(f"Cannot apply {self} in the state: {sorted(state.atoms)}")

        add = set(self.add)
        delete = set(self.delete)
        for effect in self.conditional_effects:
            if effect.condition.holds_in(state):
                add |= effect.add
                delete |= effect.delete

        return state.transition(add, delete)


@dataclass(frozen=True)
class GroundAxiom:
    """A ground rule making a derived atom true whenever its body holds."""

    head: int
    body: GroundCondition
