"""Define a class to represent plans, i.e., sequences of ground actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from symbolic_planning.ground.actions import Action


@dataclass(frozen=True)
class Plan:
    """An ordered sequence of ground actions."""

    actions: tuple[Action, ...] = ()

    def __len__(self) -> int:
        """Retrieve the number of actions in the plan."""
        return len(self.actions)

    def __iter__(self) -> Iterator[Action]:
        """Iterate over the plan's actions in order."""
        return iter(self.actions)

    def __str__(self) -> str:
        """Return one action name per line, numbered from 1."""
        return "\n".join(f"{i}: {action}" for i, action in enumerate(self.actions, start=1))

    @property
    def cost(self) -> int:
        """Compute the total cost of the plan's actions."""
        return sum(action.cost for action in self.actions)

    @property
    def action_names(self) -> list[str]:
        """Retrieve the name of each action in the plan."""
        return [action.name for action in self.actions]

    def without_step(self, step: int) -> Plan:
        """Create a copy of the plan with the given (1-based) step removed."""
        if not 1 <= step <= len(self.actions):
            raise IndexError(f"Plan of length {len(self.actions)} has no step {step}.")
        return Plan(self.actions[: step - 1] + self.actions[step:])
