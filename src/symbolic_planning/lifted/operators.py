"""Define classes to represent lifted planning operators and derived-predicate axioms."""

from __future__ import annotations

from dataclasses import dataclass

from symbolic_planning.lifted.arguments import Argument
from symbolic_planning.lifted.conditions import TRUE, AbstractCondition, AtomicCondition
from symbolic_planning.lifted.symbols import Predicate


@dataclass(frozen=True)
class Operator:
    """A lifted action schema defining a parameterized symbolic transition.

    Equivalent to a PDDL `:action` definition.
    """

    name: str
    parameters: tuple[Argument, ...] = ()
    precondition: AbstractCondition = TRUE
    """Condition that must hold in a state for the operator to be applicable."""

    effect: AbstractCondition = TRUE
    """Literals, conditional effects, and numeric effects produced by applying the operator."""

    cost: int = 0
    """Cost of applying any instance of the operator (compiled from `total-cost` effects)."""

    def __str__(self) -> str:
        """Return a human-readable string representation of the operator."""
        return f"{self.name}({', '.join(p.name for p in self.parameters)})"

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the operator."""
        parameters = " ".join(p.to_pddl() for p in self.parameters)
        return "\n".join(
            [
                f"(:action {self.name}",
                f"    :parameters ({parameters})",
                f"    :precondition {self.precondition.to_pddl()}",
                f"    :effect {self.effect.to_pddl()})",
            ],
        )


@dataclass(frozen=True)
class Axiom:
    """A rule defining when a derived predicate holds. Equivalent to a PDDL `:derived` rule."""

    predicate: Predicate
    parameters: tuple[Argument, ...]
    """Variables appearing as the arguments of the derived atom."""

    condition: AbstractCondition
    """Body of the rule; the derived atom holds whenever the body holds."""

    @property
    def head(self) -> AtomicCondition:
        """Retrieve the (lifted) derived atom defined by the axiom."""
        return AtomicCondition(self.predicate, self.parameters)

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the axiom."""
        return f"(:derived {self.head.to_pddl()} {self.condition.to_pddl()})"
