"""Define classes to represent ground conditions over numbered atoms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from symbolic_planning.ground.atoms import AtomTable
from symbolic_planning.ground.state import State
from symbolic_planning.lifted.conditions import Connective


@dataclass(frozen=True)
class GroundLiteral:
    """A ground atom (by identifier) or its negation."""

    atom: int
    negated: bool = False

    def holds_in(self, state: State) -> bool:
        """Evaluate whether the literal holds in the given state."""
        return (self.atom in state) != self.negated

    def describe(self, table: AtomTable) -> str:
        """Render the literal using the names of its atom."""
        return f"{'¬' if self.negated else ''}{table[self.atom]}"


@dataclass(frozen=True)
class GroundJunction:
    """A conjunction or disjunction of ground formulas."""

    connective: Connective
    members: tuple[GroundFormula, ...] = ()

    def holds_in(self, state: State) -> bool:
        """Evaluate whether the junction holds in the given state."""
        if self.connective is Connective.CONJUNCTION:
            return all(m.holds_in(state) for m in self.members)
        return any(m.holds_in(state) for m in self.members)

    def describe(self, table: AtomTable) -> str:
        """Render the junction using the names of its atoms."""
        if not self.members:
            return "⊤" if self.connective is Connective.CONJUNCTION else "⊥"
        symbol = " ∧ " if self.connective is Connective.CONJUNCTION else " ∨ "
        return f"[{symbol.join(m.describe(table) for m in self.members)}]"


GroundFormula = Union[GroundLiteral, GroundJunction]

UNSATISFIABLE = GroundJunction(Connective.DISJUNCTION)
"""The empty disjunction, which holds in no state."""


@dataclass(frozen=True)
class GroundCondition:
    """A ground condition: atoms that must be true, atoms that must be false, and a residual.

    After full preprocessing, conditions are conjunctions of literals and the residual is None.
    The residual holds any disjunctive structure kept by the preprocessor.
    """

    positive: frozenset[int] = frozenset()
    """Atoms that must be true for the condition to hold."""

    negative: frozenset[int] = frozenset()
    """Atoms that must be false for the condition to hold."""

    residual: GroundFormula | None = None
    """Remaining formula conjoined with the literals (None if there is none)."""

    @property
    def is_unsatisfiable(self) -> bool:
        """Check whether the condition can be seen not to hold in any state."""
        return bool(self.positive & self.negative) or self.residual == UNSATISFIABLE

    @property
    def is_trivial(self) -> bool:
        """Check whether the condition holds in every state."""
        return not self.positive and not self.negative and self.residual is None

    def holds_in(self, state: State) -> bool:
        """Evaluate whether the condition holds in the given state."""
        return (
            self.positive <= state.atoms
            and self.negative.isdisjoint(state.atoms)
            and (self.residual is None or self.residual.holds_in(state))
        )

    def literals(self) -> Iterator[GroundLiteral]:
        """Iterate over every literal of the condition, including those within its residual."""
        yield from (GroundLiteral(a) for a in sorted(self.positive))
        yield from (GroundLiteral(a, negated=True) for a in sorted(self.negative))

        pending: list[GroundFormula] = [] if self.residual is None else [self.residual]
        while pending:
            formula = pending.pop()
            if isinstance(formula, GroundLiteral):
                yield formula
            else:
                pending.extend(formula.members)

    def describe(self, table: AtomTable) -> str:
        """Render the condition using the names of its atoms."""
        literals = [GroundLiteral(a) for a in sorted(self.positive)]
        literals += [GroundLiteral(a, negated=True) for a in sorted(self.negative)]
        parts = [lit.describe(table) for lit in literals]
        if self.residual is not None:
            parts.append(self.residual.describe(table))
        return " ∧ ".join(parts) if parts else "⊤"
