"""Define classes to represent predicate and numeric function symbols."""

from __future__ import annotations

from dataclasses import dataclass, field

from symbolic_planning.lifted.arguments import ROOT_TYPE, Argument


@dataclass(frozen=True)
class Predicate:
    """A symbol representing a typed relation between objects.

    Predicates are shared by reference across every condition that uses them.
    """

    name: str
    parameters: tuple[Argument, ...] = ()
    """Typed variables specifying the expected argument types of the predicate."""

    derived: bool = field(default=False, compare=False)
    """True if the predicate is defined by an axiom rather than changed by operators."""

    def __str__(self) -> str:
        """Return a human-readable string representation of the predicate."""
        params = ", ".join(f"{p.name}: {p.type_}" for p in self.parameters)
        return f"{self.name}({params})"

    @property
    def arity(self) -> int:
        """Retrieve the number of arguments expected by the predicate."""
        return len(self.parameters)

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the predicate."""
        typed_variables = " ".join(p.to_pddl() for p in self.parameters)
        return f"({self.name}{' ' + typed_variables if typed_variables else ''})"


EQUALITY = Predicate(
    "=",
    (Argument.variable("?left", ROOT_TYPE), Argument.variable("?right", ROOT_TYPE)),
)
"""The built-in equality predicate (PDDL requirement `:equality`)."""


@dataclass(frozen=True)
class Function:
    """A symbol representing a numeric fluent over typed objects."""

    name: str
    parameters: tuple[Argument, ...] = ()

    def __str__(self) -> str:
        """Return a human-readable string representation of the function."""
        params = ", ".join(f"{p.name}: {p.type_}" for p in self.parameters)
        return f"{self.name}({params})"

    @property
    def arity(self) -> int:
        """Retrieve the number of arguments expected by the function."""
        return len(self.parameters)

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the function."""
        typed_variables = " ".join(p.to_pddl() for p in self.parameters)
        return f"({self.name}{' ' + typed_variables if typed_variables else ''})"


TOTAL_COST = "total-cost"
"""Name of the numeric fluent that the preprocessor compiles into per-operator costs."""
