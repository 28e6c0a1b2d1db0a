"""Define a class to represent a complete lifted planning problem."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from symbolic_planning.lifted.arguments import Argument, ConstantPool, TypeHierarchy
from symbolic_planning.lifted.conditions import (
    AbstractCondition,
    AtomicCondition,
    ConditionSet,
    NumericExpression,
)
from symbolic_planning.lifted.operators import Axiom, Operator
from symbolic_planning.lifted.symbols import Function, Predicate


@dataclass(frozen=True)
class PlanningProblem:
    """A lifted planning problem: a domain together with a particular problem instance.

    Instances are never modified; each transformation returns a new problem (see
    `dataclasses.replace`), so pipeline stages can be composed freely.
    """

    name: str
    domain_name: str
    types: TypeHierarchy = field(default_factory=TypeHierarchy)
    constants: tuple[Argument, ...] = ()
    """Typed objects of the problem, including the domain's constants."""

    predicates: dict[str, Predicate] = field(default_factory=dict)
    functions: dict[str, Function] = field(default_factory=dict)
    operators: tuple[Operator, ...] = ()
    axioms: tuple[Axiom, ...] = ()

    initial_state: frozenset[AtomicCondition] = frozenset()
    """Ground atoms true in the initial state; every other atom is initially false."""

    initial_function_values: dict[NumericExpression, float] = field(default_factory=dict)
    """Initial value of each ground function application (e.g., `(total-cost)` -> 0)."""

    goals: tuple[AbstractCondition, ...] = ()
    """Goal conditions, which are implicitly conjoined."""

    requirements: tuple[str, ...] = ()
    minimize_total_cost: bool = False
    """True if the problem's metric is `(minimize (total-cost))`."""

    @cached_property
    def constant_pool(self) -> ConstantPool:
        """Retrieve the problem's constants organized by type."""
        return ConstantPool(self.constants, self.types)

    @property
    def goal(self) -> AbstractCondition:
        """Retrieve the conjunction of all goal conditions."""
        if len(self.goals) == 1:
            return self.goals[0]
        return ConditionSet.conjunction(*self.goals)

    def get_operator(self, name: str) -> Operator:
        """Retrieve the named operator of the problem.

        :raises KeyError: If the problem has no operator with the given name
        """
        for operator in self.operators:
            if operator.name == name:
                return operator
        raise KeyError(f"Unknown operator: '{name}'.")
