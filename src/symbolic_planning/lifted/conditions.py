"""Define the recursive data types representing lifted logical conditions and effects.

Every condition is an immutable (frozen) dataclass, so equality and hashing are structural.
The variants form a closed union, `AbstractCondition`; the rewriting functions in
`symbolic_planning.lifted.rewriting` match exhaustively over it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Union

from symbolic_planning.errors import RepresentationError
from symbolic_planning.lifted.arguments import Argument
from symbolic_planning.lifted.symbols import EQUALITY, Function, Predicate


class Connective(StrEnum):
    """Enumeration of the connectives joining the members of a condition set."""

    CONJUNCTION = "and"
    DISJUNCTION = "or"

    @property
    def dual(self) -> Connective:
        """Retrieve the connective swapped in by De Morgan's laws."""
        return Connective.DISJUNCTION if self is Connective.CONJUNCTION else Connective.CONJUNCTION


class Quantifier(StrEnum):
    """Enumeration of first-order quantifiers."""

    UNIVERSAL = "forall"
    EXISTENTIAL = "exists"

    @property
    def dual(self) -> Quantifier:
        """Retrieve the quantifier swapped in when the quantification is negated."""
        return Quantifier.EXISTENTIAL if self is Quantifier.UNIVERSAL else Quantifier.UNIVERSAL

    @property
    def connective(self) -> Connective:
        """Retrieve the connective that replaces the quantifier over a finite domain."""
        return Connective.CONJUNCTION if self is Quantifier.UNIVERSAL else Connective.DISJUNCTION


class NumericEffectKind(StrEnum):
    """Enumeration of the ways an effect can update a numeric fluent."""

    INCREASE = "increase"
    DECREASE = "decrease"
    ASSIGN = "assign"
    SCALE_UP = "scale-up"
    SCALE_DOWN = "scale-down"


class NumericExpressionKind(StrEnum):
    """Enumeration of the kinds of numeric terms."""

    CONSTANT = "constant"
    FUNCTION = "function"
    ARITHMETIC = "arithmetic"


class ArithmeticOperator(StrEnum):
    """Enumeration of the arithmetic operators allowed in numeric terms."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class Comparator(StrEnum):
    """Enumeration of the comparators allowed in numeric conditions."""

    LESS = "<"
    LESS_EQUAL = "<="
    EQUAL = "="
    GREATER_EQUAL = ">="
    GREATER = ">"


_NEGATED_COMPARATOR = {
    Comparator.LESS: Comparator.GREATER_EQUAL,
    Comparator.LESS_EQUAL: Comparator.GREATER,
    Comparator.GREATER_EQUAL: Comparator.LESS,
    Comparator.GREATER: Comparator.LESS_EQUAL,
}


def _arguments_str(arguments: tuple[Argument, ...]) -> str:
    return " ".join(arg.name for arg in arguments)


@dataclass(frozen=True)
class AtomicCondition:
    """A (possibly negated) predicate applied to an ordered list of arguments."""

    predicate: Predicate
    arguments: tuple[Argument, ...] = ()
    negated: bool = False

    def __post_init__(self) -> None:
        """Verify that the number of arguments matches the predicate's arity."""
        if len(self.arguments) != self.predicate.arity:
            raise RepresentationError(
                f"Predicate '{self.predicate.name}' expects {self.predicate.arity} arguments "
                f"but was given {len(self.arguments)}: {_arguments_str(self.arguments)}.",
            )

    def __str__(self) -> str:
        """Return a compact human-readable representation of the literal."""
        args = ", ".join(arg.name for arg in self.arguments)
        return f"{'¬' if self.negated else ''}{self.predicate.name}({args})"

    @property
    def is_ground(self) -> bool:
        """Check whether all arguments of the literal are constants."""
        return all(arg.is_constant for arg in self.arguments)

    @property
    def signature(self) -> tuple[str, tuple[str, ...]]:
        """Retrieve the predicate and argument names of the atom, ignoring negation and types."""
        return self.predicate.name, tuple(arg.name for arg in self.arguments)

    @property
    def is_equality(self) -> bool:
        """Check whether the literal uses the built-in equality predicate."""
        return self.predicate == EQUALITY

    def negate(self) -> AtomicCondition:
        """Return the literal with its negation flag flipped."""
        return replace(self, negated=not self.negated)

    def without_negation(self) -> AtomicCondition:
        """Return the positive literal over the same atom."""
        return replace(self, negated=False) if self.negated else self

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the literal."""
        args = _arguments_str(self.arguments)
        atom = f"({self.predicate.name}{' ' if args else ''}{args})"
        return f"(not {atom})" if self.negated else atom


@dataclass(frozen=True)
class ConditionSet:
    """An ordered conjunction or disjunction of sub-conditions.

    The empty conjunction is true and the empty disjunction is false.
    """

    connective: Connective
    conditions: tuple[AbstractCondition, ...] = ()

    def __str__(self) -> str:
        """Return a compact human-readable representation of the condition set."""
        if not self.conditions:
            return "⊤" if self.is_conjunction else "⊥"
        symbol = " ∧ " if self.is_conjunction else " ∨ "
        return f"[{symbol.join(str(c) for c in self.conditions)}]"

    @classmethod
    def conjunction(cls, *conditions: AbstractCondition) -> ConditionSet:
        """Construct the conjunction of the given conditions."""
        return cls(Connective.CONJUNCTION, conditions)

    @classmethod
    def disjunction(cls, *conditions: AbstractCondition) -> ConditionSet:
        """Construct the disjunction of the given conditions."""
        return cls(Connective.DISJUNCTION, conditions)

    @property
    def is_conjunction(self) -> bool:
        """Check whether the members of the set are conjoined."""
        return self.connective is Connective.CONJUNCTION

    @property
    def is_disjunction(self) -> bool:
        """Check whether the members of the set are disjoined."""
        return self.connective is Connective.DISJUNCTION

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the condition set."""
        members = " ".join(c.to_pddl() for c in self.conditions)
        return f"({self.connective.value}{' ' if members else ''}{members})"


TRUE = ConditionSet(Connective.CONJUNCTION)
"""The empty conjunction, which always holds."""

FALSE = ConditionSet(Connective.DISJUNCTION)
"""The empty disjunction, which never holds."""


@dataclass(frozen=True)
class Negation:
    """The negation of an arbitrary condition; `simplify` pushes it down to the literals."""

    condition: AbstractCondition

    def __str__(self) -> str:
        """Return a compact human-readable representation of the negation."""
        return f"¬{self.condition}"

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the negation."""
        return f"(not {self.condition.to_pddl()})"


@dataclass(frozen=True)
class Implication:
    """A material implication; `simplify` rewrites it as a disjunction."""

    premise: AbstractCondition
    conclusion: AbstractCondition

    def __str__(self) -> str:
        """Return a compact human-readable representation of the implication."""
        return f"({self.premise} → {self.conclusion})"

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the implication."""
        return f"(imply {self.premise.to_pddl()} {self.conclusion.to_pddl()})"


@dataclass(frozen=True)
class Quantification:
    """A universal or existential quantification binding variables in an inner condition."""

    quantifier: Quantifier
    variables: tuple[Argument, ...]
    condition: AbstractCondition

    def __post_init__(self) -> None:
        """Verify that the quantification binds only variables."""
        constants = [v.name for v in self.variables if v.is_constant]
        if constants:
            raise RepresentationError(f"Cannot quantify over constants: {', '.join(constants)}.")

    def __str__(self) -> str:
        """Return a compact human-readable representation of the quantification."""
        symbol = "∀" if self.quantifier is Quantifier.UNIVERSAL else "∃"
        return f"{symbol}{','.join(v.name for v in self.variables)}.{self.condition}"

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the quantification."""
        variables = " ".join(v.to_pddl() for v in self.variables)
        return f"({self.quantifier.value} ({variables}) {self.condition.to_pddl()})"


@dataclass(frozen=True)
class ConditionalEffect:
    """A conditional effect: if the prerequisite holds in the pre-state, the consequence applies."""

    prerequisite: AbstractCondition
    consequence: AbstractCondition

    def __str__(self) -> str:
        """Return a compact human-readable representation of the conditional effect."""
        return f"({self.prerequisite} ▷ {self.consequence})"

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the conditional effect."""
        return f"(when {self.prerequisite.to_pddl()} {self.consequence.to_pddl()})"


@dataclass(frozen=True)
class NumericExpression:
    """A numeric term: a constant, a function application, or an arithmetic combination."""

    kind: NumericExpressionKind
    value: float | None = None
    """Value of a constant term (None for other kinds)."""

    function: Function | None = None
    arguments: tuple[Argument, ...] = ()
    """Function and arguments of a function-application term."""

    operator: ArithmeticOperator | None = None
    operands: tuple[NumericExpression, ...] = ()
    """Operator and operands of an arithmetic term."""

    def __str__(self) -> str:
        """Return a compact human-readable representation of the numeric term."""
        return self.to_pddl()

    @classmethod
    def constant(cls, value: float) -> NumericExpression:
        """Construct a constant numeric term."""
        return cls(NumericExpressionKind.CONSTANT, value=value)

    @classmethod
    def application(cls, function: Function, *arguments: Argument) -> NumericExpression:
        """Construct a term applying a numeric function to arguments."""
        if len(arguments) != function.arity:
            raise RepresentationError(
                f"Function '{function.name}' expects {function.arity} arguments "
                f"but was given {len(arguments)}.",
            )
        return cls(NumericExpressionKind.FUNCTION, function=function, arguments=arguments)

    @classmethod
    def arithmetic(
        cls,
        operator: ArithmeticOperator,
        *operands: NumericExpression,
    ) -> NumericExpression:
        """Construct a term combining other terms with an arithmetic operator."""
        return cls(NumericExpressionKind.ARITHMETIC, operator=operator, operands=operands)

    @property
    def is_constant(self) -> bool:
        """Check whether the term is a constant value."""
        return self.kind is NumericExpressionKind.CONSTANT

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the numeric term."""
        if self.kind is NumericExpressionKind.CONSTANT:
            return f"{self.value:g}"
        if self.kind is NumericExpressionKind.FUNCTION and self.function is not None:
            args = _arguments_str(self.arguments)
            return f"({self.function.name}{' ' if args else ''}{args})"
        operands = " ".join(o.to_pddl() for o in self.operands)
        return f"({self.operator} {operands})"


@dataclass(frozen=True)
class NumericEffect:
    """An effect updating a numeric fluent by the value of an expression."""

    kind: NumericEffectKind
    function: Function
    arguments: tuple[Argument, ...]
    expression: NumericExpression

    def __str__(self) -> str:
        """Return a compact human-readable representation of the numeric effect."""
        return self.to_pddl()

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the numeric effect."""
        args = _arguments_str(self.arguments)
        fluent = f"({self.function.name}{' ' if args else ''}{args})"
        return f"({self.kind.value} {fluent} {self.expression.to_pddl()})"


@dataclass(frozen=True)
class NumericComparison:
    """A numeric condition comparing the values of two numeric terms."""

    comparator: Comparator
    left: NumericExpression
    right: NumericExpression

    def __str__(self) -> str:
        """Return a compact human-readable representation of the comparison."""
        return self.to_pddl()

    def negated(self) -> AbstractCondition:
        """Return a condition that holds exactly when this comparison does not."""
        if self.comparator is Comparator.EQUAL:
            return ConditionSet.disjunction(
                replace(self, comparator=Comparator.LESS),
                replace(self, comparator=Comparator.GREATER),
            )
        return replace(self, comparator=_NEGATED_COMPARATOR[self.comparator])

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the comparison."""
        return f"({self.comparator.value} {self.left.to_pddl()} {self.right.to_pddl()})"


AbstractCondition = Union[
    AtomicCondition,
    ConditionSet,
    Negation,
    Implication,
    Quantification,
    ConditionalEffect,
    NumericEffect,
    NumericExpression,
    NumericComparison,
]
"""Any node of a lifted condition or effect tree."""
