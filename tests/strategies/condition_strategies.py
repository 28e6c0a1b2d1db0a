"""Define strategies for generating lifted conditions for property-based testing."""

from __future__ import annotations

import hypothesis.strategies as st

from symbolic_planning.lifted import (
    AbstractCondition,
    Argument,
    AtomicCondition,
    ConditionSet,
    ConstantPool,
    Implication,
    Negation,
    Predicate,
    Quantification,
    Quantifier,
)

CONSTANTS = tuple(Argument.constant(name) for name in ("a", "b", "c"))
POOL = ConstantPool(CONSTANTS)

V = Argument.variable("?v")
"""Variable bound by the generated quantifications."""

PREDICATES = (
    Predicate("flag"),
    Predicate("p", (Argument.variable("?x"),)),
    Predicate("q", (Argument.variable("?x"), Argument.variable("?y"))),
)


@st.composite
def literals(draw: st.DrawFn, terms: tuple[Argument, ...] = CONSTANTS) -> AtomicCondition:
    """Generate random (possibly negated) literals over the given terms."""
    predicate = draw(st.sampled_from(PREDICATES))
    arguments = tuple(draw(st.sampled_from(terms)) for _ in range(predicate.arity))
    return AtomicCondition(predicate, arguments, negated=draw(st.booleans()))


def conditions(
    terms: tuple[Argument, ...] = CONSTANTS,
) -> st.SearchStrategy[AbstractCondition]:
    """Generate random condition trees of literals, condition sets, negations, and implications."""
    return st.recursive(
        literals(terms),
        lambda children: st.one_of(
            st.lists(children, max_size=3).map(lambda cs: ConditionSet.conjunction(*cs)),
            st.lists(children, max_size=3).map(lambda cs: ConditionSet.disjunction(*cs)),
            children.map(Negation),
            st.tuples(children, children).map(lambda pair: Implication(*pair)),
        ),
        max_leaves=8,
    )


@st.composite
def quantified_conditions(draw: st.DrawFn) -> AbstractCondition:
    """Generate random conditions containing quantifications over the variable `?v`."""
    quantifier = draw(st.sampled_from(list(Quantifier)))
    inner = draw(conditions(CONSTANTS + (V,)))
    quantification = Quantification(quantifier, (V,), inner)

    context = draw(conditions())
    return draw(
        st.sampled_from(
            [
                quantification,
                ConditionSet.conjunction(context, quantification),
                ConditionSet.disjunction(quantification, context),
                Negation(quantification),
            ],
        ),
    )


@st.composite
def facts(draw: st.DrawFn) -> frozenset[AtomicCondition]:
    """Generate random closed-world states as sets of positive ground atoms."""
    atoms = draw(st.lists(literals(), max_size=8))
    return frozenset(atom.without_negation() for atom in atoms)
