"""Unit tests for ground atoms, states, actions, plans, and ground planning problems."""

import pytest

from symbolic_planning.errors import RepresentationError
from symbolic_planning.ground import (
    Action,
    AtomTable,
    GroundAtom,
    GroundAxiom,
    GroundCondition,
    GroundConditionalEffect,
    GroundPlanningProblem,
    Plan,
    State,
)


@pytest.fixture
def table() -> AtomTable:
    """Return an atom table numbering the atoms `at(a)`, `at(b)`, and `holding()`."""
    return AtomTable([GroundAtom("at", ("a",)), GroundAtom("at", ("b",)), GroundAtom("holding")])


def test_atom_table_ids_are_stable(table: AtomTable) -> None:
    """Verify that registering an existing atom returns its original identifier."""
    # Act - Register a known atom and a new atom
    known_id = table.register(GroundAtom("at", ("b",)))
    new_id = table.register(GroundAtom("at", ("c",)))

    # Assert - Expect the known atom to keep its id and the new atom to be appended
    assert known_id == 1
    assert new_id == 3
    assert table[new_id] == GroundAtom("at", ("c",))
    assert table.id_of(GroundAtom("at", ("d",))) is None


def test_state_transition_adds_after_deleting() -> None:
    """Verify that atoms both added and deleted by a transition end up true."""
    # Arrange - Create a state in which atoms 0 and 1 are true
    state = State(frozenset({0, 1}))

    # Act - Delete atoms 0 and 1 while adding atoms 1 and 2
    successor = state.transition(add={1, 2}, delete={0, 1})

    # Assert - Expect that atoms 1 and 2 are true, and the original state is unchanged
    assert successor == State(frozenset({1, 2}))
    assert state == State(frozenset({0, 1}))


def test_action_evaluates_conditional_effects_in_the_pre_state() -> None:
    """Verify that conditional effects are triggered by the state before the action applies."""
    # Arrange - Create an action deleting atom 0 that adds atom 2 whenever atom 0 was true
    action = Action(
        name="pick(a)",
        operator="pick",
        arguments=("a",),
        precondition=GroundCondition(positive=frozenset({0})),
        delete=frozenset({0}),
        conditional_effects=(
            GroundConditionalEffect(GroundCondition(positive=frozenset({0})), add=frozenset({2})),
        ),
    )

    # Act - Apply the action in a state where atom 0 is true
    successor = action.apply(State(frozenset({0})))

    # Assert - Expect the conditional effect to have fired
    assert successor == State(frozenset({2}))


def test_action_apply_rejects_inapplicable_states() -> None:
    """Verify that applying an action whose precondition doesn't hold raises an error."""
    # Arrange - Create an action requiring atom 1 to be false
    action = Action("drop()", "drop", (), GroundCondition(negative=frozenset({1})))

    # Act/Assert - Expect a ValueError when atom 1 is true
    with pytest.raises(ValueError):
        action.apply(State(frozenset({1})))


def test_close_derives_atoms_to_a_fixpoint(table: AtomTable) -> None:
    """Verify that closing a state applies chained axioms and drops stale derived atoms."""
    # Arrange - Derive at(b) from holding() and at(c) from at(b)
    at_c = table.register(GroundAtom("at", ("c",)))
    axioms = (
        GroundAxiom(head=1, body=GroundCondition(positive=frozenset({2}))),
        GroundAxiom(head=at_c, body=GroundCondition(positive=frozenset({1}))),
    )
    problem = GroundPlanningProblem(table, State(), GroundCondition(), (), axioms)

    # Act - Close a state with holding() and a state with only a stale derived atom
    closed = problem.close(State(frozenset({2})))
    stale = problem.close(State(frozenset({at_c})))

    # Assert - Expect both derived atoms in the first state and none in the second
    assert closed == State(frozenset({1, 2, at_c}))
    assert stale == State()


def test_close_evaluates_negated_derived_atoms_after_deriving_them() -> None:
    """Verify that a rule negating a derived atom is evaluated once that atom is final."""
    # Arrange - Derive blocked() from locked() and free() from not blocked()
    table = AtomTable([GroundAtom("locked"), GroundAtom("blocked"), GroundAtom("free")])
    locked, blocked, free = 0, 1, 2
    axioms = (
        GroundAxiom(head=free, body=GroundCondition(negative=frozenset({blocked}))),
        GroundAxiom(head=blocked, body=GroundCondition(positive=frozenset({locked}))),
    )
    problem = GroundPlanningProblem(
        table,
        State(),
        GroundCondition(positive=frozenset({free})),
        (),
        axioms,
    )

    # Act - Close a state with locked() and a state without it
    with_lock = problem.close(State(frozenset({locked})))
    without_lock = problem.close(State())

    # Assert - Expect free() to be derived only when nothing is blocked
    assert problem.axiom_strata == ((axioms[1],), (axioms[0],))
    assert with_lock == State(frozenset({locked, blocked}))
    assert not problem.is_goal(with_lock)
    assert without_lock == State(frozenset({free}))


def test_close_rejects_cycles_through_negation() -> None:
    """Verify that derived atoms defined through their own negation are reported."""
    # Arrange - Derive on() from not off() and off() from not on()
    table = AtomTable([GroundAtom("on"), GroundAtom("off")])
    axioms = (
        GroundAxiom(head=0, body=GroundCondition(negative=frozenset({1}))),
        GroundAxiom(head=1, body=GroundCondition(negative=frozenset({0}))),
    )
    problem = GroundPlanningProblem(table, State(), GroundCondition(), (), axioms)

    # Act/Assert - Expect a representation error when closing any state
    with pytest.raises(RepresentationError, match="stratifiable"):
        problem.close(State())


def test_plan_without_step() -> None:
    """Verify that removing a step keeps the remaining actions in order."""
    # Arrange - Create a plan with three actions costing 1, 2, and 3
    actions = tuple(
        Action(f"act{i}()", f"act{i}", (), GroundCondition(), cost=i) for i in (1, 2, 3)
    )
    plan = Plan(actions)

    # Act - Remove the second step
    shorter = plan.without_step(2)

    # Assert - Expect the first and third actions to remain
    assert plan.cost == 6
    assert shorter.action_names == ["act1()", "act3()"]
    assert str(shorter) == "1: act1()\n2: act3()"
    with pytest.raises(IndexError):
        plan.without_step(4)
