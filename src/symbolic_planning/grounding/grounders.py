"""Define strategies that instantiate simplified lifted problems into ground problems.

Both strategies share the same instantiation step and differ only in which ground atoms and
operator bindings they consider:

- `NaiveGrounder` enumerates every type-consistent atom and binding.
- `RelaxedPlanningGraphGrounder` keeps only the bindings reachable when delete effects and
  negative preconditions are ignored (the delete relaxation), which over-approximates the
  bindings reachable in the true state space.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Container, Iterable, Iterator, Mapping, Sequence

from symbolic_planning.errors import RepresentationError, UnsupportedConditionError
from symbolic_planning.ground.actions import Action, GroundAxiom, GroundConditionalEffect
from symbolic_planning.ground.atoms import AtomTable, GroundAtom
from symbolic_planning.ground.conditions import (
    GroundCondition,
    GroundFormula,
    GroundJunction,
    GroundLiteral,
)
from symbolic_planning.ground.problem import GroundPlanningProblem
from symbolic_planning.ground.state import State
from symbolic_planning.grounding.argument_combinations import ArgumentCombinations
from symbolic_planning.io.configuration import GroundingStrategy
from symbolic_planning.io.logging import log_debug, log_warning
from symbolic_planning.lifted.arguments import Argument, ConstantPool
from symbolic_planning.lifted.conditions import (
    FALSE,
    TRUE,
    AbstractCondition,
    AtomicCondition,
    ConditionalEffect,
    ConditionSet,
    Connective,
    NumericComparison,
    NumericEffect,
)
from symbolic_planning.lifted.operators import Axiom, Operator
from symbolic_planning.lifted.planning_problem import PlanningProblem
from symbolic_planning.lifted.rewriting import (
    bind,
    free_variables,
    simplify,
    subconditions,
    traverse,
)
from symbolic_planning.lifted.symbols import EQUALITY

OperatorBinding = tuple[Operator, tuple[Argument, ...]]
AxiomBinding = tuple[Axiom, tuple[Argument, ...]]


@dataclass
class GroundingCandidates:
    """Ground atoms and bindings selected by a grounding strategy for instantiation."""

    atoms: list[GroundAtom] = field(default_factory=list)
    operator_bindings: list[OperatorBinding] = field(default_factory=list)
    axiom_bindings: list[AxiomBinding] = field(default_factory=list)


class Grounder(ABC):
    """Abstract base class for strategies that ground lifted planning problems."""

    strategy: GroundingStrategy

    def ground(self, problem: PlanningProblem) -> GroundPlanningProblem:
        """Ground a simplified lifted planning problem.

        :param problem: Lifted problem without quantifications (see `Preprocessor`)
        :return: Ground planning problem over a fixed numbering of the surviving atoms
        :raises RepresentationError: If an operator, axiom, or goal has unbound variables
        :raises UnsupportedConditionError: If a precondition or goal compares numeric values
        """
        _verify_bound_variables(problem)

        initial_atoms = sorted(
            (GroundAtom.from_condition(a) for a in problem.initial_state if not a.negated),
            key=lambda atom: (atom.predicate, atom.arguments),
        )
        candidates = self.select_candidates(problem, initial_atoms)

        table = AtomTable(initial_atoms)
        for atom in candidates.atoms:
            table.register(atom)

        actions: list[Action] = []
        dropped_numeric_effects = 0
        for operator, values in candidates.operator_bindings:
            precondition = compile_condition(
                bind(operator.precondition, operator.parameters, values),
                table,
            )
            if precondition.is_unsatisfiable:
                continue

            effect = bind(operator.effect, operator.parameters, values)
            add, delete, conditional_effects, dropped = compile_effect(effect, table)
            dropped_numeric_effects += dropped

            arguments = tuple(v.name for v in values)
            actions.append(
                Action(
                    name=f"{operator.name}({','.join(arguments)})",
                    operator=operator.name,
                    arguments=arguments,
                    precondition=precondition,
                    add=add,
                    delete=delete,
                    conditional_effects=conditional_effects,
                    cost=operator.cost,
                ),
            )

        if dropped_numeric_effects:
            log_warning(
                f"Ignored {dropped_numeric_effects} numeric effects while grounding; only "
                "constant action costs are supported.",
            )

        axioms: list[GroundAxiom] = []
        for axiom, values in candidates.axiom_bindings:
            body = compile_condition(bind(axiom.condition, axiom.parameters, values), table)
            if not body.is_unsatisfiable:
                head = _atom(axiom.predicate.name, values)
                axioms.append(GroundAxiom(table.register(head), body))

        goal = compile_condition(problem.goal, table)
        initial_state = State(frozenset(table.register(atom) for atom in initial_atoms))

        ground_problem = GroundPlanningProblem(
            atoms=table,
            initial_state=initial_state,
            goal=goal,
            actions=tuple(actions),
            axioms=tuple(axioms),
        )
        log_debug(f"Grounded ({self.strategy}): {ground_problem}")
        return replace(ground_problem, initial_state=ground_problem.close(initial_state))

    @abstractmethod
    def select_candidates(
        self,
        problem: PlanningProblem,
        initial_atoms: list[GroundAtom],
    ) -> GroundingCandidates:
        """Select the ground atoms and the operator and axiom bindings to be instantiated.

        :param problem: Simplified lifted planning problem
        :param initial_atoms: Atoms true in the initial state
        :return: Atoms to be numbered and bindings to be instantiated
        """


class NaiveGrounder(Grounder):
    """Grounds every type-consistent atom and every type-consistent operator binding."""

    strategy = GroundingStrategy.NAIVE

    def select_candidates(
        self,
        problem: PlanningProblem,
        initial_atoms: list[GroundAtom],
    ) -> GroundingCandidates:
        """Select all type-consistent atoms and bindings, regardless of reachability."""
        pool = problem.constant_pool
        candidates = GroundingCandidates()

        for predicate in problem.predicates.values():
            if predicate.name == EQUALITY.name:
                continue
            for values in ArgumentCombinations(predicate.parameters, pool):
                candidates.atoms.append(_atom(predicate.name, values))

        for operator in problem.operators:
            for values in ArgumentCombinations(operator.parameters, pool):
                candidates.operator_bindings.append((operator, values))

        for axiom in problem.axioms:
            for values in ArgumentCombinations(axiom.parameters, pool):
                candidates.axiom_bindings.append((axiom, values))

        return candidates


class RelaxedPlanningGraphGrounder(Grounder):
    """Grounds only the bindings reachable in the delete-relaxed planning graph."""

    strategy = GroundingStrategy.RELAXED_GRAPH

    def select_candidates(
        self,
        problem: PlanningProblem,
        initial_atoms: list[GroundAtom],
    ) -> GroundingCandidates:
        """Compute the fixpoint of the delete-relaxed planning graph.

        Starting from the initial atoms, each layer instantiates every new binding whose
        precondition holds when negative literals are ignored, then adds the positive effects
        of those bindings (including all conditional add effects) and the heads of satisfied
        derived-predicate rules. The graph stops growing once a layer adds no new atom.

        Bindings are generated by joining the positive atoms of each condition with the
        reached atoms, starting from an atom reached in the previous layer, so each layer only
        revisits bindings that the previous layer may have enabled.
        """
        pool = problem.constant_pool
        operator_triggers = [
            RelaxedTriggers(op.parameters, op.precondition, pool) for op in problem.operators
        ]
        axiom_triggers = [
            RelaxedTriggers(ax.parameters, ax.condition, pool) for ax in problem.axioms
        ]

        reached: dict[GroundAtom, None] = {}
        reached_by_predicate: dict[str, list[GroundAtom]] = defaultdict(list)
        operator_bindings: dict[tuple[int, tuple[Argument, ...]], OperatorBinding] = {}
        axiom_bindings: dict[tuple[int, tuple[Argument, ...]], AxiomBinding] = {}

        layers = 0
        new_atoms = list(dict.fromkeys(initial_atoms))
        while new_atoms:
            layers += 1
            new_by_predicate: dict[str, list[GroundAtom]] = defaultdict(list)
            for atom in new_atoms:
                reached[atom] = None
                reached_by_predicate[atom.predicate].append(atom)
                new_by_predicate[atom.predicate].append(atom)

            effects: list[GroundAtom] = []
            for i, operator in enumerate(problem.operators):
                triggers = operator_triggers[i]
                for values in triggers.bindings(reached_by_predicate, new_by_predicate, layers):
                    if (i, values) in operator_bindings:
                        continue
                    precondition = bind(operator.precondition, operator.parameters, values)
                    if not relaxed_holds(precondition, reached):
                        continue

                    operator_bindings[(i, values)] = (operator, values)
                    effect = bind(operator.effect, operator.parameters, values)
                    effects.extend(positive_effects(effect))

            for i, axiom in enumerate(problem.axioms):
                triggers = axiom_triggers[i]
                for values in triggers.bindings(reached_by_predicate, new_by_predicate, layers):
                    if (i, values) in axiom_bindings:
                        continue
                    if not relaxed_holds(bind(axiom.condition, axiom.parameters, values), reached):
                        continue

                    axiom_bindings[(i, values)] = (axiom, values)
                    effects.append(_atom(axiom.predicate.name, values))

            new_atoms = [atom for atom in dict.fromkeys(effects) if atom not in reached]

        log_debug(
            f"Relaxed planning graph reached its fixpoint after {layers} layers with "
            f"{len(reached)} atoms and {len(operator_bindings)} operator bindings.",
        )

        rank = {constant.name: position for position, constant in enumerate(pool)}

        def enumeration_order(key: tuple[int, tuple[Argument, ...]]) -> tuple[int, ...]:
            index, values = key
            return (index, *(rank[v.name] for v in values))

        return GroundingCandidates(
            atoms=list(reached),
            operator_bindings=[
                operator_bindings[k] for k in sorted(operator_bindings, key=enumeration_order)
            ],
            axiom_bindings=[
                axiom_bindings[k] for k in sorted(axiom_bindings, key=enumeration_order)
            ],
        )


class RelaxedTriggers:
    """The positive atoms whose joint reachability can make a lifted condition hold.

    Under the delete relaxation, a simplified condition holds for a binding exactly when all
    positive atoms of one of its disjuncts are reached (negative literals are ignored, and
    equalities never change). A binding can thus only start to hold in the layer in which the
    last of these atoms was reached.
    """

    def __init__(
        self,
        parameters: tuple[Argument, ...],
        condition: AbstractCondition,
        pool: ConstantPool,
    ) -> None:
        """Collect the triggering atoms of a condition over the given parameters.

        :param parameters: Parameters of the operator or axiom owning the condition
        :param condition: Simplified condition whose variables are all parameters
        :param pool: Constants over which the parameters range
        """
        self.parameters = parameters
        self.pool = pool
        self.alternatives = _positive_atoms_per_disjunct(condition)

        combinations = ArgumentCombinations(parameters, pool)
        self.domains = {
            p.name: {c.name: c for c in domain}
            for p, domain in zip(parameters, combinations.domains)
        }

    def bindings(
        self,
        reached: Mapping[str, Sequence[GroundAtom]],
        new: Mapping[str, Sequence[GroundAtom]],
        layer: int,
    ) -> Iterator[tuple[Argument, ...]]:
        """Generate the bindings that the atoms reached in the previous layer may have enabled.

        A binding may be generated more than once. Conditions whose positive atoms are nested
        within disjunctions can't be joined, so all of their bindings are generated in every
        layer. Disjuncts without positive atoms are enumerated only in the first layer.

        :param reached: All reached atoms (including the new ones), indexed by predicate name
        :param new: Atoms reached in the previous layer, indexed by predicate name
        :param layer: Index of the current layer, starting from 1
        :return: Iterator over bindings (tuples of constants in parameter order)
        """
        if self.alternatives is None:
            yield from ArgumentCombinations(self.parameters, self.pool)
            return

        for atoms in self.alternatives:
            if not atoms:
                if layer == 1:
                    yield from ArgumentCombinations(self.parameters, self.pool)
                continue

            for i, trigger in enumerate(atoms):
                others = atoms[:i] + atoms[i + 1 :]
                for atom in new.get(trigger.predicate.name, ()):
                    binding = self._match(trigger, atom, {})
                    if binding is not None:
                        yield from self._join(others, binding, reached)

    def _join(
        self,
        atoms: tuple[AtomicCondition, ...],
        binding: dict[str, Argument],
        reached: Mapping[str, Sequence[GroundAtom]],
    ) -> Iterator[tuple[Argument, ...]]:
        """Extend a partial binding until every given atom matches a reached atom."""
        if atoms:
            first, rest = atoms[0], atoms[1:]
            for atom in reached.get(first.predicate.name, ()):
                extended = self._match(first, atom, binding)
                if extended is not None:
                    yield from self._join(rest, extended, reached)
            return

        unbound = tuple(p for p in self.parameters if p.name not in binding)
        for values in ArgumentCombinations(unbound, self.pool):
            complete = binding | {p.name: v for p, v in zip(unbound, values)}
            yield tuple(complete[p.name] for p in self.parameters)

    def _match(
        self,
        pattern: AtomicCondition,
        atom: GroundAtom,
        binding: dict[str, Argument],
    ) -> dict[str, Argument] | None:
        """Extend a binding so that the pattern becomes the atom, or return None if impossible."""
        extended = dict(binding)
        for argument, name in zip(pattern.arguments, atom.arguments):
            if argument.is_constant:
                if argument.name != name:
                    return None
            elif argument.name in extended:
                if extended[argument.name].name != name:
                    return None
            elif (constant := self.domains[argument.name].get(name)) is not None:
                extended[argument.name] = constant
            else:
                return None
        return extended


def _is_positive_atom(condition: AbstractCondition) -> bool:
    return (
        isinstance(condition, AtomicCondition)
        and not condition.negated
        and not condition.is_equality
    )


def _positive_atoms_per_disjunct(
    condition: AbstractCondition,
) -> tuple[tuple[AtomicCondition, ...], ...] | None:
    """Collect the top-level positive atoms of each disjunct of a simplified condition.

    :return: Positive atoms of each disjunct, or None if some positive atom is nested deeper
    """
    if isinstance(condition, ConditionSet) and condition.is_disjunction:
        disjuncts = condition.conditions
    else:
        disjuncts = (condition,)

    alternatives: list[tuple[AtomicCondition, ...]] = []
    for disjunct in disjuncts:
        if isinstance(disjunct, ConditionSet) and disjunct.is_conjunction:
            members = disjunct.conditions
        else:
            members = (disjunct,)

        nested = (
            node
            for member in members
            if not isinstance(member, AtomicCondition)
            for node in subconditions(member)
        )
        if any(_is_positive_atom(node) for node in nested):
            return None
        alternatives.append(
            tuple(m for m in members if isinstance(m, AtomicCondition) and _is_positive_atom(m)),
        )

    return tuple(alternatives)


def _atom(predicate_name: str, values: tuple[Argument, ...]) -> GroundAtom:
    return GroundAtom(predicate_name, tuple(v.name for v in values))


def make_grounder(strategy: GroundingStrategy) -> Grounder:
    """Construct the grounder implementing the given strategy."""
    match strategy:
        case GroundingStrategy.NAIVE:
            return NaiveGrounder()
        case GroundingStrategy.RELAXED_GRAPH:
            return RelaxedPlanningGraphGrounder()
    raise ValueError(f"Unknown grounding strategy: {strategy}")


def _verify_bound_variables(problem: PlanningProblem) -> None:
    """Verify that every variable in the problem is bound by a parameter or quantifier.

    :raises RepresentationError: If some condition contains a dangling variable
    """
    scopes: list[tuple[str, Iterable[AbstractCondition], tuple[Argument, ...]]] = [
        (f"operator '{op.name}'", (op.precondition, op.effect), op.parameters)
        for op in problem.operators
    ]
    scopes += [
        (f"axiom for '{ax.predicate.name}'", (ax.condition,), ax.parameters)
        for ax in problem.axioms
    ]
    scopes.append(("the goal", problem.goals, ()))

    for description, conditions, parameters in scopes:
        bound = {p.name for p in parameters}
        for condition in conditions:
            dangling = free_variables(condition) - bound
            if dangling:
                raise RepresentationError(
                    f"Unbound variables {sorted(dangling)} in {description}: {condition}",
                )


def relaxed_holds(condition: AbstractCondition, reached: Container[GroundAtom]) -> bool:
    """Evaluate a ground condition in negation normal form under the delete relaxation.

    Negative literals are treated as satisfied (except for equality, which is static and thus
    evaluated exactly) and positive literals hold if their atom has been reached.

    :param condition: Simplified condition without variables
    :param reached: Atoms reached so far (supporting fast membership tests)
    :return: True if the condition holds in the relaxation, otherwise False
    """
    match condition:
        case AtomicCondition() if condition.is_equality:
            left, right = condition.arguments
            return (left.name == right.name) != condition.negated
        case AtomicCondition():
            return condition.negated or GroundAtom.from_condition(condition) in reached
        case ConditionSet() if condition.is_conjunction:
            return all(relaxed_holds(c, reached) for c in condition.conditions)
        case ConditionSet():
            return any(relaxed_holds(c, reached) for c in condition.conditions)
        case NumericComparison():
            raise UnsupportedConditionError(f"Cannot ground numeric condition {condition}.")
    raise RepresentationError(f"Expected a simplified condition, found: {condition}")


def positive_effects(effect: AbstractCondition) -> Iterator[GroundAtom]:
    """Iterate over the atoms added by a ground effect, including conditional additions."""
    match effect:
        case AtomicCondition() if not effect.negated:
            yield GroundAtom.from_condition(effect)
        case ConditionSet():
            for member in effect.conditions:
                yield from positive_effects(member)
        case ConditionalEffect():
            yield from positive_effects(effect.consequence)


def _resolve_static_literals(condition: AbstractCondition, table: AtomTable) -> AbstractCondition:
    """Replace equalities and literals over never-true atoms by their truth values."""

    def resolve(node: AbstractCondition) -> AbstractCondition:
        if not isinstance(node, AtomicCondition):
            return node
        if node.is_equality:
            left, right = node.arguments
            return TRUE if (left.name == right.name) != node.negated else FALSE
        if GroundAtom.from_condition(node) not in table:
            return TRUE if node.negated else FALSE
        return node

    return simplify(traverse(condition, resolve))


def _to_formula(condition: AbstractCondition, table: AtomTable) -> GroundFormula:
    match condition:
        case AtomicCondition():
            atom_id = table.register(GroundAtom.from_condition(condition))
            return GroundLiteral(atom_id, condition.negated)
        case ConditionSet():
            members = tuple(_to_formula(c, table) for c in condition.conditions)
            return GroundJunction(condition.connective, members)
        case NumericComparison():
            raise UnsupportedConditionError(f"Cannot ground numeric condition {condition}.")
    raise RepresentationError(f"Expected a simplified condition, found: {condition}")


def compile_condition(condition: AbstractCondition, table: AtomTable) -> GroundCondition:
    """Translate a simplified condition without variables into a ground condition.

    Top-level literals become the positive and negative atom sets; any other conjuncts form
    the residual formula.

    :param condition: Condition in negation normal form whose arguments are all constants
    :param table: Numbering of the atoms that can ever be true
    :return: Equivalent ground condition (unsatisfiable if the condition is statically false)
    """
    resolved = _resolve_static_literals(condition, table)
    if isinstance(resolved, ConditionSet) and resolved.is_conjunction:
        members = resolved.conditions
    else:
        members = (resolved,)

    positive: set[int] = set()
    negative: set[int] = set()
    residual: list[GroundFormula] = []
    for member in members:
        if isinstance(member, AtomicCondition):
            atom_id = table.register(GroundAtom.from_condition(member))
            (negative if member.negated else positive).add(atom_id)
        else:
            residual.append(_to_formula(member, table))

    formula: GroundFormula | None = None
    if len(residual) == 1:
        formula = residual[0]
    elif residual:
        formula = GroundJunction(Connective.CONJUNCTION, tuple(residual))

    return GroundCondition(frozenset(positive), frozenset(negative), formula)


def compile_effect(
    effect: AbstractCondition,
    table: AtomTable,
) -> tuple[frozenset[int], frozenset[int], tuple[GroundConditionalEffect, ...], int]:
    """Translate a simplified effect without variables into ground add and delete sets.

    Deletions of atoms that can never be true are omitted, and conditional effects with a
    statically false prerequisite are dropped.

    :param effect: Conjunction of literals, conditional effects, and numeric effects
    :param table: Numbering of the atoms that can ever be true
    :return: Tuple of (add atoms, delete atoms, conditional effects, # ignored numeric effects)
    :raises RepresentationError: If the effect has an unsupported structure
    """
    add: set[int] = set()
    delete: set[int] = set()
    conditional_effects: list[GroundConditionalEffect] = []
    dropped = 0

    pending: list[AbstractCondition] = [effect]
    while pending:
        node = pending.pop(0)
        match node:
            case ConditionSet() if node.is_conjunction:
                pending.extend(node.conditions)
            case AtomicCondition() if not node.is_equality:
                atom = GroundAtom.from_condition(node)
                if not node.negated:
                    add.add(table.register(atom))
                elif (atom_id := table.id_of(atom)) is not None:
                    delete.add(atom_id)
            case ConditionalEffect():
                condition = compile_condition(node.prerequisite, table)
                if condition.is_unsatisfiable:
                    continue
                c_add, c_delete, nested, c_dropped = compile_effect(node.consequence, table)
                if nested:
                    raise RepresentationError(f"Nested conditional effects are unsupported: {node}")
                dropped += c_dropped
                if condition.is_trivial:
                    add |= c_add
                    delete |= c_delete
                else:
                    conditional_effects.append(GroundConditionalEffect(condition, c_add, c_delete))
            case NumericEffect():
                dropped += 1
            case _:
                raise RepresentationError(f"Cannot ground the effect: {node}")

    return frozenset(add), frozenset(delete), tuple(conditional_effects), dropped
