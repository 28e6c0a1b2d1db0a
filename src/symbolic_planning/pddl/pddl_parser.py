"""Implement a parser for the Planning Domain Definition Language (PDDL).

The parser builds lifted planning problems from PDDL domain and problem definitions. It covers
the ADL subset with derived predicates and numeric functions (used for action costs).

Reference: PDDL - The Planning Domain Definition Language (Version 1.2) (Ghallab et al., 1998)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from symbolic_planning.errors import PDDLSyntaxError, RepresentationError
from symbolic_planning.lifted.arguments import ROOT_TYPE, Argument, TypeHierarchy
from symbolic_planning.lifted.conditions import (
    TRUE,
    AbstractCondition,
    ArithmeticOperator,
    AtomicCondition,
    Comparator,
    ConditionalEffect,
    ConditionSet,
    Connective,
    Implication,
    Negation,
    NumericComparison,
    NumericEffect,
    NumericEffectKind,
    NumericExpression,
    Quantification,
    Quantifier,
)
from symbolic_planning.lifted.operators import Axiom, Operator
from symbolic_planning.lifted.planning_problem import PlanningProblem
from symbolic_planning.lifted.symbols import EQUALITY, TOTAL_COST, Function, Predicate
from symbolic_planning.pddl.pddl_scanner import PDDLScanner, PDDLToken, PDDLTokenType

Scope = dict[str, str]
"""Map from the names of the variables in scope to their types."""


@dataclass(frozen=True)
class TypedTokens:
    """A list of parsed PDDL tokens corresponding to typed PDDL entities."""

    tokens: list[PDDLToken]
    pddl_types: list[str]

    def __post_init__(self) -> None:
        """Verify that there are an equal number of tokens and PDDL types."""
        if len(self.tokens) != len(self.pddl_types):
            raise PDDLSyntaxError(
                f"Found {len(self.tokens)} tokens but {len(self.pddl_types)} PDDL types.",
            )

    def pairs(self) -> list[tuple[str, str]]:
        """Retrieve each token's value paired with its PDDL type."""
        return [(t.value, pddl_type) for t, pddl_type in zip(self.tokens, self.pddl_types)]


@dataclass
class PDDLDomain:
    """A PDDL domain definition: the part of a planning problem shared across instances."""

    name: str
    requirements: set[str] = field(default_factory=set)
    types: TypeHierarchy = field(default_factory=TypeHierarchy)
    constants: dict[str, Argument] = field(default_factory=dict)
    predicates: dict[str, Predicate] = field(default_factory=dict)
    functions: dict[str, Function] = field(default_factory=dict)
    operators: list[Operator] = field(default_factory=list)
    axioms: list[Axiom] = field(default_factory=list)


_NUMERIC_EFFECTS = {kind.value: kind for kind in NumericEffectKind}
_COMPARATORS = {comparator.value: comparator for comparator in Comparator}
_ARITHMETIC = {operator.value: operator for operator in ArithmeticOperator}


class PDDLParser:
    """A recursive-descent parser for a subset of the Planning Domain Definition Language."""

    def __init__(self, string: str) -> None:
        """Initialize the PDDL parser for the given string."""
        self.scanner = PDDLScanner()
        self.remaining_tokens = self.scanner.tokenize(string)
        self.input_token: PDDLToken = next(self.remaining_tokens)
        """Once the input token type is `PDDLTokenType.END`, all tokens have been consumed."""

        self.types = TypeHierarchy()
        self.constants: dict[str, Argument] = {}
        self.predicates: dict[str, Predicate] = {EQUALITY.name: EQUALITY}
        self.functions: dict[str, Function] = {}

    def error(self, message: str) -> PDDLSyntaxError:
        """Create a syntax error located at the current input token."""
        token = self.input_token
        return PDDLSyntaxError(f"{message} (line {token.line}, column {token.column})")

    def lookahead_is(self, token_type: PDDLTokenType, value: str | None = None) -> bool:
        """Check whether the input token has the given type (and value, if given)."""
        if self.input_token.type_ != token_type:
            return False
        return value is None or self.input_token.value == value

    def match(self, token_type: PDDLTokenType, value: str | None = None) -> PDDLToken:
        """Consume a token of the given type from the scanner.

        :param token_type: Expected type of the next PDDL token
        :param value: Expected string value of the next token (optional; defaults to None)
        :return: PDDL token consumed from the scanner
        :raises PDDLSyntaxError: If the next token doesn't have the expected type or value
        """
        if self.input_token.type_ == PDDLTokenType.END:
            raise self.error(f"Expected {value or token_type.name} but the input ended")

        if value is not None and value != self.input_token.value:
            raise self.error(f"Expected '{value}' as next token but found {self.input_token}")

        if self.input_token.type_ != token_type:
            raise self.error(f"Expected a {token_type.name} token but found {self.input_token}")

        matched_token = self.input_token
        self.input_token = next(self.remaining_tokens, self.input_token)
        return matched_token

    def typed_list(self, token_type: PDDLTokenType) -> TypedTokens:
        """Parse a PDDL-typed list of the given token type.

        This method does not match a following closing parenthesis, if present.

        :param token_type: Type of PDDL token (e.g., `VARIABLE`) being assigned PDDL types
        :return: Collection of parsed tokens and their corresponding PDDL types
        """
        tokens: list[PDDLToken] = []
        types: list[str] = []
        tokens_awaiting_types = 0

        while self.input_token.type_ not in {PDDLTokenType.CLOSE_PAREN, PDDLTokenType.END}:
            if self.input_token.type_ == token_type:
                tokens.append(self.match(token_type))
                tokens_awaiting_types += 1
                continue

            if self.input_token.type_ == PDDLTokenType.MINUS:  # Match "-" and the following type
                if not tokens_awaiting_types:
                    raise self.error("Unexpected minus in a typed list")

                self.match(PDDLTokenType.MINUS)
                parent_type = self.match(PDDLTokenType.NAME).value
                types.extend([parent_type] * tokens_awaiting_types)
                tokens_awaiting_types = 0
                continue

            raise self.error(f"Unexpected token in a typed list: {self.input_token}")

        types.extend([ROOT_TYPE] * tokens_awaiting_types)  # Default parent type in PDDL
        return TypedTokens(tokens, types)

    def typed_variables(self) -> tuple[Argument, ...]:
        """Parse a parenthesized typed list of variables."""
        self.match(PDDLTokenType.OPEN_PAREN)
        variables = self.typed_list(PDDLTokenType.VARIABLE)
        self.match(PDDLTokenType.CLOSE_PAREN)
        return tuple(Argument.variable(name, type_) for name, type_ in variables.pairs())

    def skeleton(self) -> tuple[str, tuple[Argument, ...]]:
        """Parse a PDDL atomic formula skeleton, e.g. `(at ?x - physob ?l - location)`."""
        self.match(PDDLTokenType.OPEN_PAREN)
        name = self.match(PDDLTokenType.NAME).value
        variables = self.typed_list(PDDLTokenType.VARIABLE)
        self.match(PDDLTokenType.CLOSE_PAREN)
        return name, tuple(Argument.variable(v, type_) for v, type_ in variables.pairs())

    def term(self, scope: Scope) -> Argument:
        """Parse a term (a variable in scope or the name of an object)."""
        if self.lookahead_is(PDDLTokenType.VARIABLE):
            token = self.match(PDDLTokenType.VARIABLE)
            if token.value not in scope:
                raise PDDLSyntaxError(f"Unbound variable {token}")
            return Argument.variable(token.value, scope[token.value])

        name = self.match(PDDLTokenType.NAME).value
        constant = self.constants.get(name)
        return constant if constant is not None else Argument.constant(name)

    def terms(self, scope: Scope) -> tuple[Argument, ...]:
        """Parse terms until the next closing parenthesis (which isn't matched)."""
        terms: list[Argument] = []
        while not self.lookahead_is(PDDLTokenType.CLOSE_PAREN):
            terms.append(self.term(scope))
        return tuple(terms)

    def atomic_formula(self, scope: Scope, name_token: PDDLToken) -> AtomicCondition:
        """Parse the terms and closing parenthesis of an atomic formula after its name."""
        predicate = self.predicates.get(name_token.value)
        if predicate is None:
            raise PDDLSyntaxError(f"Unknown predicate {name_token}")

        arguments = self.terms(scope)
        self.match(PDDLTokenType.CLOSE_PAREN)
        try:
            return AtomicCondition(predicate, arguments)
        except RepresentationError as error:
            raise PDDLSyntaxError(f"{error} ({name_token})") from error

    def goal_description(self, scope: Scope) -> AbstractCondition:
        """Parse a PDDL goal description from the input stream of tokens.

        Reference: Section 6 (pg. 8-9) of Ghallab et al., 1998.

        :param scope: Variables in scope and their types
        :return: Parsed lifted condition
        """
        self.match(PDDLTokenType.OPEN_PAREN)

        if self.lookahead_is(PDDLTokenType.CLOSE_PAREN):  # Empty goal description
            self.match(PDDLTokenType.CLOSE_PAREN)
            return TRUE

        if self.lookahead_is(PDDLTokenType.OPERATOR):
            return self.comparison(scope)

        lookahead = self.match(PDDLTokenType.NAME)
        match lookahead.value:
            case "and" | "or":
                connective = Connective(lookahead.value)
                members: list[AbstractCondition] = []
                while self.lookahead_is(PDDLTokenType.OPEN_PAREN):
                    members.append(self.goal_description(scope))
                self.match(PDDLTokenType.CLOSE_PAREN)
                return ConditionSet(connective, tuple(members))

            case "not":
                nested = self.goal_description(scope)
                self.match(PDDLTokenType.CLOSE_PAREN)
                if isinstance(nested, AtomicCondition):
                    return nested.negate()
                return Negation(nested)

            case "imply":  # For the :disjunctive-preconditions requirement flag
                premise = self.goal_description(scope)
                conclusion = self.goal_description(scope)
                self.match(PDDLTokenType.CLOSE_PAREN)
                return Implication(premise, conclusion)

            case "exists" | "forall":  # For the :quantified-preconditions requirement flag
                quantifier = Quantifier(lookahead.value)
                variables = self.typed_variables()
                inner_scope = scope | {v.name: v.type_ for v in variables}
                inner = self.goal_description(inner_scope)
                self.match(PDDLTokenType.CLOSE_PAREN)
                return Quantification(quantifier, variables, inner)

        # Otherwise, the goal description is an atomic formula
        return self.atomic_formula(scope, lookahead)

    def comparison(self, scope: Scope) -> AbstractCondition:
        """Parse an equality atom or a numeric comparison after its open parenthesis."""
        operator = self.match(PDDLTokenType.OPERATOR)
        if operator.value == "=" and self.input_token.type_ in {
            PDDLTokenType.NAME,
            PDDLTokenType.VARIABLE,
        }:
            left = self.term(scope)
            right = self.term(scope)
            self.match(PDDLTokenType.CLOSE_PAREN)
            return AtomicCondition(EQUALITY, (left, right))

        comparator = _COMPARATORS.get(operator.value)
        if comparator is None:
            raise PDDLSyntaxError(f"Expected a comparator but found {operator}")

        left_exp = self.numeric_expression(scope)
        right_exp = self.numeric_expression(scope)
        self.match(PDDLTokenType.CLOSE_PAREN)
        return NumericComparison(comparator, left_exp, right_exp)

    def function_head(self, scope: Scope) -> tuple[Function, tuple[Argument, ...]]:
        """Parse a function head, e.g. `(road-length ?from ?to)`, after its open parenthesis."""
        name_token = self.match(PDDLTokenType.NAME)
        function = self.functions.get(name_token.value)
        if function is None:
            raise PDDLSyntaxError(f"Unknown function {name_token}")

        arguments = self.terms(scope)
        self.match(PDDLTokenType.CLOSE_PAREN)
        if len(arguments) != function.arity:
            raise PDDLSyntaxError(
                f"Function '{function.name}' expects {function.arity} arguments ({name_token})",
            )
        return function, arguments

    def function_application(self, scope: Scope) -> NumericExpression:
        """Parse a function application term after its open parenthesis."""
        function, arguments = self.function_head(scope)
        return NumericExpression.application(function, *arguments)

    def numeric_expression(self, scope: Scope) -> NumericExpression:
        """Parse a numeric expression (a number, function application, or arithmetic term)."""
        if self.lookahead_is(PDDLTokenType.NUMBER):
            return NumericExpression.constant(float(self.match(PDDLTokenType.NUMBER).value))

        if self.lookahead_is(PDDLTokenType.NAME):  # Function without parentheses
            name_token = self.match(PDDLTokenType.NAME)
            function = self.functions.get(name_token.value)
            if function is None or function.arity:
                raise PDDLSyntaxError(f"Expected a numeric expression but found {name_token}")
            return NumericExpression.application(function)

        self.match(PDDLTokenType.OPEN_PAREN)
        if self.lookahead_is(PDDLTokenType.NAME):
            return self.function_application(scope)

        if self.lookahead_is(PDDLTokenType.MINUS):
            operator = ArithmeticOperator.SUBTRACT
            self.match(PDDLTokenType.MINUS)
        else:
            operator_token = self.match(PDDLTokenType.OPERATOR)
            if operator_token.value not in _ARITHMETIC:
                raise PDDLSyntaxError(f"Expected an arithmetic operator but found {operator_token}")
            operator = _ARITHMETIC[operator_token.value]

        operands: list[NumericExpression] = []
        while not self.lookahead_is(PDDLTokenType.CLOSE_PAREN):
            operands.append(self.numeric_expression(scope))
        self.match(PDDLTokenType.CLOSE_PAREN)

        if operator is ArithmeticOperator.SUBTRACT and len(operands) == 1:  # Unary negation
            operands.insert(0, NumericExpression.constant(0.0))
        return NumericExpression.arithmetic(operator, *operands)

    def effect(self, scope: Scope) -> AbstractCondition:
        """Parse PDDL action effects from the input stream of tokens.

        :param scope: Variables in scope and their types
        :return: Parsed lifted effect
        """
        self.match(PDDLTokenType.OPEN_PAREN)

        if self.lookahead_is(PDDLTokenType.CLOSE_PAREN):  # Empty effect
            self.match(PDDLTokenType.CLOSE_PAREN)
            return TRUE

        lookahead = self.match(PDDLTokenType.NAME)
        match lookahead.value:
            case "and":
                members: list[AbstractCondition] = []
                while self.lookahead_is(PDDLTokenType.OPEN_PAREN):
                    members.append(self.effect(scope))
                self.match(PDDLTokenType.CLOSE_PAREN)
                return ConditionSet.conjunction(*members)

            case "not":
                self.match(PDDLTokenType.OPEN_PAREN)
                formula = self.atomic_formula(scope, self.match(PDDLTokenType.NAME))
                self.match(PDDLTokenType.CLOSE_PAREN)  # Close the negation
                return formula.negate()

            case "forall":  # For the :conditional-effects requirement flag
                variables = self.typed_variables()
                inner_scope = scope | {v.name: v.type_ for v in variables}
                quantified_effect = self.effect(inner_scope)
                self.match(PDDLTokenType.CLOSE_PAREN)
                return Quantification(Quantifier.UNIVERSAL, variables, quantified_effect)

            case "when":  # For the :conditional-effects requirement flag
                prerequisite = self.goal_description(scope)
                consequence = self.effect(scope)
                self.match(PDDLTokenType.CLOSE_PAREN)
                return ConditionalEffect(prerequisite, consequence)

            case kind if kind in _NUMERIC_EFFECTS:
                self.match(PDDLTokenType.OPEN_PAREN)
                function, arguments = self.function_head(scope)
                expression = self.numeric_expression(scope)
                self.match(PDDLTokenType.CLOSE_PAREN)
                return NumericEffect(_NUMERIC_EFFECTS[kind], function, arguments, expression)

        return self.atomic_formula(scope, lookahead)

    def action(self) -> Operator:
        """Parse a PDDL action definition (after its open parenthesis)."""
        self.match(PDDLTokenType.KEYWORD, value=":action")
        name = self.match(PDDLTokenType.NAME).value

        parameters: tuple[Argument, ...] = ()
        if self.lookahead_is(PDDLTokenType.KEYWORD, ":parameters"):
            self.match(PDDLTokenType.KEYWORD, value=":parameters")
            parameters = self.typed_variables()
        scope = {p.name: p.type_ for p in parameters}

        precondition: AbstractCondition = TRUE
        effect: AbstractCondition = TRUE
        while self.lookahead_is(PDDLTokenType.KEYWORD):
            keyword = self.match(PDDLTokenType.KEYWORD)
            match keyword.value:
                case ":precondition":
                    precondition = self.goal_description(scope)
                case ":effect":
                    effect = self.effect(scope)
                case _:
                    raise PDDLSyntaxError(f"Unexpected keyword in action '{name}': {keyword}")

        self.match(PDDLTokenType.CLOSE_PAREN)
        return Operator(name, parameters, precondition, effect)

    def derived(self) -> Axiom:
        """Parse a PDDL derived-predicate rule (after its open parenthesis)."""
        self.match(PDDLTokenType.KEYWORD, value=":derived")
        name, parameters = self.skeleton()

        predicate = Predicate(name, parameters, derived=True)
        self.predicates[name] = predicate

        condition = self.goal_description({p.name: p.type_ for p in parameters})
        self.match(PDDLTokenType.CLOSE_PAREN)
        return Axiom(predicate, parameters, condition)

    def require_def(self) -> set[str]:
        """Parse PDDL requirements (after their open parenthesis).

        :return: Set of parsed PDDL requirement keys
        """
        self.match(PDDLTokenType.KEYWORD, value=":requirements")

        requirements = set()
        while self.lookahead_is(PDDLTokenType.KEYWORD):
            requirements.add(self.match(PDDLTokenType.KEYWORD).value)
        self.match(PDDLTokenType.CLOSE_PAREN)
        return requirements

    def typed_names(self, keyword: str) -> dict[str, Argument]:
        """Parse a keyword followed by a typed list of object names (e.g., `:objects`)."""
        self.match(PDDLTokenType.KEYWORD, value=keyword)
        names = self.typed_list(PDDLTokenType.NAME)
        self.match(PDDLTokenType.CLOSE_PAREN)

        objects = {name: Argument.constant(name, type_) for name, type_ in names.pairs()}
        self.constants.update(objects)
        return objects

    def domain(self) -> PDDLDomain:
        """Parse a PDDL domain from the stream of input tokens."""
        self.match(PDDLTokenType.OPEN_PAREN)
        self.match(PDDLTokenType.NAME, value="define")
        self.match(PDDLTokenType.OPEN_PAREN)
        self.match(PDDLTokenType.NAME, value="domain")
        domain = PDDLDomain(self.match(PDDLTokenType.NAME).value, types=self.types)
        self.match(PDDLTokenType.CLOSE_PAREN)

        # Permit :requirements, :types, :constants, :predicates, etc. in any order
        while self.lookahead_is(PDDLTokenType.OPEN_PAREN):
            self.match(PDDLTokenType.OPEN_PAREN)
            if not self.lookahead_is(PDDLTokenType.KEYWORD):
                raise self.error(f"Expected a keyword token, but found {self.input_token}")

            match self.input_token.value:
                case ":requirements":
                    domain.requirements = self.require_def()

                case ":types":
                    self.match(PDDLTokenType.KEYWORD, value=":types")
                    for type_name, parent in self.typed_list(PDDLTokenType.NAME).pairs():
                        self.types.add_type(type_name, parent)
                    self.match(PDDLTokenType.CLOSE_PAREN)

                case ":constants":
                    domain.constants.update(self.typed_names(":constants"))

                case ":predicates":
                    self.match(PDDLTokenType.KEYWORD, value=":predicates")
                    while not self.lookahead_is(PDDLTokenType.CLOSE_PAREN):
                        name, parameters = self.skeleton()
                        self.predicates[name] = Predicate(name, parameters)
                    self.match(PDDLTokenType.CLOSE_PAREN)

                case ":functions":
                    self.match(PDDLTokenType.KEYWORD, value=":functions")
                    while not self.lookahead_is(PDDLTokenType.CLOSE_PAREN):
                        if self.lookahead_is(PDDLTokenType.MINUS):  # Function type (e.g., number)
                            self.match(PDDLTokenType.MINUS)
                            self.match(PDDLTokenType.NAME)
                            continue
                        name, parameters = self.skeleton()
                        self.functions[name] = Function(name, parameters)
                    self.match(PDDLTokenType.CLOSE_PAREN)

                case ":action":
                    domain.operators.append(self.action())

                case ":derived":
                    domain.axioms.append(self.derived())

                case _:
                    raise self.error(f"Unexpected section in PDDL domain: {self.input_token}")

        self.match(PDDLTokenType.CLOSE_PAREN)

        domain.predicates = {n: p for n, p in self.predicates.items() if n != EQUALITY.name}
        domain.functions = dict(self.functions)
        return domain

    def initial_fact(
        self,
        atoms: list[AtomicCondition],
        values: dict[NumericExpression, float],
    ) -> None:
        """Parse one element of a problem's `:init` section into atoms or function values."""
        self.match(PDDLTokenType.OPEN_PAREN)

        if self.lookahead_is(PDDLTokenType.OPERATOR, "="):
            self.match(PDDLTokenType.OPERATOR, value="=")
            self.match(PDDLTokenType.OPEN_PAREN)
            fluent = self.function_application({})
            values[fluent] = float(self.match(PDDLTokenType.NUMBER).value)
            self.match(PDDLTokenType.CLOSE_PAREN)
            return

        atom = self.atomic_formula({}, self.match(PDDLTokenType.NAME))
        atoms.append(atom)

    def problem(self, domain: PDDLDomain) -> PlanningProblem:
        """Parse a PDDL problem for the given domain from the stream of input tokens.

        Reference: Section 13 (pg. 18) of Ghallab et al., 1998.
        """
        self.types = domain.types
        self.constants = dict(domain.constants)
        self.predicates = {EQUALITY.name: EQUALITY} | domain.predicates
        self.functions = dict(domain.functions)

        self.match(PDDLTokenType.OPEN_PAREN)
        self.match(PDDLTokenType.NAME, value="define")
        self.match(PDDLTokenType.OPEN_PAREN)
        self.match(PDDLTokenType.NAME, value="problem")
        problem_name = self.match(PDDLTokenType.NAME).value
        self.match(PDDLTokenType.CLOSE_PAREN)

        self.match(PDDLTokenType.OPEN_PAREN)
        self.match(PDDLTokenType.KEYWORD, value=":domain")
        domain_token = self.match(PDDLTokenType.NAME)
        if domain_token.value != domain.name:
            raise PDDLSyntaxError(f"Problem refers to unknown domain {domain_token}")
        self.match(PDDLTokenType.CLOSE_PAREN)

        requirements = set(domain.requirements)
        initial_atoms: list[AtomicCondition] = []
        initial_values: dict[NumericExpression, float] = {}
        goals: list[AbstractCondition] = []
        minimize_total_cost = False

        while self.lookahead_is(PDDLTokenType.OPEN_PAREN):
            self.match(PDDLTokenType.OPEN_PAREN)
            if not self.lookahead_is(PDDLTokenType.KEYWORD):
                raise self.error(f"Expected a keyword token, but found {self.input_token}")

            match self.input_token.value:
                case ":requirements":
                    requirements |= self.require_def()

                case ":objects":
                    self.typed_names(":objects")

                case ":init":
                    self.match(PDDLTokenType.KEYWORD, value=":init")
                    while not self.lookahead_is(PDDLTokenType.CLOSE_PAREN):
                        self.initial_fact(initial_atoms, initial_values)
                    self.match(PDDLTokenType.CLOSE_PAREN)

                case ":goal":
                    self.match(PDDLTokenType.KEYWORD, value=":goal")
                    goals.append(self.goal_description({}))
                    self.match(PDDLTokenType.CLOSE_PAREN)

                case ":metric":
                    self.match(PDDLTokenType.KEYWORD, value=":metric")
                    direction = self.match(PDDLTokenType.NAME).value
                    metric = self.numeric_expression({})
                    self.match(PDDLTokenType.CLOSE_PAREN)
                    minimize_total_cost = (
                        direction == "minimize"
                        and metric.function is not None
                        and metric.function.name == TOTAL_COST
                    )

                case _:
                    raise self.error(f"Unexpected section in PDDL problem: {self.input_token}")

        self.match(PDDLTokenType.CLOSE_PAREN)

        return PlanningProblem(
            name=problem_name,
            domain_name=domain.name,
            types=self.types,
            constants=tuple(self.constants.values()),
            predicates=dict(domain.predicates),
            functions=dict(domain.functions),
            operators=tuple(domain.operators),
            axioms=tuple(domain.axioms),
            initial_state=frozenset(initial_atoms),
            initial_function_values=initial_values,
            goals=tuple(goals),
            requirements=tuple(sorted(requirements)),
            minimize_total_cost=minimize_total_cost,
        )


def parse_domain(domain_text: str) -> PDDLDomain:
    """Parse a PDDL domain definition.

    :raises PDDLSyntaxError: If the text isn't a well-formed PDDL domain
    """
    return PDDLParser(domain_text).domain()


def parse_planning_problem(domain_text: str, problem_text: str) -> PlanningProblem:
    """Parse a PDDL domain and problem into a lifted planning problem.

    :param domain_text: PDDL domain definition
    :param problem_text: PDDL problem definition for the domain
    :return: Lifted planning problem combining the domain and problem
    :raises PDDLSyntaxError: If either text isn't well-formed PDDL
    """
    domain = parse_domain(domain_text)
    return PDDLParser(problem_text).problem(domain)
