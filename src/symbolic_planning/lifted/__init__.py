"""Import classes and functions representing lifted planning problems and their conditions."""

from .arguments import ROOT_TYPE as ROOT_TYPE
from .arguments import Argument as Argument
from .arguments import ConstantPool as ConstantPool
from .arguments import TypeHierarchy as TypeHierarchy
from .conditions import FALSE as FALSE
from .conditions import TRUE as TRUE
from .conditions import AbstractCondition as AbstractCondition
from .conditions import ArithmeticOperator as ArithmeticOperator
from .conditions import AtomicCondition as AtomicCondition
from .conditions import Comparator as Comparator
from .conditions import ConditionalEffect as ConditionalEffect
from .conditions import ConditionSet as ConditionSet
from .conditions import Connective as Connective
from .conditions import Implication as Implication
from .conditions import Negation as Negation
from .conditions import NumericComparison as NumericComparison
from .conditions import NumericEffect as NumericEffect
from .conditions import NumericEffectKind as NumericEffectKind
from .conditions import NumericExpression as NumericExpression
from .conditions import Quantification as Quantification
from .conditions import Quantifier as Quantifier
from .operators import Axiom as Axiom
from .operators import Operator as Operator
from .planning_problem import PlanningProblem as PlanningProblem
from .symbols import EQUALITY as EQUALITY
from .symbols import TOTAL_COST as TOTAL_COST
from .symbols import Function as Function
from .symbols import Predicate as Predicate
