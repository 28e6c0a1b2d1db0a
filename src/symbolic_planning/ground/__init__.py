"""Import classes representing ground planning problems, states, actions, and plans."""

from .actions import Action as Action
from .actions import GroundAxiom as GroundAxiom
from .actions import GroundConditionalEffect as GroundConditionalEffect
from .atoms import AtomTable as AtomTable
from .atoms import GroundAtom as GroundAtom
from .conditions import GroundCondition as GroundCondition
from .conditions import GroundJunction as GroundJunction
from .conditions import GroundLiteral as GroundLiteral
from .plan import Plan as Plan
from .problem import GroundPlanningProblem as GroundPlanningProblem
from .state import State as State
