"""Import classes and functions that transform lifted planning problems into ground ones."""

from .argument_combinations import ArgumentCombinations as ArgumentCombinations
from .grounders import Grounder as Grounder
from .grounders import NaiveGrounder as NaiveGrounder
from .grounders import RelaxedPlanningGraphGrounder as RelaxedPlanningGraphGrounder
from .grounders import make_grounder as make_grounder
from .preprocessor import Preprocessor as Preprocessor
from .preprocessor import TotalCostPatternError as TotalCostPatternError
from .preprocessor import eliminate_quantifiers as eliminate_quantifiers
from .preprocessor import split_operator as split_operator
