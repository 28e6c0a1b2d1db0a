"""Import functions used to validate plans."""

from .validator import PlanValidation as PlanValidation
from .validator import plan_is_valid as plan_is_valid
from .validator import validate_plan as validate_plan
