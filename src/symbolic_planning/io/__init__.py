"""Import classes and definitions used for input/output or user interfaces."""

from .configuration import GroundingStrategy as GroundingStrategy
from .configuration import PlannerConfiguration as PlannerConfiguration
from .configuration import SearchStrategy as SearchStrategy
from .logging import console as console
