"""Import classes used to search ground planning problems for plans."""

from .forward_search import ForwardSearchPlanner as ForwardSearchPlanner
from .forward_search import SearchNode as SearchNode
