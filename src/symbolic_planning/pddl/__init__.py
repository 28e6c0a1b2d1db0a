"""Import classes and functions used to parse PDDL into lifted planning problems."""

from .pddl_parser import PDDLDomain as PDDLDomain
from .pddl_parser import PDDLParser as PDDLParser
from .pddl_parser import parse_domain as parse_domain
from .pddl_parser import parse_planning_problem as parse_planning_problem
from .pddl_scanner import PDDLScanner as PDDLScanner
from .pddl_scanner import PDDLToken as PDDLToken
from .pddl_scanner import PDDLTokenType as PDDLTokenType
