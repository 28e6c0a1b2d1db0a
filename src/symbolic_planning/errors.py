"""Define the exceptions raised by the planning pipeline."""


class PlanningError(Exception):
    """Base class for errors raised while preprocessing, grounding, or searching."""


class RepresentationError(PlanningError):
    """An error raised when a lifted structure violates an invariant of its representation.

    Examples: a variable that no quantifier or operator parameter binds, a binding whose
    arity or type doesn't match, or an attempt to negate an effect.
    """


class UnsupportedConditionError(PlanningError):
    """An error raised when a condition uses a feature the ground model cannot represent."""


class PDDLSyntaxError(PlanningError):
    """An error raised when PDDL text cannot be tokenized or parsed."""
