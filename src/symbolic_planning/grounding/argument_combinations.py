"""Define a class to lazily enumerate well-typed bindings of variables to constants."""

from __future__ import annotations

import itertools
import math
from typing import Iterator, Sequence

from symbolic_planning.lifted.arguments import Argument, ConstantPool


class ArgumentCombinations:
    """A restartable lazy sequence of every well-typed binding of some variables.

    Each binding is a tuple containing, for each variable position, a constant whose type equals
    or is a subtype of the variable's type. Zero variables yield exactly one empty binding, and
    a variable with no eligible constants yields no bindings at all.
    """

    def __init__(self, variables: Sequence[Argument], pool: ConstantPool) -> None:
        """Initialize the enumerator for the given variables over a pool of constants.

        :param variables: Ordered typed variables to be bound
        :param pool: Typed constants of the planning problem
        """
        self.variables = tuple(variables)
        self._domains = tuple(pool.constants_of_type(v.type_) for v in self.variables)

    def __iter__(self) -> Iterator[tuple[Argument, ...]]:
        """Begin a new (lazy) enumeration of the bindings."""
        return itertools.product(*self._domains)

    def __len__(self) -> int:
        """Compute the number of bindings without enumerating them."""
        return math.prod(len(domain) for domain in self._domains)

    @property
    def domains(self) -> tuple[tuple[Argument, ...], ...]:
        """Retrieve the eligible constants of each variable position."""
        return self._domains
