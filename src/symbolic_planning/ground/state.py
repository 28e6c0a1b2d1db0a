"""Define a class to represent states of a ground planning problem."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterator


@dataclass(frozen=True)
class State:
    """The set of ground atoms (by identifier) that are true; all other atoms are false."""

    atoms: frozenset[int] = frozenset()

    def __contains__(self, atom_id: int) -> bool:
        """Evaluate whether the identified atom is true in the state."""
        return atom_id in self.atoms

    def __iter__(self) -> Iterator[int]:
        """Iterate over the identifiers of the true atoms."""
        return iter(sorted(self.atoms))

    def __len__(self) -> int:
        """Retrieve the number of true atoms."""
        return len(self.atoms)

    def transition(self, add: AbstractSet[int], delete: AbstractSet[int]) -> State:
        """Create the state resulting from deleting and then adding the given atoms."""
        return State((self.atoms - delete) | add)
