"""Define classes to represent ground atoms and their stable numeric identities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from symbolic_planning.lifted.conditions import AtomicCondition


@dataclass(frozen=True)
class GroundAtom:
    """An atomic formula in which all arguments are concrete objects."""

    predicate: str
    arguments: tuple[str, ...] = ()
    """Names of the objects bound to the predicate's parameters (in parameter order)."""

    def __str__(self) -> str:
        """Retrieve a readable string representation of the ground atom."""
        return f"{self.predicate}({', '.join(self.arguments)})"

    @classmethod
    def from_condition(cls, condition: AtomicCondition) -> GroundAtom:
        """Construct the ground atom underlying a (possibly negated) ground literal."""
        name, arguments = condition.signature
        return cls(name, arguments)


class AtomTable:
    """A bidirectional map between ground atoms and their integer identifiers.

    Identifiers are assigned in registration order, starting from zero, and never change.
    """

    def __init__(self, atoms: Iterable[GroundAtom] = ()) -> None:
        """Initialize the table, registering the given atoms in order."""
        self._atoms: list[GroundAtom] = []
        self._ids: dict[GroundAtom, int] = {}
        for atom in atoms:
            self.register(atom)

    def __len__(self) -> int:
        """Retrieve the number of registered atoms."""
        return len(self._atoms)

    def __iter__(self) -> Iterator[GroundAtom]:
        """Iterate over the registered atoms in identifier order."""
        return iter(self._atoms)

    def __contains__(self, atom: GroundAtom) -> bool:
        """Evaluate whether the given atom has been registered."""
        return atom in self._ids

    def __getitem__(self, atom_id: int) -> GroundAtom:
        """Retrieve the atom with the given identifier."""
        return self._atoms[atom_id]

    def register(self, atom: GroundAtom) -> int:
        """Retrieve the identifier of an atom, registering the atom if it's new."""
        atom_id = self._ids.get(atom)
        if atom_id is None:
            atom_id = len(self._atoms)
            self._atoms.append(atom)
            self._ids[atom] = atom_id
        return atom_id

    def id_of(self, atom: GroundAtom) -> int | None:
        """Retrieve the identifier of an atom, or None if the atom isn't registered."""
        return self._ids.get(atom)

    def describe(self, atom_ids: Iterable[int]) -> list[str]:
        """Render the identified atoms as sorted human-readable strings."""
        return sorted(str(self._atoms[i]) for i in atom_ids)
