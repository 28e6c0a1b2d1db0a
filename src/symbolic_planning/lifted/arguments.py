"""Define classes to represent typed arguments, object types, and pools of constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

ROOT_TYPE = "object"
"""Every PDDL type is (transitively) a subtype of `object`."""


@dataclass(frozen=True)
class Argument:
    """A typed argument of a condition: either a constant (an object) or a variable.

    Equivalent to a PDDL term. Variables are conventionally named with a leading `?`.
    """

    name: str
    type_: str = ROOT_TYPE
    is_constant: bool = False
    """True if the argument names a concrete object, False if it is an unbound variable."""

    def __str__(self) -> str:
        """Return the argument's name."""
        return self.name

    @classmethod
    def constant(cls, name: str, type_: str = ROOT_TYPE) -> Argument:
        """Construct a constant argument naming a concrete object."""
        return cls(name, type_, is_constant=True)

    @classmethod
    def variable(cls, name: str, type_: str = ROOT_TYPE) -> Argument:
        """Construct a variable argument, adding the `?` prefix if it's missing."""
        return cls(name if name.startswith("?") else f"?{name}", type_, is_constant=False)

    def to_pddl(self) -> str:
        """Return a PDDL string representation of the typed argument."""
        return f"{self.name} - {self.type_}"


class TypeHierarchy:
    """A hierarchy of object types, permitting types to have subtypes."""

    def __init__(self, parents: dict[str, str] | None = None) -> None:
        """Initialize the type hierarchy from a map from types to their parent types.

        :param parents: Map from each type name to its parent type (omitted types are roots)
        :raises ValueError: If the given parent-child relationships are inconsistent
        """
        self._to_parent: dict[str, str] = {}
        """A map from each subtype to its parent type (undefined for `object`)."""

        self._to_children: dict[str, set[str]] = {ROOT_TYPE: set()}
        """A map from the name of each type to the names of the type's direct subtypes."""

        for child, parent in (parents or {}).items():
            self.add_type(child, parent)

        self._validate()

    def __contains__(self, type_name: str) -> bool:
        """Evaluate whether the named type is part of the hierarchy."""
        return type_name in self._to_children

    def __iter__(self) -> Iterator[str]:
        """Iterate over the names of all types in the hierarchy."""
        return iter(self._to_children)

    def add_type(self, type_name: str, parent: str = ROOT_TYPE) -> None:
        """Add a type to the hierarchy, creating its parent type if necessary."""
        if type_name == ROOT_TYPE:
            return

        self._to_children.setdefault(parent, set())
        self._to_children.setdefault(type_name, set())

        if parent != ROOT_TYPE and parent not in self._to_parent:
            self._to_parent[parent] = ROOT_TYPE
            self._to_children[ROOT_TYPE].add(parent)

        previous_parent = self._to_parent.get(type_name)
        if previous_parent is not None:
            self._to_children[previous_parent].discard(type_name)

        self._to_parent[type_name] = parent
        self._to_children[parent].add(type_name)

    def parent_of(self, type_name: str) -> str | None:
        """Retrieve the parent of the named type (None for `object`)."""
        if type_name not in self:
            raise KeyError(f"Unknown object type: '{type_name}'.")
        return self._to_parent.get(type_name)

    def ancestors_of(self, type_name: str) -> list[str]:
        """Retrieve the named type followed by all of its ancestors, nearest first."""
        ancestors = [type_name]
        parent = self.parent_of(type_name)
        while parent is not None:
            ancestors.append(parent)
            parent = self._to_parent.get(parent)
        return ancestors

    def is_subtype(self, type_name: str, ancestor: str) -> bool:
        """Evaluate whether a type equals or (transitively) derives from another type."""
        if ancestor == ROOT_TYPE:
            return True
        if type_name not in self:
            return type_name == ancestor
        return ancestor in self.ancestors_of(type_name)

    def _validate(self) -> None:
        """Verify that the type hierarchy, as currently defined, is consistent.

        :raises ValueError: If the hierarchy contains contradictory relationships or cycles
        """
        error_msgs = [
            str(
                f"The parent of type '{child}' is defined as '{parent}' but the children "
                f"of '{parent}' don't include '{child}': {self._to_children[parent]}.",
            )
            for child, parent in self._to_parent.items()
            if child not in self._to_children.get(parent, set())
        ]

        for type_name in self._to_parent:
            visited = {type_name}
            parent = self._to_parent.get(type_name)
            while parent is not None:
                if parent in visited:
                    error_msgs.append(f"Type '{type_name}' is part of a cycle in the hierarchy.")
                    break
                visited.add(parent)
                parent = self._to_parent.get(parent)

        if error_msgs:
            raise ValueError("Invalid TypeHierarchy:\n\t" + "\n\t".join(error_msgs))


class ConstantPool:
    """The typed constants of a planning problem, organized by their (super)types."""

    def __init__(self, constants: Iterable[Argument], types: TypeHierarchy | None = None) -> None:
        """Initialize the pool from constant arguments and the problem's type hierarchy.

        :raises ValueError: If a given argument isn't a constant
        """
        self.types = types if types is not None else TypeHierarchy()
        self._constants: dict[str, Argument] = {}

        for constant in constants:
            if not constant.is_constant:
                raise ValueError(f"Cannot add variable '{constant}' to a pool of constants.")
            self._constants.setdefault(constant.name, constant)

        self._constants_of_type: dict[str, tuple[Argument, ...]] = {}
        """Cache mapping each queried type to its compatible constants (in declaration order)."""

    def __contains__(self, name: str) -> bool:
        """Evaluate whether a constant with the given name is in the pool."""
        return name in self._constants

    def __iter__(self) -> Iterator[Argument]:
        """Iterate over the pool's constants in declaration order."""
        return iter(self._constants.values())

    def __len__(self) -> int:
        """Retrieve the number of constants in the pool."""
        return len(self._constants)

    def get(self, name: str) -> Argument | None:
        """Retrieve the named constant, or None if there isn't one."""
        return self._constants.get(name)

    def constants_of_type(self, type_name: str) -> tuple[Argument, ...]:
        """Retrieve every constant whose type equals or is a subtype of the given type."""
        if type_name not in self._constants_of_type:
            self._constants_of_type[type_name] = tuple(
                c for c in self._constants.values() if self.types.is_subtype(c.type_, type_name)
            )
        return self._constants_of_type[type_name]
