"""Structural locations and loci.

A *location* points at one atom and is used as a mutable cursor when
iterating.  A *locus* describes a set of atoms for selection and
highlighting.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeGuard

import numpy as np

if TYPE_CHECKING:
    from werner.model.structure import Structure
    from werner.model.unit import Unit


@dataclass(eq=False)
class ElementLocation:
    """A single atom of a structure.

    Instances handed to visitor callbacks are reused between calls;
    use :meth:`copy` to keep one beyond the call.

    Attributes:
        structure: The structure the atom belongs to.
        unit: The unit owning the atom, or ``None`` when unset.
        element: Model-level element index, or -1 when unset.
    """

    structure: Structure | None = None
    unit: Unit | None = None
    element: int = -1

    def copy(self) -> ElementLocation:
        return ElementLocation(self.structure, self.unit, self.element)

    @property
    def is_set(self) -> bool:
        return self.unit is not None and self.element >= 0

    def key(self) -> tuple[int, int]:
        """Return the ``(unit id, element)`` identity of this atom.

        Raises:
            ValueError: If the location is unset.
        """
        if self.unit is None or self.element < 0:
            raise ValueError("location is not set")
        return self.unit.id, self.element

    def position(self) -> np.ndarray:
        """Return the Cartesian position of the atom.

        Raises:
            ValueError: If the location is unset.
        """
        if self.unit is None or self.element < 0:
            raise ValueError("location is not set")
        return self.unit.conformation.position(self.element)


@dataclass(frozen=True)
class EmptyLoci:
    """A locus that selects nothing."""


EMPTY_LOCI = EmptyLoci()


@dataclass(frozen=True, eq=False)
class StructureLoci:
    """A locus selecting a whole structure."""

    structure: Structure


@dataclass(frozen=True, eq=False)
class LociElement:
    """Selected atoms of one unit.

    Attributes:
        unit: The unit.
        indices: Sorted unit indices of the selected atoms.
    """

    unit: Unit
    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        indices = tuple(sorted({int(i) for i in self.indices}))
        n = len(self.unit.elements)
        if indices and (indices[0] < 0 or indices[-1] >= n):
            raise ValueError(
                f"unit indices must lie in [0, {n}), got {indices}"
            )
        object.__setattr__(self, "indices", indices)


@dataclass(frozen=True, eq=False)
class ElementLoci:
    """A locus selecting individual atoms of a structure."""

    structure: Structure
    elements: tuple[LociElement, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    @property
    def size(self) -> int:
        """Number of selected atoms."""
        return sum(len(e.indices) for e in self.elements)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def locations(self) -> Iterator[ElementLocation]:
        """Yield a fresh :class:`ElementLocation` per selected atom."""
        for entry in self.elements:
            for index in entry.indices:
                yield ElementLocation(
                    self.structure, entry.unit, int(entry.unit.elements[index]),
                )


Loci = EmptyLoci | StructureLoci | ElementLoci


def is_element_loci(loci: Loci) -> TypeGuard[ElementLoci]:
    """Return ``True`` if *loci* selects individual atoms."""
    return isinstance(loci, ElementLoci)


class LocationIterator:
    """Map render group indices to structural locations.

    Renderers walk groups ``0 .. group_count - 1`` for every instance
    to resolve per-group colour and size.  The location returned by
    :meth:`get_location` is a shared cursor.

    Args:
        group_count: Number of groups in the geometry.
        instance_count: Number of instances of the geometry.
        get_location: Callable mapping a group index to a location.
    """

    def __init__(
        self,
        group_count: int,
        instance_count: int,
        get_location: Callable[[int], ElementLocation],
    ) -> None:
        if group_count < 0 or instance_count < 0:
            raise ValueError(
                f"counts must be non-negative, got group_count={group_count}, "
                f"instance_count={instance_count}"
            )
        self.group_count = group_count
        self.instance_count = instance_count
        self._get_location = get_location

    @property
    def count(self) -> int:
        return self.group_count * self.instance_count

    def get_location(self, group_index: int) -> ElementLocation:
        return self._get_location(group_index)

    def __iter__(self) -> Iterator[tuple[int, int, ElementLocation]]:
        """Yield ``(instance, group, location)`` for every group."""
        for instance in range(self.instance_count):
            for group in range(self.group_count):
                yield instance, group, self._get_location(group)
