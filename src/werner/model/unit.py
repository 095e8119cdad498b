"""Units: groups of atoms sharing one coordinate transform.

A structure is made of units.  Only :class:`AtomicUnit` carries
bonding information; :class:`SpheresUnit` and :class:`GaussiansUnit`
are coarse-grained representations and never host coordination
sites.  The three classes form a closed set, aliased as :data:`Unit`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True, eq=False)
class Conformation:
    """Cartesian coordinates for a unit's atoms.

    Attributes:
        coords: Model-level coordinates, shape ``(n_atoms, 3)``,
            indexed by element index.
        rotation: 3x3 rotation applied to every position.
        translation: Translation applied after *rotation*.

    Raises:
        ValueError: If any array has the wrong shape.
    """

    coords: np.ndarray
    rotation: np.ndarray = field(
        default_factory=lambda: np.eye(3, dtype=float)
    )
    translation: np.ndarray = field(
        default_factory=lambda: np.zeros(3, dtype=float)
    )

    def __post_init__(self) -> None:
        coords = np.asarray(self.coords, dtype=float)
        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError(
                f"coords must have shape (n_atoms, 3), got {coords.shape}"
            )
        rotation = np.asarray(self.rotation, dtype=float)
        if rotation.shape != (3, 3):
            raise ValueError(
                f"rotation must have shape (3, 3), got {rotation.shape}"
            )
        translation = np.asarray(self.translation, dtype=float)
        if translation.shape != (3,):
            raise ValueError(
                f"translation must have shape (3,), got {translation.shape}"
            )
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "rotation", rotation)
        object.__setattr__(self, "translation", translation)

    def position(self, element: int) -> np.ndarray:
        """Return the transformed position of *element* as a new array."""
        return self.rotation @ self.coords[element] + self.translation


@dataclass(frozen=True, eq=False)
class IntraUnitBonds:
    """Bonds between atoms of the same unit, in CSR form.

    The neighbour slots of unit index ``i`` are
    ``offset[i]:offset[i + 1]``; slot ``k`` bonds to unit index
    ``b[k]`` with bond-type bits ``flags[k]``.  Every undirected bond
    is stored once in each direction.

    Attributes:
        offset: Slot offsets, length ``n_atoms + 1``, non-decreasing,
            starting at 0.
        b: Neighbour unit index per slot.
        flags: :class:`~werner.model.bond_type.BondFlag` bits per slot.
    """

    offset: np.ndarray
    b: np.ndarray
    flags: np.ndarray

    def __post_init__(self) -> None:
        offset = np.array(self.offset, dtype=np.int64)
        b = np.array(self.b, dtype=np.int64)
        flags = np.array(self.flags, dtype=np.int64)
        if offset.ndim != 1 or len(offset) == 0:
            raise ValueError("offset must be a non-empty 1-D array")
        if offset[0] != 0:
            raise ValueError(f"offset must start at 0, got {offset[0]}")
        if np.any(np.diff(offset) < 0):
            raise ValueError("offset must be non-decreasing")
        if len(b) != offset[-1]:
            raise ValueError(
                f"b has {len(b)} slots but offset ends at {offset[-1]}"
            )
        if len(flags) != len(b):
            raise ValueError(
                f"flags has {len(flags)} entries but b has {len(b)}"
            )
        if len(b) and (b.min() < 0 or b.max() >= len(offset) - 1):
            raise ValueError("b contains out-of-range unit indices")
        for arr in (offset, b, flags):
            arr.flags.writeable = False
        object.__setattr__(self, "offset", offset)
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "flags", flags)

    @classmethod
    def empty(cls, n_atoms: int) -> IntraUnitBonds:
        """Return a bond set with no edges for *n_atoms* atoms."""
        return cls(
            offset=np.zeros(n_atoms + 1, dtype=np.int64),
            b=np.zeros(0, dtype=np.int64),
            flags=np.zeros(0, dtype=np.int64),
        )

    @property
    def atom_count(self) -> int:
        return len(self.offset) - 1

    @property
    def edge_count(self) -> int:
        """Number of undirected bonds."""
        return len(self.b) // 2

    def slots(self, index: int) -> range:
        """Return the neighbour slot range of unit index *index*."""
        return range(int(self.offset[index]), int(self.offset[index + 1]))


def _sorted_index(elements: np.ndarray, element: int) -> int:
    i = int(np.searchsorted(elements, element))
    if i < len(elements) and int(elements[i]) == element:
        return i
    return -1


def _as_elements(elements: np.ndarray) -> np.ndarray:
    arr = np.array(elements, dtype=np.int64)
    if arr.ndim != 1:
        raise ValueError(f"elements must be 1-D, got shape {arr.shape}")
    if len(arr) > 1 and np.any(np.diff(arr) <= 0):
        raise ValueError("elements must be strictly increasing")
    if len(arr) and arr[0] < 0:
        raise ValueError("elements must be non-negative")
    arr.flags.writeable = False
    return arr


class _UnitElements:
    """Element membership queries shared by all unit kinds."""

    elements: np.ndarray

    def has_element(self, element: int) -> bool:
        """Return ``True`` if model-level *element* belongs to this unit."""
        return _sorted_index(self.elements, element) >= 0

    def index_of(self, element: int) -> int:
        """Return the unit index of *element*, or -1 if absent."""
        return _sorted_index(self.elements, element)


@dataclass(frozen=True, eq=False)
class AtomicUnit(_UnitElements):
    """A unit of individual atoms with intra-unit bonds.

    Attributes:
        id: Unit identifier, unique within a structure.
        elements: Sorted model-level element indices.  The position
            of an element in this array is its *unit index*.
        conformation: Coordinates for the elements.
        bonds: Intra-unit bonds addressed by unit index.
    """

    id: int
    elements: np.ndarray
    conformation: Conformation
    bonds: IntraUnitBonds

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError(f"unit id must be non-negative, got {self.id}")
        object.__setattr__(self, "elements", _as_elements(self.elements))
        if self.bonds.atom_count != len(self.elements):
            raise ValueError(
                f"bonds describe {self.bonds.atom_count} atoms but the "
                f"unit has {len(self.elements)}"
            )


@dataclass(frozen=True, eq=False)
class SpheresUnit(_UnitElements):
    """A coarse-grained unit of spheres (no bonds)."""

    id: int
    elements: np.ndarray
    conformation: Conformation

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", _as_elements(self.elements))


@dataclass(frozen=True, eq=False)
class GaussiansUnit(_UnitElements):
    """A coarse-grained unit of gaussians (no bonds)."""

    id: int
    elements: np.ndarray
    conformation: Conformation

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", _as_elements(self.elements))


Unit = AtomicUnit | SpheresUnit | GaussiansUnit
