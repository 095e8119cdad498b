"""Coordination-site detection from a structure's bond graph.

An atom is a coordination site when it has at least
:data:`~werner._constants.MIN_COORDINATION` coordinating bonds
(covalent or metallic coordination), counting both intra-unit and
inter-unit bonds.  Sites are numbered densely in discovery order:
units in structure order, then atoms in unit order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np

from werner._constants import MIN_COORDINATION
from werner.model import (
    AtomicUnit,
    ElementLocation,
    GaussiansUnit,
    SpheresUnit,
    Structure,
    Unit,
    cantor_pairing,
    is_coordinating,
)

logger = logging.getLogger(__name__)

LigandVisitor = Callable[[ElementLocation], None]


def _inter_bond_count(structure: Structure, unit: AtomicUnit, index: int) -> int:
    bonds = structure.inter_unit_bonds
    return sum(
        1 for e in bonds.get_edge_indices(index, unit.id)
        if is_coordinating(bonds.edges[e].flag)
    )


def _intra_bond_count(unit: AtomicUnit, index: int) -> int:
    flags = unit.bonds.flags
    return sum(1 for slot in unit.bonds.slots(index) if is_coordinating(flags[slot]))


def bond_count(structure: Structure, unit: AtomicUnit, index: int) -> int:
    """Return the number of coordinating bonds of an atom.

    Args:
        structure: The structure holding the inter-unit bonds.
        unit: The atom's unit.
        index: The atom's unit index.
    """
    return _inter_bond_count(structure, unit, index) + _intra_bond_count(unit, index)


def _each_bonded_atom(
    structure: Structure, unit: AtomicUnit, index: int,
) -> Iterator[tuple[AtomicUnit, int]]:
    """Yield ``(unit, unit index)`` of every coordinating neighbour.

    Inter-unit neighbours come first, then intra-unit ones.
    """
    bonds = structure.inter_unit_bonds
    for e in bonds.get_edge_indices(index, unit.id):
        edge = bonds.edges[e]
        if is_coordinating(edge.flag):
            yield structure.unit_map[edge.unit_b], edge.index_b
    intra = unit.bonds
    for slot in intra.slots(index):
        if is_coordinating(intra.flags[slot]):
            yield unit, int(intra.b[slot])


def _frozen(values: list[int]) -> np.ndarray:
    arr = np.asarray(values, dtype=np.int64)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class CoordinationSites:
    """Parallel per-site arrays.

    Entry ``i`` of every array describes site ``i``.

    Attributes:
        unit_ids: Id of the unit owning each site atom.
        indices: Unit index of each site atom.
        numbers: Coordination number (coordinating bond count).
    """

    unit_ids: np.ndarray
    indices: np.ndarray
    numbers: np.ndarray

    @property
    def count(self) -> int:
        return len(self.unit_ids)


@dataclass(frozen=True, eq=False)
class Coordination:
    """Immutable table of the coordination sites of one structure.

    Use :func:`compute_coordination` (or
    :attr:`Structure.coordination <werner.model.Structure.coordination>`)
    to build one.  A table without sites is always the
    :data:`EMPTY_COORDINATION` singleton.

    Attributes:
        sites: Per-site arrays.
        structure: The structure the table was computed for, or
            ``None`` for the empty table.
    """

    sites: CoordinationSites
    structure: Structure | None = None
    _site_index: Mapping[int, int] = field(
        default_factory=lambda: MappingProxyType({}), repr=False,
    )

    def __len__(self) -> int:
        return self.sites.count

    @property
    def is_empty(self) -> bool:
        return self.sites.count == 0

    def get_site_index(self, unit: Unit, element: int) -> int:
        """Return the site index of an atom, or -1 if it is not a site.

        Args:
            unit: The atom's unit.
            element: The atom's model-level element index.
        """
        if element < 0:
            return -1
        return self._site_index.get(cantor_pairing(unit.id, element), -1)

    def _check_site_index(self, site_index: int) -> None:
        if not 0 <= site_index < self.sites.count:
            raise IndexError(
                f"site index {site_index} out of range for coordination "
                f"table with {self.sites.count} site(s)"
            )

    def each_ligand(self, site_index: int, visit: LigandVisitor) -> None:
        """Call *visit* once for every ligand of a site.

        The :class:`~werner.model.ElementLocation` passed to *visit* is
        a single cursor reused across calls; copy it (or the fields you
        need) to keep it beyond the call.

        Raises:
            IndexError: If *site_index* is not a valid site index.
        """
        self._check_site_index(site_index)
        location = ElementLocation(self.structure)
        for unit, index in self._bonded_atoms(site_index):
            location.unit = unit
            location.element = int(unit.elements[index])
            visit(location)

    def iter_ligands(self, site_index: int) -> Iterator[ElementLocation]:
        """Yield a new :class:`~werner.model.ElementLocation` per ligand.

        Unlike :meth:`each_ligand`, the yielded locations may be kept.

        Raises:
            IndexError: If *site_index* is not a valid site index.
        """
        self._check_site_index(site_index)
        return (
            ElementLocation(self.structure, unit, int(unit.elements[index]))
            for unit, index in self._bonded_atoms(site_index)
        )

    def _bonded_atoms(self, site_index: int) -> Iterator[tuple[AtomicUnit, int]]:
        structure = self.structure
        assert structure is not None
        unit = structure.unit_map[int(self.sites.unit_ids[site_index])]
        assert isinstance(unit, AtomicUnit)
        return _each_bonded_atom(structure, unit, int(self.sites.indices[site_index]))


EMPTY_COORDINATION = Coordination(
    sites=CoordinationSites(_frozen([]), _frozen([]), _frozen([])),
)
"""The coordination table of a structure without sites."""


def compute_coordination(structure: Structure) -> Coordination:
    """Find all coordination sites of *structure*.

    Every atom of every atomic unit is checked; coarse-grained units
    are skipped.  An atom becomes a site when it has at least
    ``MIN_COORDINATION`` coordinating bonds.  Hydrogen bonds and other
    non-coordinating bond types are not counted.

    Args:
        structure: The structure to analyse.

    Returns:
        The coordination table, or :data:`EMPTY_COORDINATION` if no
        atom qualifies.
    """
    unit_ids: list[int] = []
    indices: list[int] = []
    numbers: list[int] = []
    site_index: dict[int, int] = {}

    for unit in structure.units:
        match unit:
            case AtomicUnit():
                pass
            case SpheresUnit() | GaussiansUnit():
                continue

        for index, element in enumerate(unit.elements):
            count = bond_count(structure, unit, index)
            if count >= MIN_COORDINATION:
                site_index[cantor_pairing(unit.id, int(element))] = len(unit_ids)
                unit_ids.append(unit.id)
                indices.append(index)
                numbers.append(count)

    logger.debug(
        "found %d coordination site(s) in %d unit(s)",
        len(unit_ids), len(structure.units),
    )
    if not unit_ids:
        return EMPTY_COORDINATION

    return Coordination(
        sites=CoordinationSites(
            unit_ids=_frozen(unit_ids),
            indices=_frozen(indices),
            numbers=_frozen(numbers),
        ),
        structure=structure,
        _site_index=MappingProxyType(site_index),
    )
