from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from functools import cached_property
from typing import TYPE_CHECKING

import numpy as np

from werner.model.inter_unit_bonds import InterUnitBonds, InterUnitEdge
from werner.model.unit import (
    AtomicUnit,
    GaussiansUnit,
    IntraUnitBonds,
    SpheresUnit,
    Unit,
)

if TYPE_CHECKING:
    from werner.coordination import Coordination


class Structure:
    """An ordered collection of units plus the bonds between them.

    A structure is immutable once created.  Derived data such as the
    :attr:`coordination` table is computed lazily and cached for the
    lifetime of the instance; a changed bond graph means building a
    new ``Structure``.

    Filtered views are expressed with :meth:`subset`, which returns a
    structure whose :attr:`parent` is this one.  A rendered structure
    may also carry a :attr:`child` view (see :meth:`with_child`) so
    that geometry can be restricted to the visible subset without
    recomputing derived data.

    Args:
        units: Units in structure order.  Unit ids must be unique.
        inter_unit_bonds: Bonds between units, or ``None`` for none.
        parent: The structure this one was filtered from, if any.
        child: A filtered view of this structure to restrict
            rendering to, if any.
        label: Optional human-readable label.

    Raises:
        ValueError: If unit ids are not unique, or an inter-unit edge
            refers to a missing unit, a coarse unit or an out-of-range
            unit index.
    """

    def __init__(
        self,
        units: Iterable[Unit],
        inter_unit_bonds: InterUnitBonds | None = None,
        *,
        parent: Structure | None = None,
        child: Structure | None = None,
        label: str = "",
    ) -> None:
        self.units: tuple[Unit, ...] = tuple(units)
        self.unit_map: dict[int, Unit] = {}
        for unit in self.units:
            if unit.id in self.unit_map:
                raise ValueError(f"duplicate unit id {unit.id}")
            self.unit_map[unit.id] = unit
        self.inter_unit_bonds = (
            inter_unit_bonds if inter_unit_bonds is not None
            else InterUnitBonds()
        )
        self.parent = parent
        self.child = child
        self.label = label
        # Copies made by with_child() share lineage with their source.
        self._origin: Structure | None = None
        self._check_inter_unit_bonds()

    def _check_inter_unit_bonds(self) -> None:
        for edge in self.inter_unit_bonds.edges:
            for unit_id, index in (
                (edge.unit_a, edge.index_a), (edge.unit_b, edge.index_b),
            ):
                unit = self.unit_map.get(unit_id)
                if unit is None:
                    raise ValueError(
                        f"inter-unit edge refers to unknown unit {unit_id}"
                    )
                if not isinstance(unit, AtomicUnit):
                    raise ValueError(
                        f"inter-unit edge refers to non-atomic unit {unit_id}"
                    )
                if index >= len(unit.elements):
                    raise ValueError(
                        f"inter-unit edge index {index} out of range for "
                        f"unit {unit_id} with {len(unit.elements)} atoms"
                    )

    def __repr__(self) -> str:
        label = f" {self.label!r}" if self.label else ""
        return (
            f"<Structure{label} units={len(self.units)} "
            f"atoms={self.element_count}>"
        )

    @property
    def element_count(self) -> int:
        """Total number of atoms over all units."""
        return sum(len(unit.elements) for unit in self.units)

    @property
    def root(self) -> Structure:
        """The unfiltered structure at the top of this lineage."""
        if self.parent is not None:
            return self.parent.root
        if self._origin is not None:
            return self._origin.root
        return self

    @staticmethod
    def are_equivalent(a: Structure, b: Structure) -> bool:
        """Return ``True`` if *a* and *b* derive from the same root."""
        return a.root is b.root

    @cached_property
    def coordination(self) -> Coordination:
        """Coordination sites of this structure, computed on first use."""
        from werner.coordination import compute_coordination

        return compute_coordination(self)

    def with_child(self, child: Structure | None) -> Structure:
        """Return a copy of this structure carrying *child* as its view.

        The copy shares units, bonds and any already computed
        coordination table, and is lineage-equivalent to this
        structure.

        Raises:
            ValueError: If *child* does not derive from this structure.
        """
        if child is not None and not Structure.are_equivalent(child, self):
            raise ValueError("child must be derived from the same root structure")
        copy = Structure.__new__(Structure)
        copy.units = self.units
        copy.unit_map = self.unit_map
        copy.inter_unit_bonds = self.inter_unit_bonds
        copy.parent = self.parent
        copy.child = child
        copy.label = self.label
        copy._origin = self
        if "coordination" in self.__dict__:
            copy.__dict__["coordination"] = self.__dict__["coordination"]
        return copy

    def subset(self, selection: Mapping[int, Sequence[int]]) -> Structure:
        """Return a filtered view keeping only the selected atoms.

        Args:
            selection: Mapping from unit id to the model-level element
                indices to keep.  Units not listed are dropped, as are
                elements not present in their unit.  Bonds survive only
                when both ends are kept.

        Returns:
            A new structure whose :attr:`parent` is this one.
        """
        units: list[Unit] = []
        # Old unit index -> new unit index, per kept unit.
        remaps: dict[int, np.ndarray] = {}
        for unit in self.units:
            if unit.id not in selection:
                continue
            keep = np.isin(unit.elements, np.asarray(selection[unit.id]))
            if not keep.any():
                continue
            remap = np.full(len(unit.elements), -1, dtype=np.int64)
            remap[keep] = np.arange(int(keep.sum()))
            remaps[unit.id] = remap
            elements = unit.elements[keep]
            match unit:
                case AtomicUnit():
                    units.append(AtomicUnit(
                        id=unit.id,
                        elements=elements,
                        conformation=unit.conformation,
                        bonds=_subset_bonds(unit.bonds, remap),
                    ))
                case SpheresUnit():
                    units.append(SpheresUnit(
                        unit.id, elements, unit.conformation,
                    ))
                case GaussiansUnit():
                    units.append(GaussiansUnit(
                        unit.id, elements, unit.conformation,
                    ))

        edges = []
        for edge in self.inter_unit_bonds.edges:
            remap_a = remaps.get(edge.unit_a)
            remap_b = remaps.get(edge.unit_b)
            if remap_a is None or remap_b is None:
                continue
            new_a = int(remap_a[edge.index_a])
            new_b = int(remap_b[edge.index_b])
            if new_a < 0 or new_b < 0:
                continue
            edges.append(InterUnitEdge(
                edge.unit_a, new_a, edge.unit_b, new_b, edge.flag,
            ))

        return Structure(
            units, InterUnitBonds(edges), parent=self, label=self.label,
        )


def _subset_bonds(bonds: IntraUnitBonds, remap: np.ndarray) -> IntraUnitBonds:
    """Restrict CSR bonds to kept atoms, renumbering unit indices."""
    offset = [0]
    b: list[int] = []
    flags: list[int] = []
    for old_index in np.flatnonzero(remap >= 0):
        for slot in bonds.slots(int(old_index)):
            target = int(remap[bonds.b[slot]])
            if target >= 0:
                b.append(target)
                flags.append(int(bonds.flags[slot]))
        offset.append(len(b))
    return IntraUnitBonds(
        offset=np.asarray(offset, dtype=np.int64),
        b=np.asarray(b, dtype=np.int64),
        flags=np.asarray(flags, dtype=np.int64),
    )
