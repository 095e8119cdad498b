"""Build structures from flat atom and bond lists."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from typing import Literal

import numpy as np

from werner.model import (
    AtomicUnit,
    BondFlag,
    Conformation,
    GaussiansUnit,
    InterUnitBonds,
    IntraUnitBonds,
    SpheresUnit,
    Structure,
    Unit,
)

UnitKind = Literal["atomic", "spheres", "gaussians"]

BondTuple = tuple[int, int] | tuple[int, int, int]


def _normalise_bond(bond: BondTuple) -> tuple[int, int, int]:
    if len(bond) == 2:
        i, j = bond
        flag = int(BondFlag.COVALENT)
    elif len(bond) == 3:
        i, j, flag = bond
    else:
        raise ValueError(f"bond must be (i, j) or (i, j, flag), got {bond!r}")
    return int(i), int(j), int(flag)


def structure_from_bonds(
    coords: np.ndarray,
    bonds: Iterable[BondTuple],
    *,
    unit_of: Sequence[int] | None = None,
    kinds: Mapping[int, UnitKind] | None = None,
    label: str = "",
) -> Structure:
    """Create a :class:`~werner.model.Structure` from atoms and bonds.

    Atom ``i`` becomes model-level element ``i``.  Atoms are grouped
    into units by *unit_of*; units appear in order of first
    occurrence.  Bonds between atoms of the same unit become
    intra-unit bonds, the rest inter-unit bonds.  Both are stored in
    both directions.

    Example::

        structure = structure_from_bonds(
            coords,
            [(0, 1), (0, 2, BondFlag.METALLIC_COORDINATION)],
            unit_of=[0, 0, 1],
        )

    Args:
        coords: Coordinates, shape ``(n_atoms, 3)``.
        bonds: Undirected bonds as ``(i, j)`` (covalent) or
            ``(i, j, flag)`` tuples of atom indices.
        unit_of: Unit id per atom.  ``None`` puts every atom in unit 0.
        kinds: Kind per unit id; unlisted units are atomic.
        label: Structure label.

    Returns:
        The new structure.

    Raises:
        ValueError: On shape mismatches, self bonds, repeated bonds,
            out-of-range atom indices, or bonds touching coarse units.
    """
    coords = np.asarray(coords, dtype=float)
    if coords.ndim != 2 or coords.shape[1] != 3:
        raise ValueError(
            f"coords must have shape (n_atoms, 3), got {coords.shape}"
        )
    n_atoms = len(coords)
    if unit_of is None:
        unit_of = [0] * n_atoms
    unit_of = [int(u) for u in unit_of]
    if len(unit_of) != n_atoms:
        raise ValueError(
            f"unit_of has {len(unit_of)} entries but coords has {n_atoms} rows"
        )
    kinds = dict(kinds or {})

    members: dict[int, list[int]] = {}
    for atom, unit_id in enumerate(unit_of):
        members.setdefault(unit_id, []).append(atom)
    # Unit index of every atom within its unit.
    unit_index = np.empty(n_atoms, dtype=np.int64)
    for atoms in members.values():
        unit_index[atoms] = np.arange(len(atoms))

    intra: dict[int, dict[int, list[tuple[int, int]]]] = {
        unit_id: defaultdict(list) for unit_id in members
    }
    inter: list[tuple[int, int, int, int, int]] = []
    seen: set[tuple[int, int]] = set()
    for bond in bonds:
        i, j, flag = _normalise_bond(bond)
        if not (0 <= i < n_atoms and 0 <= j < n_atoms):
            raise ValueError(
                f"bond ({i}, {j}) refers to atoms outside [0, {n_atoms})"
            )
        if i == j:
            raise ValueError(f"atom {i} cannot bond to itself")
        pair = (min(i, j), max(i, j))
        if pair in seen:
            raise ValueError(f"bond {pair} given more than once")
        seen.add(pair)
        unit_i, unit_j = unit_of[i], unit_of[j]
        for unit_id in (unit_i, unit_j):
            if kinds.get(unit_id, "atomic") != "atomic":
                raise ValueError(
                    f"bond ({i}, {j}) touches coarse unit {unit_id}"
                )
        ui, uj = int(unit_index[i]), int(unit_index[j])
        if unit_i == unit_j:
            intra[unit_i][ui].append((uj, flag))
            intra[unit_i][uj].append((ui, flag))
        else:
            inter.append((unit_i, ui, unit_j, uj, flag))

    units: list[Unit] = []
    for unit_id, atoms in members.items():
        conformation = Conformation(coords)
        kind = kinds.get(unit_id, "atomic")
        match kind:
            case "atomic":
                units.append(AtomicUnit(
                    id=unit_id,
                    elements=np.asarray(atoms),
                    conformation=conformation,
                    bonds=_csr(len(atoms), intra[unit_id]),
                ))
            case "spheres":
                units.append(SpheresUnit(unit_id, np.asarray(atoms), conformation))
            case "gaussians":
                units.append(GaussiansUnit(unit_id, np.asarray(atoms), conformation))
            case _:
                raise ValueError(f"unknown unit kind {kind!r} for unit {unit_id}")

    return Structure(units, InterUnitBonds.from_bonds(inter), label=label)


def _csr(
    n_atoms: int,
    neighbours: Mapping[int, list[tuple[int, int]]],
) -> IntraUnitBonds:
    offset = np.zeros(n_atoms + 1, dtype=np.int64)
    b: list[int] = []
    flags: list[int] = []
    for index in range(n_atoms):
        for target, flag in neighbours.get(index, ()):
            b.append(target)
            flags.append(flag)
        offset[index + 1] = len(b)
    return IntraUnitBonds(offset=offset, b=b, flags=flags)
