"""Shared test fixtures for werner."""

import numpy as np
import pytest

from werner.construction import structure_from_bonds
from werner.model import BondFlag

TETRAHEDRON = np.array([
    [1.0, 1.0, 1.0],
    [-1.0, -1.0, 1.0],
    [1.0, -1.0, -1.0],
    [-1.0, 1.0, -1.0],
])

OCTAHEDRON = np.array([
    [1.0, 0.0, 0.0],
    [-1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, -1.0, 0.0],
    [0.0, 0.0, 1.0],
    [0.0, 0.0, -1.0],
])

SQUARE_PLANAR = np.array([
    [1.0, 0.0, 0.0],
    [-1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, -1.0, 0.0],
])


@pytest.fixture
def tetrahedral_site():
    """One centre with 4 covalent inter-unit bonds and 2 hydrogen bonds.

    Atoms 0 (centre) and 5 are in unit 0; atoms 1-4 (ligands) and 6
    are in unit 1.  Atom 5 is hydrogen bonded within unit 0, atom 6
    across units.
    """
    coords = np.vstack([
        [0.0, 0.0, 0.0],
        TETRAHEDRON,
        [3.0, 0.0, 0.0],
        [0.0, 3.0, 0.0],
    ])
    bonds = [(0, i, BondFlag.COVALENT) for i in range(1, 5)]
    bonds += [(0, 5, BondFlag.HYDROGEN_BOND), (0, 6, BondFlag.HYDROGEN_BOND)]
    return structure_from_bonds(
        coords, bonds, unit_of=[0, 1, 1, 1, 1, 0, 1], label="tetrahedral",
    )


@pytest.fixture
def octahedral_site():
    """One centre with 6 metal-coordination bonds inside one unit."""
    coords = np.vstack([[0.0, 0.0, 0.0], OCTAHEDRON])
    bonds = [(0, i, BondFlag.METALLIC_COORDINATION) for i in range(1, 7)]
    return structure_from_bonds(coords, bonds, label="octahedral")


@pytest.fixture
def square_planar_site():
    """One centre with 4 coplanar ligands."""
    coords = np.vstack([[0.0, 0.0, 0.0], SQUARE_PLANAR])
    bonds = [(0, i) for i in range(1, 5)]
    return structure_from_bonds(coords, bonds, label="square planar")


@pytest.fixture
def two_sites():
    """A tetrahedral centre (atom 0) and an octahedral centre (atom 5).

    All atoms are in one unit; the octahedron is shifted along x.
    """
    shift = np.array([10.0, 0.0, 0.0])
    coords = np.vstack([
        [0.0, 0.0, 0.0],
        TETRAHEDRON,
        shift,
        OCTAHEDRON + shift,
    ])
    bonds = [(0, i) for i in range(1, 5)]
    bonds += [(5, i, BondFlag.METALLIC_COORDINATION) for i in range(6, 12)]
    return structure_from_bonds(coords, bonds, label="two sites")
