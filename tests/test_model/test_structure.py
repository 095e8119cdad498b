"""Tests for werner.model.structure — structures, lineage and subsets."""

import numpy as np
import pytest

from werner.construction import structure_from_bonds
from werner.model import (
    AtomicUnit,
    BondFlag,
    Conformation,
    InterUnitBonds,
    InterUnitEdge,
    IntraUnitBonds,
    SpheresUnit,
    Structure,
)


def _unit(unit_id, elements):
    return AtomicUnit(
        unit_id, elements, Conformation(np.zeros((10, 3))),
        IntraUnitBonds.empty(len(elements)),
    )


class TestStructure:
    def test_unit_map(self):
        structure = Structure([_unit(4, [0, 1]), _unit(2, [2])])
        assert [u.id for u in structure.units] == [4, 2]
        assert structure.unit_map[2].id == 2
        assert structure.element_count == 3

    def test_duplicate_unit_ids(self):
        with pytest.raises(ValueError, match="duplicate"):
            Structure([_unit(1, [0]), _unit(1, [1])])

    def test_edge_to_unknown_unit(self):
        bonds = InterUnitBonds.from_bonds([(0, 0, 9, 0, BondFlag.COVALENT)])
        with pytest.raises(ValueError, match="unknown unit"):
            Structure([_unit(0, [0])], bonds)

    def test_edge_index_out_of_range(self):
        bonds = InterUnitBonds.from_bonds([(0, 0, 1, 3, BondFlag.COVALENT)])
        with pytest.raises(ValueError, match="out of range"):
            Structure([_unit(0, [0]), _unit(1, [1])], bonds)

    def test_edge_to_coarse_unit(self):
        coarse = SpheresUnit(1, [1], Conformation(np.zeros((2, 3))))
        bonds = InterUnitBonds.from_bonds([(0, 0, 1, 0, BondFlag.COVALENT)])
        with pytest.raises(ValueError, match="non-atomic"):
            Structure([_unit(0, [0]), coarse], bonds)

    def test_repr(self):
        structure = Structure([_unit(0, [0, 1])], label="demo")
        assert repr(structure) == "<Structure 'demo' units=1 atoms=2>"


class TestLineage:
    def test_root_of_root(self, two_sites):
        assert two_sites.root is two_sites

    def test_subset_root(self, two_sites):
        child = two_sites.subset({0: [0, 1]})
        grandchild = child.subset({0: [0]})
        assert child.parent is two_sites
        assert grandchild.root is two_sites
        assert Structure.are_equivalent(grandchild, two_sites)

    def test_unrelated(self, two_sites, tetrahedral_site):
        assert not Structure.are_equivalent(two_sites, tetrahedral_site)

    def test_with_child_is_equivalent(self, two_sites):
        child = two_sites.subset({0: [0]})
        view = two_sites.with_child(child)
        assert view.child is child
        assert view is not two_sites
        assert Structure.are_equivalent(view, two_sites)
        assert Structure.are_equivalent(view, child)

    def test_with_child_shares_coordination(self, two_sites):
        table = two_sites.coordination
        view = two_sites.with_child(two_sites.subset({0: [0]}))
        assert view.coordination is table

    def test_with_foreign_child_raises(self, two_sites, tetrahedral_site):
        with pytest.raises(ValueError, match="same root"):
            two_sites.with_child(tetrahedral_site)

    def test_with_child_none(self, two_sites):
        assert two_sites.with_child(None).child is None


class TestSubset:
    def test_keeps_selected_elements(self, two_sites):
        child = two_sites.subset({0: [5, 6, 7, 99]})
        assert list(child.unit_map[0].elements) == [5, 6, 7]

    def test_drops_unlisted_units(self, tetrahedral_site):
        child = tetrahedral_site.subset({1: [1, 2]})
        assert list(child.unit_map) == [1]
        assert len(child.inter_unit_bonds) == 0

    def test_drops_empty_units(self, tetrahedral_site):
        child = tetrahedral_site.subset({0: [3], 1: [1]})
        assert list(child.unit_map) == [1]

    def test_intra_bonds_renumbered(self, two_sites):
        child = two_sites.subset({0: [5, 6, 7]})
        bonds = child.unit_map[0].bonds
        assert list(bonds.offset) == [0, 2, 3, 4]
        assert sorted(bonds.b[bonds.slots(0)]) == [1, 2]
        assert list(bonds.flags) == [BondFlag.METALLIC_COORDINATION] * 4

    def test_inter_bonds_renumbered(self, tetrahedral_site):
        child = tetrahedral_site.subset({0: [0], 1: [3, 4]})
        edges = child.inter_unit_bonds.edges
        assert {(e.unit_a, e.index_a, e.unit_b, e.index_b) for e in edges} == {
            (0, 0, 1, 0), (1, 0, 0, 0), (0, 0, 1, 1), (1, 1, 0, 0),
        }

    def test_subset_coordination_is_recomputed(self, two_sites):
        child = two_sites.subset({0: [5, 6, 7, 8, 9]})
        assert list(child.coordination.sites.numbers) == [4]

    def test_coarse_units_kept(self):
        structure = structure_from_bonds(
            np.zeros((4, 3)), [], unit_of=[0, 0, 1, 1], kinds={1: "gaussians"},
        )
        child = structure.subset({1: [3]})
        assert type(child.unit_map[1]).__name__ == "GaussiansUnit"
        assert list(child.unit_map[1].elements) == [3]


class TestInterUnitBonds:
    def test_from_bonds_stores_both_directions(self):
        bonds = InterUnitBonds.from_bonds([(0, 1, 2, 3, BondFlag.COVALENT)])
        assert len(bonds) == 2
        assert bonds.edge_count == 1
        (forward,) = bonds.get_edge_indices(1, 0)
        (backward,) = bonds.get_edge_indices(3, 2)
        assert bonds.edges[forward] == InterUnitEdge(0, 1, 2, 3, BondFlag.COVALENT)
        assert bonds.edges[backward] == InterUnitEdge(2, 3, 0, 1, BondFlag.COVALENT)

    def test_no_edges(self):
        assert InterUnitBonds().get_edge_indices(0, 0) == ()

    def test_same_unit_rejected(self):
        with pytest.raises(ValueError, match="two units"):
            InterUnitEdge(1, 0, 1, 2, BondFlag.COVALENT)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            InterUnitEdge(0, -1, 1, 0, BondFlag.COVALENT)
