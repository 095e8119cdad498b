"""Tests for werner.model.unit — units, conformations and CSR bonds."""

import numpy as np
import pytest

from werner.model import (
    AtomicUnit,
    BondFlag,
    Conformation,
    GaussiansUnit,
    IntraUnitBonds,
    SpheresUnit,
)


def _chain_bonds():
    """Bonds 0-1 and 1-2 in CSR form."""
    return IntraUnitBonds(
        offset=[0, 1, 3, 4],
        b=[1, 0, 2, 1],
        flags=[BondFlag.COVALENT] * 4,
    )


class TestConformation:
    def test_position_identity(self):
        conf = Conformation(np.array([[1.0, 2.0, 3.0]]))
        np.testing.assert_allclose(conf.position(0), [1.0, 2.0, 3.0])

    def test_position_transformed(self):
        rotation = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        conf = Conformation(
            np.array([[1.0, 0.0, 0.0]]), rotation, np.array([0.0, 0.0, 5.0]),
        )
        np.testing.assert_allclose(conf.position(0), [0.0, 1.0, 5.0])

    def test_position_returns_copy(self):
        conf = Conformation(np.zeros((1, 3)))
        p = conf.position(0)
        p[0] = 9.0
        assert conf.coords[0, 0] == 0.0

    def test_bad_coords_shape(self):
        with pytest.raises(ValueError, match="coords"):
            Conformation(np.zeros((3, 2)))

    def test_bad_rotation_shape(self):
        with pytest.raises(ValueError, match="rotation"):
            Conformation(np.zeros((1, 3)), rotation=np.eye(2))

    def test_bad_translation_shape(self):
        with pytest.raises(ValueError, match="translation"):
            Conformation(np.zeros((1, 3)), translation=np.zeros(2))


class TestIntraUnitBonds:
    def test_slots(self):
        bonds = _chain_bonds()
        assert list(bonds.slots(1)) == [1, 2]
        assert bonds.atom_count == 3
        assert bonds.edge_count == 2

    def test_empty(self):
        bonds = IntraUnitBonds.empty(4)
        assert bonds.atom_count == 4
        assert list(bonds.slots(2)) == []

    def test_arrays_read_only(self):
        with pytest.raises(ValueError):
            _chain_bonds().b[0] = 2

    def test_input_not_modified(self):
        offset = np.array([0, 0], dtype=np.int64)
        IntraUnitBonds(offset=offset, b=[], flags=[])
        assert offset.flags.writeable

    def test_offset_must_start_at_zero(self):
        with pytest.raises(ValueError, match="start at 0"):
            IntraUnitBonds(offset=[1, 1], b=[], flags=[])

    def test_offset_non_decreasing(self):
        with pytest.raises(ValueError, match="non-decreasing"):
            IntraUnitBonds(offset=[0, 2, 1, 2], b=[1, 0], flags=[1, 1])

    def test_offset_end_matches_slots(self):
        with pytest.raises(ValueError, match="slots"):
            IntraUnitBonds(offset=[0, 1, 1], b=[1, 0], flags=[1, 1])

    def test_flags_length(self):
        with pytest.raises(ValueError, match="flags"):
            IntraUnitBonds(offset=[0, 1, 2], b=[1, 0], flags=[1])

    def test_neighbour_out_of_range(self):
        with pytest.raises(ValueError, match="out-of-range"):
            IntraUnitBonds(offset=[0, 1, 2], b=[1, 2], flags=[1, 1])


class TestUnits:
    def test_atomic_unit(self):
        unit = AtomicUnit(3, [2, 5, 9], Conformation(np.zeros((10, 3))), _chain_bonds())
        assert unit.id == 3
        assert unit.has_element(5)
        assert not unit.has_element(4)
        assert unit.index_of(9) == 2
        assert unit.index_of(10) == -1

    def test_bond_count_mismatch(self):
        with pytest.raises(ValueError, match="bonds describe"):
            AtomicUnit(0, [0, 1], Conformation(np.zeros((2, 3))), _chain_bonds())

    def test_elements_must_increase(self):
        with pytest.raises(ValueError, match="increasing"):
            SpheresUnit(0, [2, 1], Conformation(np.zeros((3, 3))))

    def test_negative_unit_id(self):
        with pytest.raises(ValueError, match="unit id"):
            AtomicUnit(-1, [0], Conformation(np.zeros((1, 3))), IntraUnitBonds.empty(1))

    def test_coarse_units(self):
        conf = Conformation(np.zeros((4, 3)))
        spheres = SpheresUnit(1, [0, 1], conf)
        gaussians = GaussiansUnit(2, [2, 3], conf)
        assert spheres.has_element(1)
        assert gaussians.index_of(3) == 1
