"""Tests for werner.model.bond_type — bond flag classification."""

import pytest

from werner.model import BondFlag, is_coordinating, is_covalent


class TestIsCoordinating:
    @pytest.mark.parametrize("flag", [
        BondFlag.COVALENT,
        BondFlag.METALLIC_COORDINATION,
        BondFlag.COVALENT | BondFlag.AROMATIC,
        BondFlag.COVALENT | BondFlag.DISULFIDE,
        BondFlag.METALLIC_COORDINATION | BondFlag.COMPUTED,
    ])
    def test_coordinating(self, flag):
        assert is_coordinating(flag)

    @pytest.mark.parametrize("flag", [
        BondFlag.NONE,
        BondFlag.HYDROGEN_BOND,
        BondFlag.AROMATIC,
        BondFlag.DISULFIDE,
        BondFlag.COMPUTED | BondFlag.HYDROGEN_BOND,
    ])
    def test_not_coordinating(self, flag):
        assert not is_coordinating(flag)

    def test_plain_int(self):
        assert is_coordinating(3)
        assert not is_coordinating(4)


class TestIsCovalent:
    def test_covalent(self):
        assert is_covalent(BondFlag.COVALENT | BondFlag.AROMATIC)

    def test_metallic_is_not_covalent(self):
        assert not is_covalent(BondFlag.METALLIC_COORDINATION)
