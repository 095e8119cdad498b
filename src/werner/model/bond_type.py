"""Bond type flags and the coordinating-bond predicate."""

from __future__ import annotations

from enum import IntFlag


class BondFlag(IntFlag):
    """Bit flags describing the nature of a bond.

    A single bond may carry several flags at once, e.g. an aromatic
    covalent bond is ``COVALENT | AROMATIC``.
    """

    NONE = 0
    COVALENT = 0x1
    METALLIC_COORDINATION = 0x2
    HYDROGEN_BOND = 0x4
    DISULFIDE = 0x8
    AROMATIC = 0x10
    COMPUTED = 0x20


COORDINATING_FLAGS: BondFlag = BondFlag.COVALENT | BondFlag.METALLIC_COORDINATION
"""Flags that make a bond count towards a coordination number."""


def is_covalent(flag: int) -> bool:
    """Return ``True`` if *flag* has the covalent bit set."""
    return (int(flag) & BondFlag.COVALENT) != 0


def is_coordinating(flag: int) -> bool:
    """Return ``True`` if a bond with *flag* counts as coordinating.

    Covalent and metallic-coordination bonds are coordinating;
    hydrogen bonds and other weak-interaction flags are not.
    """
    return (int(flag) & COORDINATING_FLAGS) != 0
