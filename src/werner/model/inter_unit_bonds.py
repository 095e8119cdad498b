from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class InterUnitEdge:
    """One direction of a bond between atoms of two different units.

    Attributes:
        unit_a: Id of the unit owning the source atom.
        index_a: Unit index of the source atom.
        unit_b: Id of the unit owning the target atom.
        index_b: Unit index of the target atom.
        flag: :class:`~werner.model.bond_type.BondFlag` bits.
    """

    unit_a: int
    index_a: int
    unit_b: int
    index_b: int
    flag: int

    def __post_init__(self) -> None:
        if self.unit_a == self.unit_b:
            raise ValueError(
                f"inter-unit edge must join two units, got unit {self.unit_a} "
                "on both ends"
            )
        if self.index_a < 0 or self.index_b < 0:
            raise ValueError(
                f"unit indices must be non-negative, got "
                f"({self.index_a}, {self.index_b})"
            )

    def reversed(self) -> InterUnitEdge:
        return InterUnitEdge(
            self.unit_b, self.index_b, self.unit_a, self.index_a, self.flag,
        )


class InterUnitBonds:
    """Bonds between units, addressable by ``(unit index, unit id)``.

    Edges are directional; an undirected bond is stored once from each
    end so that :meth:`get_edge_indices` sees it from both atoms.  Use
    :meth:`from_bonds` to build from undirected bonds.

    Args:
        edges: Directed edges.  Order is preserved and defines the
            enumeration order of :meth:`get_edge_indices`.
    """

    def __init__(self, edges: Iterable[InterUnitEdge] = ()) -> None:
        self.edges: tuple[InterUnitEdge, ...] = tuple(edges)
        by_atom: dict[tuple[int, int], list[int]] = defaultdict(list)
        for i, edge in enumerate(self.edges):
            by_atom[(edge.unit_a, edge.index_a)].append(i)
        self._by_atom: dict[tuple[int, int], tuple[int, ...]] = {
            key: tuple(indices) for key, indices in by_atom.items()
        }

    @classmethod
    def from_bonds(
        cls,
        bonds: Iterable[tuple[int, int, int, int, int]],
    ) -> InterUnitBonds:
        """Build from undirected ``(unit_a, index_a, unit_b, index_b, flag)`` bonds."""
        edges: list[InterUnitEdge] = []
        for unit_a, index_a, unit_b, index_b, flag in bonds:
            edge = InterUnitEdge(unit_a, index_a, unit_b, index_b, int(flag))
            edges.append(edge)
            edges.append(edge.reversed())
        return cls(edges)

    def __len__(self) -> int:
        return len(self.edges)

    @property
    def edge_count(self) -> int:
        """Number of undirected bonds, assuming both directions are stored."""
        return len(self.edges) // 2

    def get_edge_indices(self, index: int, unit_id: int) -> tuple[int, ...]:
        """Return indices into :attr:`edges` of edges leaving an atom.

        Returns an empty tuple when the atom has no inter-unit bonds.
        """
        return self._by_atom.get((unit_id, index), ())
