"""Core data model for werner: units, bonds, structures and loci.

Everything is re-exported here so that ``from werner.model import
Structure`` works.
"""

from werner.model._util import cantor_pairing
from werner.model.bond_type import (
    COORDINATING_FLAGS,
    BondFlag,
    is_coordinating,
    is_covalent,
)
from werner.model.colour import (
    CmapSpec,
    Colour,
    normalise_colour,
    resolve_cmap,
    with_alpha,
)
from werner.model.inter_unit_bonds import InterUnitBonds, InterUnitEdge
from werner.model.location import (
    EMPTY_LOCI,
    ElementLocation,
    ElementLoci,
    EmptyLoci,
    LocationIterator,
    Loci,
    LociElement,
    StructureLoci,
    is_element_loci,
)
from werner.model.picking import Interval, PickingId
from werner.model.polyhedron_params import CoordinationPolyhedronParams
from werner.model.structure import Structure
from werner.model.unit import (
    AtomicUnit,
    Conformation,
    GaussiansUnit,
    IntraUnitBonds,
    SpheresUnit,
    Unit,
)

__all__ = [
    "AtomicUnit",
    "BondFlag",
    "COORDINATING_FLAGS",
    "CmapSpec",
    "Colour",
    "Conformation",
    "CoordinationPolyhedronParams",
    "EMPTY_LOCI",
    "ElementLocation",
    "ElementLoci",
    "EmptyLoci",
    "GaussiansUnit",
    "InterUnitBonds",
    "InterUnitEdge",
    "Interval",
    "IntraUnitBonds",
    "LocationIterator",
    "Loci",
    "LociElement",
    "PickingId",
    "SpheresUnit",
    "Structure",
    "StructureLoci",
    "Unit",
    "cantor_pairing",
    "is_coordinating",
    "is_covalent",
    "is_element_loci",
    "normalise_colour",
    "resolve_cmap",
    "with_alpha",
]
