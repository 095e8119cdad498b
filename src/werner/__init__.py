"""Werner: coordination sites and coordination polyhedra for molecular structures.

Werner finds the atoms of a structure that act as coordination centres,
builds convex-hull polyhedra around them as pickable triangle meshes,
and maps picks and selections between the meshes and the structure.

Example usage::

    from werner import (
        create_coordination_polyhedron_mesh,
        structure_from_bonds,
    )

    structure = structure_from_bonds(coords, bonds)
    sites = structure.coordination.sites
    mesh = create_coordination_polyhedron_mesh(structure)
"""

from werner._constants import MIN_COORDINATION
from werner.construction import load_params, save_params, structure_from_bonds
from werner.coordination import (
    EMPTY_COORDINATION,
    Coordination,
    CoordinationSites,
    bond_count,
    compute_coordination,
)
from werner.geometry import Mesh, MeshBuilder, convex_hull
from werner.model import (
    EMPTY_LOCI,
    AtomicUnit,
    BondFlag,
    Conformation,
    CoordinationPolyhedronParams,
    ElementLocation,
    ElementLoci,
    GaussiansUnit,
    InterUnitBonds,
    InterUnitEdge,
    Interval,
    IntraUnitBonds,
    LociElement,
    PickingId,
    SpheresUnit,
    Structure,
    StructureLoci,
)
from werner.polyhedron_mesh import (
    CoordinationPolyhedronVisual,
    coordination_polyhedron_locations,
    create_coordination_polyhedron_mesh,
    each_coordination_polyhedron,
    get_coordination_polyhedron_loci,
    needs_geometry_update,
)
from werner.render_mpl import render_polyhedra_mpl

__all__ = [
    "AtomicUnit",
    "BondFlag",
    "Conformation",
    "Coordination",
    "CoordinationPolyhedronParams",
    "CoordinationPolyhedronVisual",
    "CoordinationSites",
    "EMPTY_COORDINATION",
    "EMPTY_LOCI",
    "ElementLocation",
    "ElementLoci",
    "GaussiansUnit",
    "InterUnitBonds",
    "InterUnitEdge",
    "Interval",
    "IntraUnitBonds",
    "LociElement",
    "MIN_COORDINATION",
    "Mesh",
    "MeshBuilder",
    "PickingId",
    "SpheresUnit",
    "Structure",
    "StructureLoci",
    "bond_count",
    "compute_coordination",
    "convex_hull",
    "coordination_polyhedron_locations",
    "create_coordination_polyhedron_mesh",
    "each_coordination_polyhedron",
    "get_coordination_polyhedron_loci",
    "load_params",
    "needs_geometry_update",
    "render_polyhedra_mpl",
    "save_params",
    "structure_from_bonds",
]
