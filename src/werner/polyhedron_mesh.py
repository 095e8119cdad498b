"""Coordination polyhedra as pickable triangle meshes.

For every coordination site in the drawn band, the convex hull of its
ligand positions becomes one group of triangles.  The group id of each
triangle is the site's index in the coordination table, which is what
lets :func:`get_coordination_polyhedron_loci` map a pick back to the
site atom and :func:`each_coordination_polyhedron` map a selection to
the groups to highlight.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from werner.geometry import Mesh, MeshBuilder, convex_hull
from werner.model import (
    EMPTY_LOCI,
    AtomicUnit,
    CoordinationPolyhedronParams,
    ElementLocation,
    ElementLoci,
    GaussiansUnit,
    Interval,
    LocationIterator,
    Loci,
    LociElement,
    PickingId,
    SpheresUnit,
    Structure,
    StructureLoci,
    is_element_loci,
)

logger = logging.getLogger(__name__)

# Vertices reserved per site; hulls with more faces grow the buffers.
_VERTICES_PER_SITE = 4


def _in_child(structure: Structure, unit_id: int, unit_index: int) -> bool:
    child = structure.child
    if child is None:
        return True
    child_unit = child.unit_map.get(unit_id)
    if child_unit is None:
        return False
    element = int(structure.unit_map[unit_id].elements[unit_index])
    return child_unit.has_element(element)


def render_structure(
    structure: Structure,
    params: CoordinationPolyhedronParams,
) -> Structure:
    """Return the structure geometry should be built from.

    With ``include_parent`` set, a filtered structure is drawn in the
    context of its parent, restricted to the filtered atoms through
    the parent's :attr:`~werner.model.Structure.child`.
    """
    if params.include_parent and structure.parent is not None:
        return structure.parent.with_child(structure)
    return structure


def create_coordination_polyhedron_mesh(
    structure: Structure,
    params: CoordinationPolyhedronParams | None = None,
    mesh: Mesh | None = None,
) -> Mesh:
    """Build one convex-hull polyhedron per coordination site.

    Sites whose coordination number lies outside
    ``[params.min_coordination, params.max_coordination]`` are not
    drawn.  When *structure* has a child view, sites whose atom is
    not part of the child are not drawn either.  Sites whose ligands
    do not span a volume (too few, collinear or coplanar) have no hull
    and are skipped; they remain in the coordination table.

    Args:
        structure: The structure to draw.
        params: Drawing parameters; defaults are used when ``None``.
        mesh: A previous mesh whose size seeds the buffer capacity.

    Returns:
        The polyhedra mesh.  Triangle groups are site indices.
    """
    if params is None:
        params = CoordinationPolyhedronParams()
    coordination = structure.coordination
    sites = coordination.sites

    count = sites.count * _VERTICES_PER_SITE
    builder = MeshBuilder(count, mesh)

    skipped = 0
    for i in range(sites.count):
        if not params.in_band(int(sites.numbers[i])):
            continue
        if not _in_child(structure, int(sites.unit_ids[i]), int(sites.indices[i])):
            continue

        positions: list[np.ndarray] = []
        coordination.each_ligand(i, lambda loc: positions.append(loc.position()))

        hull = convex_hull(positions)
        if hull is None:
            skipped += 1
            continue

        builder.current_group = i
        for a, b, c in hull:
            builder.add_triangle(positions[a], positions[b], positions[c])

    if skipped:
        logger.debug("skipped %d site(s) with degenerate ligand geometry", skipped)
    return builder.get_mesh()


def coordination_polyhedron_locations(structure: Structure) -> LocationIterator:
    """Return a location iterator over the polyhedron groups of *structure*.

    Group ``i`` resolves to the atom of coordination site ``i``.  The
    returned location is a shared cursor; out-of-range groups leave it
    unchanged.
    """
    sites = structure.coordination.sites
    location = ElementLocation(structure)

    def get_location(group_index: int) -> ElementLocation:
        if 0 <= group_index < sites.count:
            unit = structure.unit_map[int(sites.unit_ids[group_index])]
            location.unit = unit
            location.element = int(unit.elements[int(sites.indices[group_index])])
        return location

    return LocationIterator(sites.count, 1, get_location)


def get_coordination_polyhedron_loci(
    picking_id: PickingId,
    structure: Structure,
    object_id: int,
) -> Loci:
    """Translate a pick on the polyhedra into a structural locus.

    Args:
        picking_id: The pick reported by the renderer.
        structure: The rendered structure.
        object_id: The id of the rendered polyhedra object.

    Returns:
        :data:`~werner.model.EMPTY_LOCI` if the pick hit another
        object; the whole structure if the pick has no group or a
        group that no longer exists; otherwise the site atom.
    """
    if picking_id.object_id != object_id:
        return EMPTY_LOCI
    if picking_id.is_null_group:
        return StructureLoci(structure)

    group = picking_id.group_id
    sites = structure.coordination.sites
    if 0 <= group < sites.count:
        unit = structure.unit_map[int(sites.unit_ids[group])]
        return ElementLoci(
            structure, (LociElement(unit, (int(sites.indices[group]),)),),
        )
    return StructureLoci(structure)


def each_coordination_polyhedron(
    loci: Loci,
    structure: Structure,
    apply: Callable[[Interval], bool],
) -> bool:
    """Apply *apply* to the polyhedron group of every selected site.

    Args:
        loci: The selection.
        structure: The rendered structure.
        apply: Called with a single-group :class:`~werner.model.Interval`
            per selected site atom; returns whether anything changed.

    Returns:
        ``True`` if any call to *apply* returned ``True``.  ``False``
        without calling *apply* if *loci* is not an atom selection or
        belongs to an unrelated structure.
    """
    if not is_element_loci(loci):
        return False
    if not Structure.are_equivalent(loci.structure, structure):
        return False

    coordination = structure.coordination
    changed = False
    for entry in loci.elements:
        unit = entry.unit
        match unit:
            case AtomicUnit():
                pass
            case SpheresUnit() | GaussiansUnit():
                continue
        for index in entry.indices:
            group = coordination.get_site_index(unit, int(unit.elements[index]))
            if group >= 0 and apply(Interval.of_singleton(group)):
                changed = True
    return changed


def needs_geometry_update(
    new: CoordinationPolyhedronParams,
    current: CoordinationPolyhedronParams,
) -> bool:
    """Return ``True`` if switching from *current* to *new* needs a rebuild."""
    return (
        new.min_coordination != current.min_coordination
        or new.max_coordination != current.max_coordination
    )


class CoordinationPolyhedronVisual:
    """Polyhedra geometry for one rendered structure.

    Keeps the mesh in step with the structure and parameters and
    answers picking and selection queries against it.

    Args:
        object_id: Render object id used to recognise own picks.
        params: Initial drawing parameters.
    """

    def __init__(
        self,
        object_id: int,
        params: CoordinationPolyhedronParams | None = None,
    ) -> None:
        self.object_id = object_id
        self.params = params if params is not None else CoordinationPolyhedronParams()
        self.structure: Structure | None = None
        self.mesh: Mesh | None = None
        # Structure as passed to update(), before render_structure().
        self._source: Structure | None = None

    def update(
        self,
        structure: Structure | None = None,
        params: CoordinationPolyhedronParams | None = None,
    ) -> bool:
        """Update the structure and/or parameters.

        The drawn structure is re-resolved through
        :func:`render_structure` when a new structure is passed or when
        ``include_parent`` changes.  Passing the same structure again
        does not trigger a rebuild.

        Returns:
            ``True`` if the mesh was rebuilt.

        Raises:
            ValueError: If no structure has ever been set.
        """
        rebuild = self.mesh is None
        resolve = False
        if params is not None:
            rebuild = rebuild or needs_geometry_update(params, self.params)
            resolve = params.include_parent != self.params.include_parent
            self.params = params
        if structure is not None and structure is not self._source:
            self._source = structure
            resolve = True
        if self._source is None:
            raise ValueError("no structure has been set")
        if resolve:
            resolved = render_structure(self._source, self.params)
            rebuild = rebuild or resolved is not self.structure
            self.structure = resolved
        if rebuild:
            self.mesh = create_coordination_polyhedron_mesh(
                self.structure, self.params, self.mesh,
            )
        return rebuild

    def get_loci(self, picking_id: PickingId) -> Loci:
        if self.structure is None:
            return EMPTY_LOCI
        return get_coordination_polyhedron_loci(
            picking_id, self.structure, self.object_id,
        )

    def mark(self, loci: Loci, apply: Callable[[Interval], bool]) -> bool:
        if self.structure is None:
            return False
        return each_coordination_polyhedron(loci, self.structure, apply)

    def locations(self) -> LocationIterator:
        if self.structure is None:
            raise ValueError("no structure has been set")
        return coordination_polyhedron_locations(self.structure)
