"""Demo script: find a coordination site, build its polyhedron and pick it."""

import numpy as np

from werner import (
    PickingId,
    create_coordination_polyhedron_mesh,
    each_coordination_polyhedron,
    get_coordination_polyhedron_loci,
    structure_from_bonds,
)

OBJECT_ID = 1


def main():
    # Square antiprism around a metal at the origin.
    angles = np.arange(4) * np.pi / 2
    upper = np.column_stack([np.cos(angles), np.sin(angles), np.full(4, 0.6)])
    lower = np.column_stack([
        np.cos(angles + np.pi / 4), np.sin(angles + np.pi / 4), np.full(4, -0.6),
    ])
    coords = np.vstack([[0.0, 0.0, 0.0], upper, lower])
    structure = structure_from_bonds(coords, [(0, i) for i in range(1, 9)])

    sites = structure.coordination.sites
    print(f"Sites: {sites.count}, coordination numbers: {list(sites.numbers)}")

    mesh = create_coordination_polyhedron_mesh(structure)
    print(f"Mesh: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles")

    loci = get_coordination_polyhedron_loci(PickingId(OBJECT_ID, 0), structure, OBJECT_ID)
    print(f"Picked: {[loc.key() for loc in loci.locations()]}")

    each_coordination_polyhedron(
        loci, structure, lambda interval: print(f"Groups: {list(interval)}") or True,
    )


if __name__ == "__main__":
    main()
