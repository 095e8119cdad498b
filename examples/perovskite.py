"""Render TiO6 coordination polyhedra in a 2x2x2 SrTiO3 supercell.

Ti-O contacts shorter than 2.2 Angstrom are bonded as metallic
coordination.  Titanium atoms on the far faces of the supercell lose
some of their oxygens, so the coordination numbers range from three
(no polyhedron) to six.
"""

from pathlib import Path

import numpy as np

from werner import (
    BondFlag,
    CoordinationPolyhedronParams,
    create_coordination_polyhedron_mesh,
    render_polyhedra_mpl,
    structure_from_bonds,
)

OUTPUT = Path(__file__).resolve().parent / "perovskite.pdf"

A = 3.905
FRAC_POSITIONS = {
    "Sr": [(0.0, 0.0, 0.0)],
    "Ti": [(0.5, 0.5, 0.5)],
    "O": [(0.5, 0.5, 0.0), (0.5, 0.0, 0.5), (0.0, 0.5, 0.5)],
}
UNIT_IDS = {"Sr": 0, "Ti": 1, "O": 2}


def supercell(n: int = 2) -> tuple[list[str], np.ndarray]:
    species = []
    coords = []
    for dx in range(n):
        for dy in range(n):
            for dz in range(n):
                offset = np.array([dx, dy, dz]) * A
                for sp, positions in FRAC_POSITIONS.items():
                    for frac in positions:
                        species.append(sp)
                        coords.append(np.array(frac) * A + offset)
    return species, np.array(coords)


def ti_o_bonds(species, coords, cutoff=2.2):
    ti = [i for i, sp in enumerate(species) if sp == "Ti"]
    o = [i for i, sp in enumerate(species) if sp == "O"]
    dist = np.linalg.norm(coords[ti][:, None, :] - coords[o][None, :, :], axis=-1)
    return [
        (ti[a], o[b], BondFlag.METALLIC_COORDINATION)
        for a, b in zip(*np.nonzero(dist < cutoff))
    ]


def main():
    species, coords = supercell()
    structure = structure_from_bonds(
        coords,
        ti_o_bonds(species, coords),
        unit_of=[UNIT_IDS[sp] for sp in species],
        label="SrTiO3 2x2x2",
    )
    sites = structure.coordination.sites
    print(f"{structure!r}: {sites.count} coordination sites")
    print(f"Coordination numbers: {sorted(int(n) for n in sites.numbers)}")

    params = CoordinationPolyhedronParams(min_coordination=6)
    mesh = create_coordination_polyhedron_mesh(structure, params)
    print(f"Octahedra: {len(mesh.group_ids)}, triangles: {mesh.triangle_count}")

    tilt = np.array([
        [0.866, 0.0, 0.5],
        [0.25, 0.866, -0.433],
        [-0.433, 0.5, 0.75],
    ])
    render_polyhedra_mpl(mesh, OUTPUT, rotation=tilt, alpha=0.4, show=False)
    print(f"Rendered to {OUTPUT}")


if __name__ == "__main__":
    main()
