"""Generate static images for the documentation."""

from pathlib import Path

import numpy as np

from werner import (
    BondFlag,
    create_coordination_polyhedron_mesh,
    render_polyhedra_mpl,
    structure_from_bonds,
)

OUT = Path(__file__).resolve().parent

VIEW = np.array([
    [0.866, 0.0, 0.5],
    [0.25, 0.866, -0.433],
    [-0.433, 0.5, 0.75],
])


def gallery_structure():
    """One centre each for coordination numbers four, six and eight."""
    tetra = np.array([
        [1.0, 1.0, 1.0], [1.0, -1.0, -1.0], [-1.0, 1.0, -1.0], [-1.0, -1.0, 1.0],
    ]) / np.sqrt(3.0)
    octa = np.vstack([np.eye(3), -np.eye(3)])
    cube = np.array(
        [[x, y, z] for x in (-1, 1) for y in (-1, 1) for z in (-1, 1)], dtype=float,
    ) / np.sqrt(3.0)

    coords = []
    bonds = []
    for shift, ligands in zip((-3.0, 0.0, 3.0), (tetra, octa, cube)):
        centre = len(coords)
        coords.append([shift, 0.0, 0.0])
        for ligand in ligands:
            bonds.append((centre, len(coords), BondFlag.METALLIC_COORDINATION))
            coords.append(ligand + [shift, 0.0, 0.0])
    return structure_from_bonds(np.array(coords), bonds, label="gallery")


def generate_docs_images() -> None:
    structure = gallery_structure()
    mesh = create_coordination_polyhedron_mesh(structure)

    render_polyhedra_mpl(
        mesh, OUT / "gallery.svg", show=False,
        rotation=VIEW, figsize=(6, 2.5), dpi=150,
    )
    print(f"  wrote {OUT / 'gallery.svg'}")

    render_polyhedra_mpl(
        mesh, OUT / "gallery_highlight.svg", show=False,
        rotation=VIEW, figsize=(6, 2.5), dpi=150,
        colour=(0.6, 0.7, 0.9), highlight=[1],
    )
    print(f"  wrote {OUT / 'gallery_highlight.svg'}")


if __name__ == "__main__":
    generate_docs_images()
