"""Static matplotlib preview of polyhedra meshes.

Triangles are projected orthographically along the viewing direction,
sorted back-to-front and drawn as a single ``PolyCollection``
(painter's algorithm).  Faces are shaded by how directly they face
the viewer.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.collections import PolyCollection
from matplotlib.figure import Figure

from werner.geometry import Mesh
from werner.model import (
    CmapSpec,
    Colour,
    normalise_colour,
    resolve_cmap,
    with_alpha,
)


def _face_colours(
    mesh: Mesh,
    rotated_normals: np.ndarray,
    *,
    colour: Colour | None,
    cmap: CmapSpec,
    alpha: float,
    shading: float,
    highlight: frozenset[int],
    highlight_colour: Colour,
) -> np.ndarray:
    """Return shaded RGBA per triangle, shape ``(n_triangles, 4)``."""
    groups = mesh.triangle_groups
    if colour is not None:
        base = np.tile(normalise_colour(colour), (len(groups), 1))
    else:
        fn = resolve_cmap(cmap)
        distinct = mesh.group_ids
        span = max(len(distinct) - 1, 1)
        lookup = {int(g): fn(k / span) for k, g in enumerate(distinct)}
        base = np.array([lookup[int(g)] for g in groups], dtype=float).reshape(-1, 3)

    if highlight:
        mask = np.isin(groups, list(highlight))
        base[mask] = normalise_colour(highlight_colour)

    cos_angle = np.abs(rotated_normals[:, 2])
    factor = 1.0 - shading * 0.6 * (1.0 - cos_angle)
    shaded = np.clip(base * factor[:, np.newaxis], 0.0, 1.0)
    return np.column_stack([shaded, np.full(len(shaded), alpha)])


def _draw_mesh(
    ax: Axes,
    mesh: Mesh,
    rotation: np.ndarray,
    *,
    colour: Colour | None,
    cmap: CmapSpec,
    alpha: float,
    shading: float,
    edge_colour: Colour,
    edge_width: float,
    highlight: frozenset[int],
    highlight_colour: Colour,
) -> None:
    ax.set_aspect("equal")
    ax.set_axis_off()
    if mesh.triangle_count == 0:
        ax.set_xlim(-1.0, 1.0)
        ax.set_ylim(-1.0, 1.0)
        return

    rotated = mesh.vertices @ rotation.T
    triangles = rotated[mesh.indices]  # (n_tri, 3, 3)
    normals = mesh.normals[mesh.indices[:, 0]] @ rotation.T

    rgba = _face_colours(
        mesh, normals,
        colour=colour, cmap=cmap, alpha=alpha, shading=shading,
        highlight=highlight, highlight_colour=highlight_colour,
    )

    # Back-to-front: larger z is closer to the viewer.
    order = np.argsort(triangles[:, :, 2].mean(axis=1), kind="stable")
    pc = PolyCollection(
        triangles[order][:, :, :2],
        closed=True,
        facecolors=rgba[order],
        edgecolors=[with_alpha(edge_colour, 1.0)],
        linewidths=edge_width,
    )
    ax.add_collection(pc)

    xy = rotated[:, :2]
    centre = (xy.max(axis=0) + xy.min(axis=0)) / 2
    half = max(float((xy.max(axis=0) - xy.min(axis=0)).max()) / 2, 1e-6) * 1.1
    ax.set_xlim(centre[0] - half, centre[0] + half)
    ax.set_ylim(centre[1] - half, centre[1] + half)


def render_polyhedra_mpl(
    mesh: Mesh,
    output: str | Path | None = None,
    *,
    ax: Axes | None = None,
    rotation: np.ndarray | None = None,
    colour: Colour | None = None,
    cmap: CmapSpec = "viridis",
    alpha: float = 0.6,
    shading: float = 0.5,
    edge_colour: Colour = (0.15, 0.15, 0.15),
    edge_width: float = 0.5,
    highlight: Iterable[int] | None = None,
    highlight_colour: Colour = "gold",
    figsize: tuple[float, float] = (5.0, 5.0),
    dpi: int = 150,
    background: Colour = "white",
    show: bool | None = None,
) -> Figure:
    """Render a polyhedra mesh as a static matplotlib figure.

    Example usage::

        mesh = create_coordination_polyhedron_mesh(structure)
        render_polyhedra_mpl(mesh, "polyhedra.png")

        # Highlight the polyhedra of selected sites:
        groups = []
        each_coordination_polyhedron(
            selection, structure,
            lambda interval: groups.extend(interval) or True,
        )
        render_polyhedra_mpl(mesh, highlight=groups)

    Args:
        mesh: The mesh to draw.
        output: Optional file path to save the figure to.  Ignored
            when *ax* is provided.
        ax: Optional axes to draw into.  The caller keeps control of
            the parent figure; *output*, *figsize*, *dpi*,
            *background* and *show* are ignored.
        rotation: 3x3 rotation applied before projecting along z.
            ``None`` looks down the z axis.
        colour: One colour for all faces.  ``None`` colours each
            group from *cmap*.
        cmap: Colourmap for per-group colouring.
        alpha: Face opacity in ``[0, 1]``.
        shading: Strength of the orientation shading in ``[0, 1]``.
        edge_colour: Colour of triangle edges.
        edge_width: Line width of triangle edges (points).
        highlight: Group ids to draw in *highlight_colour*.
        highlight_colour: Colour for highlighted groups.
        figsize: Figure size in inches.
        dpi: Resolution for raster output formats.
        background: Figure background colour.
        show: Whether to call ``plt.show()``.  Defaults to ``True``
            when *output* is ``None``.

    Returns:
        The matplotlib :class:`~matplotlib.figure.Figure`.

    Raises:
        ValueError: If *alpha*, *shading* or *rotation* are invalid.
    """
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be between 0.0 and 1.0, got {alpha}")
    if not 0.0 <= shading <= 1.0:
        raise ValueError(f"shading must be between 0.0 and 1.0, got {shading}")
    rotation = np.eye(3) if rotation is None else np.asarray(rotation, dtype=float)
    if rotation.shape != (3, 3):
        raise ValueError(f"rotation must have shape (3, 3), got {rotation.shape}")

    draw_kwargs = dict(
        colour=colour, cmap=cmap, alpha=alpha, shading=shading,
        edge_colour=edge_colour, edge_width=edge_width,
        highlight=frozenset(int(g) for g in (highlight or ())),
        highlight_colour=highlight_colour,
    )

    if ax is not None:
        fig = ax.get_figure()
        if not isinstance(fig, Figure):
            raise ValueError("ax is not attached to a Figure")
        _draw_mesh(ax, mesh, rotation, **draw_kwargs)
        return fig

    fig, ax = plt.subplots(1, 1, figsize=figsize, dpi=dpi)
    fig.set_facecolor(normalise_colour(background))
    _draw_mesh(ax, mesh, rotation, **draw_kwargs)
    fig.tight_layout()

    if output is not None:
        fig.savefig(str(output), dpi=dpi, bbox_inches="tight")

    if show is None:
        show = output is None

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
