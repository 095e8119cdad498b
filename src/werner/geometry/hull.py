"""Convex hulls of small 3-D point sets."""

from __future__ import annotations

import numpy as np
from scipy.spatial import ConvexHull, QhullError


def convex_hull(
    points: np.ndarray | list,
    *,
    rel_tol: float = 1e-6,
) -> np.ndarray | None:
    """Triangulate the convex hull of a 3-D point set.

    Degenerate inputs have no hull: fewer than four points, or points
    that are collinear or coplanar (to within *rel_tol* of the
    largest spread).  Triangles are wound counter-clockwise when seen
    from outside, so their normals point away from the hull.

    Args:
        points: Array of shape ``(n, 3)``.
        rel_tol: Smallest allowed ratio of the third to the first
            singular value of the centred points.

    Returns:
        Integer array of shape ``(n_triangles, 3)`` indexing into
        *points*, or ``None`` if no hull can be formed.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 3)
    if len(pts) < 4:
        return None

    centroid = pts.mean(axis=0)
    singular = np.linalg.svd(pts - centroid, compute_uv=False)
    if singular[0] <= 0.0 or singular[2] <= rel_tol * singular[0]:
        return None

    try:
        hull = ConvexHull(pts)
    except QhullError:
        return None

    simplices = np.array(hull.simplices, dtype=np.int64)
    return _orient_outward(pts, simplices, centroid)


def _orient_outward(
    pts: np.ndarray,
    simplices: np.ndarray,
    inside: np.ndarray,
) -> np.ndarray:
    """Flip triangles whose normal points towards *inside*."""
    v0 = pts[simplices[:, 0]]
    v1 = pts[simplices[:, 1]]
    v2 = pts[simplices[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    outward = (v0 + v1 + v2) / 3.0 - inside
    flip = np.einsum("ij,ij->i", normals, outward) < 0
    simplices[flip] = simplices[flip][:, [0, 2, 1]]
    return simplices
